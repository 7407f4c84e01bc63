"""Tag usage statistics.

Tags have no lifecycle of their own; they exist as long as a live
question uses them.
"""

from pydantic import Field

from qna.domain.model.common import DomainModel
from qna.domain.value import TagName


class TagUsage(DomainModel):
    """A tag and the number of live questions using it."""

    name: TagName
    question_count: int = Field(ge=0)


class TagStats(DomainModel):
    """Totals over the live questions carrying one tag."""

    name: TagName
    question_count: int = Field(default=0, ge=0)
    total_score: int = 0
    total_views: int = Field(default=0, ge=0)
