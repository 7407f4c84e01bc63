"""Per-author content totals."""

from pydantic import Field

from qna.domain.model.common import DomainModel


class ContentTotals(DomainModel):
    """Totals over one author's live questions or answers.

    ``total_views`` is only tracked for questions and ``accepted_count``
    only for answers; the other stays 0.
    """

    count: int = Field(default=0, ge=0)
    total_score: int = 0
    total_views: int = Field(default=0, ge=0)
    accepted_count: int = Field(default=0, ge=0)
