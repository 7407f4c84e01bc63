"""Question aggregate root.

Questions carry their own vote ledger and a pointer to at most one
accepted answer.
"""

from typing import Optional

from pydantic import Field

from qna.domain.model.votable import VotableItem
from qna.domain.value import AnswerId, QuestionId, TagName


class Question(VotableItem):
    """Question aggregate root.

    Acceptance invariant: when ``accepted_answer_id`` is set, that answer
    belongs to this question and is the only one with ``is_accepted``.
    """

    id: QuestionId
    title: str = Field(min_length=15, max_length=300)
    description: str = Field(min_length=30)
    tags: list[TagName] = Field(min_length=1, max_length=5)
    views: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    is_closed: bool = False
    accepted_answer_id: Optional[AnswerId] = None
