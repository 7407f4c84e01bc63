"""Common base for content that carries a vote ledger."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qna.domain.model.common import DomainModel
from qna.domain.model.ledger import VoteLedger
from qna.domain.value import UserId, Username


class VotableItem(DomainModel):
    """Authored content with a vote ledger.

    ``version`` increases by one on every ledger write and is what the
    repositories compare against when applying a vote.
    """

    author_id: UserId
    author_username: Username
    ledger: VoteLedger = Field(default_factory=VoteLedger)
    version: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def score(self) -> int:
        """Cached sum of all active votes."""
        return self.ledger.score

    @property
    def is_deleted(self) -> bool:
        """Whether the item has been soft-deleted."""
        return self.deleted_at is not None
