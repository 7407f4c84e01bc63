"""Shared contract for repositories of votable items."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from qna.domain.model.ledger import VoteLedger
from qna.domain.model.votable import VotableItem

ItemT = TypeVar("ItemT", bound=VotableItem)


class VotableRepository(ABC, Generic[ItemT]):
    """Operations the vote service needs from any votable repository."""

    @abstractmethod
    async def find_by_id(self, item_id: UUID) -> Optional[ItemT]:
        """Find an item by ID, including soft-deleted ones.

        Args:
            item_id: The item's unique identifier

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def compare_and_set_ledger(
        self, item_id: UUID, expected_version: int, ledger: VoteLedger
    ) -> Optional[ItemT]:
        """Replace the item's ledger if nobody else changed it meanwhile.

        Writes ledger entries, cached score and ``version + 1`` in a single
        conditional update guarded by ``version == expected_version``.
        No other column is touched.

        Args:
            item_id: The item's unique identifier
            expected_version: Version the new ledger was computed from
            ledger: The new ledger

        Returns:
            The updated item, or None if the version no longer matches
            (or the item vanished)
        """
        pass
