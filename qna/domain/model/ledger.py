"""Vote ledger.

A ledger records, for one question or answer, the single current vote of
every voter together with the cached score. Keying by voter makes the
"one vote per voter" rule structural rather than something enforced by
scanning.
"""

from enum import Enum

from pydantic import Field, model_validator

from qna.domain.model.common import DomainModel
from qna.domain.value import UserId, VoteDirection


class VoteOutcome(str, Enum):
    """What a cast vote did to the voter's ledger entry."""

    ADDED = "added"  # No previous vote
    REMOVED = "removed"  # Same direction again (toggle-off)
    CHANGED = "changed"  # Opposite direction replaced the previous vote


class VoteLedger(DomainModel):
    """Per-item mapping of voter to direction plus the cached score.

    Invariant: ``score`` equals the sum of the entries' deltas. The
    validator rejects any ledger that violates it, so a drifted score can
    never be constructed.
    """

    entries: dict[UserId, VoteDirection] = Field(default_factory=dict)
    score: int = 0

    @model_validator(mode="after")
    def validate_score_matches_entries(self) -> "VoteLedger":
        """Reject ledgers whose cached score disagrees with the entries."""
        expected = sum(direction.delta for direction in self.entries.values())
        if self.score != expected:
            raise ValueError(
                f"Ledger score {self.score} does not match entries (expected {expected})"
            )
        return self

    @classmethod
    def from_entries(cls, entries: dict[UserId, VoteDirection]) -> "VoteLedger":
        """Build a ledger, recomputing the score from the entries."""
        return cls(
            entries=dict(entries),
            score=sum(direction.delta for direction in entries.values()),
        )

    def direction_of(self, voter_id: UserId) -> VoteDirection | None:
        """Return the voter's current direction, or None if they have not voted."""
        return self.entries.get(voter_id)

    def cast(
        self, voter_id: UserId, direction: VoteDirection
    ) -> tuple["VoteLedger", VoteOutcome]:
        """Apply one vote and return the new ledger.

        - no entry: add it, score moves by the direction
        - same direction: remove it, score moves back by the direction
        - opposite direction: replace it, score moves by twice the direction

        Args:
            voter_id: Voting user
            direction: Requested direction

        Returns:
            Tuple of the new ledger and what happened to the voter's entry
        """
        entries = dict(self.entries)
        current = entries.get(voter_id)

        if current is None:
            entries[voter_id] = direction
            delta = direction.delta
            outcome = VoteOutcome.ADDED
        elif current == direction:
            del entries[voter_id]
            delta = -direction.delta
            outcome = VoteOutcome.REMOVED
        else:
            entries[voter_id] = direction
            delta = 2 * direction.delta
            outcome = VoteOutcome.CHANGED

        return VoteLedger(entries=entries, score=self.score + delta), outcome
