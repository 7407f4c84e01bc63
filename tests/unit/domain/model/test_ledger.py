"""Unit tests for VoteLedger."""

from uuid import uuid4

import pytest

from qna.domain.model import VoteLedger, VoteOutcome
from qna.domain.value import UserId, VoteDirection


class TestVoteLedgerCast:
    """Tests for VoteLedger.cast."""

    def test_first_vote_is_added(self):
        """A voter without an entry gets one and the score moves by one."""
        voter = UserId(uuid4())

        ledger, outcome = VoteLedger().cast(voter, VoteDirection.UP)

        assert outcome == VoteOutcome.ADDED
        assert ledger.score == 1
        assert ledger.direction_of(voter) == VoteDirection.UP

    def test_same_direction_twice_withdraws_vote(self):
        """Voting the same direction again removes the entry."""
        voter = UserId(uuid4())
        ledger, _ = VoteLedger().cast(voter, VoteDirection.DOWN)

        ledger, outcome = ledger.cast(voter, VoteDirection.DOWN)

        assert outcome == VoteOutcome.REMOVED
        assert ledger.score == 0
        assert ledger.direction_of(voter) is None
        assert ledger.entries == {}

    def test_opposite_direction_replaces_vote(self):
        """Switching direction moves the score by two."""
        voter = UserId(uuid4())
        ledger, _ = VoteLedger().cast(voter, VoteDirection.UP)

        ledger, outcome = ledger.cast(voter, VoteDirection.DOWN)

        assert outcome == VoteOutcome.CHANGED
        assert ledger.score == -1
        assert ledger.direction_of(voter) == VoteDirection.DOWN

    def test_sequence_of_votes_from_two_users(self):
        """Score follows every step of a mixed sequence."""
        # Arrange
        u1 = UserId(uuid4())
        u2 = UserId(uuid4())
        ledger = VoteLedger()
        scores = []

        # Act
        for voter, direction in [
            (u1, VoteDirection.UP),
            (u2, VoteDirection.DOWN),
            (u1, VoteDirection.DOWN),
            (u2, VoteDirection.DOWN),
        ]:
            ledger, _ = ledger.cast(voter, direction)
            scores.append(ledger.score)

        # Assert
        assert scores == [1, 0, -2, -1]
        assert ledger.entries == {u1: VoteDirection.DOWN}

    def test_cast_does_not_mutate_original(self):
        """The ledger is immutable; cast returns a new one."""
        original = VoteLedger()

        original.cast(UserId(uuid4()), VoteDirection.UP)

        assert original.score == 0
        assert original.entries == {}


class TestVoteLedgerInvariant:
    """The cached score must always equal the sum of the entries."""

    def test_inconsistent_score_is_rejected(self):
        """Constructing a drifted ledger fails."""
        with pytest.raises(ValueError, match="does not match entries"):
            VoteLedger(entries={UserId(uuid4()): VoteDirection.UP}, score=5)

    def test_from_entries_recomputes_score(self):
        """from_entries derives the score from the entries."""
        entries = {
            UserId(uuid4()): VoteDirection.UP,
            UserId(uuid4()): VoteDirection.UP,
            UserId(uuid4()): VoteDirection.DOWN,
        }

        ledger = VoteLedger.from_entries(entries)

        assert ledger.score == 1

    def test_empty_ledger_is_truthy(self):
        """An empty ledger is still a ledger."""
        assert VoteLedger()
