"""Vote domain service."""

from typing import Optional
from uuid import UUID

import logfire

from qna.domain.error import (
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from qna.domain.model.answer import Answer
from qna.domain.model.ledger import VoteOutcome
from qna.domain.model.votable import VotableItem
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.repository.votable import VotableRepository
from qna.domain.value import QuestionId, UserId, VotableType, VoteDirection
from qna.domain.value.common import ValueObject

from .base import Service


class VoteResult(ValueObject):
    """Outcome of a single vote."""

    item_type: VotableType
    item_id: UUID
    author_id: UserId
    question_id: QuestionId
    score: int
    outcome: VoteOutcome
    direction: Optional[VoteDirection]  # Voter's entry after the vote


class VoteService(Service):
    """Domain service for casting votes on questions and answers.

    A vote is a read-modify-write of the item's ledger. The write is a
    compare-and-swap on the item's version; losing the race means the vote
    is recomputed from the fresh ledger, so concurrent votes on one item
    are never lost.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        max_attempts: int = 5,
    ) -> None:
        """Initialize vote service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            max_attempts: Compare-and-swap attempts before giving up
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.max_attempts = max_attempts

    def _repository_for(self, item_type: VotableType) -> VotableRepository:
        if item_type == VotableType.QUESTION:
            return self.question_repository
        return self.answer_repository

    @staticmethod
    def parse_direction(direction: str | VoteDirection) -> VoteDirection:
        """Parse a raw direction.

        Raises:
            ValidationError: If direction is not "up" or "down"
        """
        try:
            return VoteDirection(direction)
        except ValueError:
            raise ValidationError(f"Vote direction must be 'up' or 'down', got {direction!r}")

    @staticmethod
    def parse_item_type(item_type: str | VotableType) -> VotableType:
        """Parse a raw item type.

        Raises:
            ValidationError: If item type is not "question" or "answer"
        """
        try:
            return VotableType(item_type)
        except ValueError:
            raise ValidationError(
                f"Item type must be 'question' or 'answer', got {item_type!r}"
            )

    async def cast_vote(
        self,
        item_type: str | VotableType,
        item_id: UUID,
        voter_id: UserId,
        direction: str | VoteDirection,
    ) -> VoteResult:
        """Cast, change or withdraw a vote.

        Voting the same direction twice withdraws the vote; voting the
        opposite direction replaces it.

        Args:
            item_type: "question" or "answer"
            item_id: ID of the question or answer
            voter_id: Voting user
            direction: "up" or "down"

        Returns:
            Vote result with the item's new score

        Raises:
            ValidationError: If direction or item type is malformed
            NotFoundError: If the item does not exist or is deleted
            InvalidOperationError: If the voter authored the item
            ConflictError: If concurrent writers won every attempt
        """
        parsed_type = self.parse_item_type(item_type)
        parsed_direction = self.parse_direction(direction)
        repository = self._repository_for(parsed_type)

        with logfire.span(
            "vote_service.cast_vote",
            item_type=parsed_type.value,
            item_id=str(item_id),
            voter_id=str(voter_id),
            direction=parsed_direction.value,
        ):
            for attempt in range(1, self.max_attempts + 1):
                item = await repository.find_by_id(item_id)
                self._check_votable(item, parsed_type, item_id, voter_id)

                ledger, outcome = item.ledger.cast(voter_id, parsed_direction)
                updated = await repository.compare_and_set_ledger(
                    item.id, item.version, ledger
                )
                if updated is not None:
                    logfire.info(
                        "Vote recorded",
                        item_id=str(item_id),
                        outcome=outcome.value,
                        score=updated.score,
                        attempt=attempt,
                    )
                    return VoteResult(
                        item_type=parsed_type,
                        item_id=item_id,
                        author_id=updated.author_id,
                        question_id=self._question_id_of(updated),
                        score=updated.score,
                        outcome=outcome,
                        direction=updated.ledger.direction_of(voter_id),
                    )

                logfire.debug(
                    "Vote lost compare-and-swap, retrying",
                    item_id=str(item_id),
                    expected_version=item.version,
                    attempt=attempt,
                )

            logfire.warn(
                "Vote gave up after repeated conflicts",
                item_id=str(item_id),
                attempts=self.max_attempts,
            )
            raise ConflictError(parsed_type.value, str(item_id), self.max_attempts)

    @staticmethod
    def _check_votable(
        item: Optional[VotableItem],
        item_type: VotableType,
        item_id: UUID,
        voter_id: UserId,
    ) -> None:
        if item is None or item.is_deleted:
            logfire.warn("Vote on missing item", item_id=str(item_id))
            raise NotFoundError(item_type.value.capitalize(), str(item_id))
        if item.author_id == voter_id:
            logfire.warn("Self-vote rejected", item_id=str(item_id))
            raise InvalidOperationError(f"Cannot vote on your own {item_type.value}")

    @staticmethod
    def _question_id_of(item: VotableItem) -> QuestionId:
        if isinstance(item, Answer):
            return item.question_id
        return QuestionId(item.id)
