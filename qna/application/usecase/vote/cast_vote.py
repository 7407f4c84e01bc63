"""Cast vote use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from qna.application.outbox import NotificationOutbox
from qna.domain.model.ledger import VoteOutcome
from qna.domain.service import NotificationService, VoteService
from qna.domain.value import Identity, UserId, Username, parse_uuid


class CastVoteRequest(BaseModel):
    """Cast vote request.

    ``item_type`` and ``direction`` stay raw strings so malformed values
    reach the domain and are reported as validation errors there.
    """

    item_type: str  # "question" or "answer"
    item_id: str  # UUID string
    direction: str  # "up" or "down"
    user_id: str  # User ID from authenticated user
    username: str


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    score: int
    outcome: VoteOutcome
    user_vote: Optional[str]  # Voter's direction after the vote


class CastVoteUseCase:
    """Use case for voting on a question or answer."""

    def __init__(
        self, vote_service: VoteService, outbox: NotificationOutbox
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            outbox: Request notification outbox
        """
        self.vote_service = vote_service
        self.outbox = outbox

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The item's new score

        Raises:
            ValidationError: If direction or item type is malformed
            NotFoundError: If the item is missing or deleted
            InvalidOperationError: On a self-vote
            ConflictError: If concurrent votes won every attempt
        """
        with logfire.span(
            "cast_vote.execute",
            item_type=request.item_type,
            item_id=request.item_id,
            direction=request.direction,
        ):
            voter = Identity(
                user_id=UserId(parse_uuid(request.user_id)),
                username=Username(request.username),
            )
            result = await self.vote_service.cast_vote(
                item_type=request.item_type,
                item_id=parse_uuid(request.item_id),
                voter_id=voter.user_id,
                direction=request.direction,
            )

            self.outbox.record(NotificationService.vote_received(result, voter))

            return CastVoteResponse(
                score=result.score,
                outcome=result.outcome,
                user_vote=result.direction.value if result.direction else None,
            )
