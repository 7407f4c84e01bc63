"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from qna.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from qna.domain.service import JWTService
from qna.domain.value import VotableType
from qna.interface.api.auth import require_identity

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    direction: str  # "up" or "down", checked by the vote service


async def _cast_vote(
    item_type: VotableType,
    item_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> CastVoteResponse:
    identity = require_identity(jwt_service, auth_token, "vote")

    return await cast_vote_use_case.execute(
        CastVoteRequest(
            item_type=item_type.value,
            item_id=item_id,
            direction=request.direction,
            user_id=str(identity.user_id),
            username=identity.username.root,
        )
    )


@router.post("/questions/{question_id}/vote", response_model=CastVoteResponse)
async def vote_on_question(
    question_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a question.

    Voting the same direction again withdraws the vote; the opposite
    direction replaces it. Requires authentication.

    Args:
        question_id: Question UUID
        request: Vote direction
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The question's new score
    """
    return await _cast_vote(
        VotableType.QUESTION,
        question_id,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.post("/answers/{answer_id}/vote", response_model=CastVoteResponse)
async def vote_on_answer(
    answer_id: str,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on an answer. Same rules as voting on a question."""
    return await _cast_vote(
        VotableType.ANSWER,
        answer_id,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )
