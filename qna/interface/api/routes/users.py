"""User content routes.

Users themselves live with the identity provider; these routes only
aggregate what a user id has contributed here. ``/users/me/...`` resolves
the id from the auth cookie.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from qna.application.usecase.user import (
    GetUserStatsRequest,
    GetUserStatsResponse,
    GetUserStatsUseCase,
    ListUserAnswersRequest,
    ListUserAnswersResponse,
    ListUserAnswersUseCase,
    ListUserQuestionsRequest,
    ListUserQuestionsResponse,
    ListUserQuestionsUseCase,
)
from qna.domain.service import JWTService
from qna.interface.api.auth import require_identity

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


def _resolve_user(
    user_id: str, jwt_service: JWTService, auth_token: str | None
) -> tuple[str, str | None]:
    """Return the target user id and the viewer id."""
    if user_id == "me":
        identity = require_identity(jwt_service, auth_token, "view your own content")
        return str(identity.user_id), str(identity.user_id)

    identity = jwt_service.get_identity_from_token(auth_token)
    return user_id, str(identity.user_id) if identity else None


@router.get("/{user_id}/questions", response_model=ListUserQuestionsResponse)
async def list_user_questions(
    user_id: str,
    list_user_questions_use_case: FromDishka[ListUserQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=10, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListUserQuestionsResponse:
    """A user's live questions, newest first."""
    target_id, viewer_id = _resolve_user(user_id, jwt_service, auth_token)

    return await list_user_questions_use_case.execute(
        ListUserQuestionsRequest(
            user_id=target_id, viewer_id=viewer_id, limit=limit, offset=offset
        )
    )


@router.get("/{user_id}/answers", response_model=ListUserAnswersResponse)
async def list_user_answers(
    user_id: str,
    list_user_answers_use_case: FromDishka[ListUserAnswersUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=10, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListUserAnswersResponse:
    """A user's live answers, newest first, with their question titles."""
    target_id, viewer_id = _resolve_user(user_id, jwt_service, auth_token)

    return await list_user_answers_use_case.execute(
        ListUserAnswersRequest(
            user_id=target_id, viewer_id=viewer_id, limit=limit, offset=offset
        )
    )


@router.get("/{user_id}/stats", response_model=GetUserStatsResponse)
async def get_user_stats(
    user_id: str,
    get_user_stats_use_case: FromDishka[GetUserStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUserStatsResponse:
    """Question, answer, score and view totals for a user."""
    target_id, _ = _resolve_user(user_id, jwt_service, auth_token)

    return await get_user_stats_use_case.execute(GetUserStatsRequest(user_id=target_id))
