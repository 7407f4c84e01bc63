"""Answer routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from qna.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
    UnacceptAnswerRequest,
    UnacceptAnswerResponse,
    UnacceptAnswerUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)
from qna.domain.service import JWTService
from qna.interface.api.auth import require_identity

router = APIRouter(tags=["answers"], route_class=DishkaRoute)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    content: str = Field(min_length=30)


class UpdateAnswerAPIRequest(BaseModel):
    """API request for editing an answer."""

    content: str = Field(min_length=30)


@router.post(
    "/questions/{question_id}/answers",
    response_model=CreateAnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: str,
    request: CreateAnswerAPIRequest,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateAnswerResponse:
    """Answer a question.

    Requires authentication. The question author is notified.

    Args:
        question_id: Question UUID
        request: Answer content
        create_answer_use_case: Create answer use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The created answer
    """
    identity = require_identity(jwt_service, auth_token, "answer a question")

    return await create_answer_use_case.execute(
        CreateAnswerRequest(
            question_id=question_id,
            content=request.content,
            user_id=str(identity.user_id),
            username=identity.username.root,
        )
    )


@router.put("/answers/{answer_id}", response_model=UpdateAnswerResponse)
async def update_answer(
    answer_id: str,
    request: UpdateAnswerAPIRequest,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateAnswerResponse:
    """Replace the content of an answer. Only its author may do this."""
    identity = require_identity(jwt_service, auth_token, "edit an answer")

    return await update_answer_use_case.execute(
        UpdateAnswerRequest(
            answer_id=answer_id,
            content=request.content,
            user_id=str(identity.user_id),
        )
    )


@router.delete("/answers/{answer_id}", response_model=DeleteAnswerResponse)
async def delete_answer(
    answer_id: str,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteAnswerResponse:
    """Soft delete an answer. Only its author may do this."""
    identity = require_identity(jwt_service, auth_token, "delete an answer")

    return await delete_answer_use_case.execute(
        DeleteAnswerRequest(answer_id=answer_id, user_id=str(identity.user_id))
    )


@router.patch(
    "/questions/{question_id}/answers/{answer_id}/accept",
    response_model=AcceptAnswerResponse,
)
async def accept_answer(
    question_id: str,
    answer_id: str,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptAnswerResponse:
    """Accept an answer. Only the question author may do this.

    Any previously accepted answer is unaccepted. The answer author is
    notified.

    Args:
        question_id: Question UUID
        answer_id: Answer UUID
        accept_answer_use_case: Accept answer use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        ``{"accepted": true, ...}``
    """
    identity = require_identity(jwt_service, auth_token, "accept an answer")

    return await accept_answer_use_case.execute(
        AcceptAnswerRequest(
            question_id=question_id,
            answer_id=answer_id,
            user_id=str(identity.user_id),
            username=identity.username.root,
        )
    )


@router.patch(
    "/questions/{question_id}/answers/{answer_id}/unaccept",
    response_model=UnacceptAnswerResponse,
)
async def unaccept_answer(
    question_id: str,
    answer_id: str,
    unaccept_answer_use_case: FromDishka[UnacceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UnacceptAnswerResponse:
    """Withdraw acceptance of the accepted answer."""
    identity = require_identity(jwt_service, auth_token, "unaccept an answer")

    return await unaccept_answer_use_case.execute(
        UnacceptAnswerRequest(
            question_id=question_id,
            answer_id=answer_id,
            user_id=str(identity.user_id),
        )
    )
