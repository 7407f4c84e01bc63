"""Question routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from qna.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionResponse,
    UpdateQuestionUseCase,
)
from qna.domain.repository import QuestionSortOrder
from qna.domain.service import JWTService
from qna.interface.api.auth import require_identity

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = Field(min_length=15, max_length=300)
    description: str = Field(min_length=30)
    tags: list[str] = Field(min_length=1, max_length=5)


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question. Omitted fields are kept."""

    title: str | None = Field(default=None, min_length=15, max_length=300)
    description: str | None = Field(default=None, min_length=30)
    tags: list[str] | None = Field(default=None, min_length=1, max_length=5)


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: QuestionSortOrder = Query(default=QuestionSortOrder.NEWEST),
    tag: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    limit: int = Query(default=10, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListQuestionsResponse:
    """List questions with sorting, filtering and pagination.

    Authentication is optional; signed-in users see their own votes.

    Args:
        list_questions_use_case: List questions use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: newest, most_voted, most_viewed or unanswered
        tag: Only questions with this tag
        search: Substring of title or description
        limit: Page size
        offset: Number of questions to skip
        auth_token: JWT token from cookie

    Returns:
        Page of questions with the total count
    """
    identity = jwt_service.get_identity_from_token(auth_token)

    return await list_questions_use_case.execute(
        ListQuestionsRequest(
            sort=sort,
            tag=tag,
            search=search,
            limit=limit,
            offset=offset,
            user_id=str(identity.user_id) if identity else None,
        )
    )


@router.post(
    "", response_model=CreateQuestionResponse, status_code=status.HTTP_201_CREATED
)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateQuestionResponse:
    """Ask a new question.

    Requires authentication.
    """
    identity = require_identity(jwt_service, auth_token, "ask a question")

    return await create_question_use_case.execute(
        CreateQuestionRequest(
            title=request.title,
            description=request.description,
            tags=request.tags,
            user_id=str(identity.user_id),
            username=identity.username.root,
        )
    )


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: str,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetQuestionResponse:
    """Get a question with its answers.

    Counts as one view. Authentication is optional.

    Args:
        question_id: Question UUID
        get_question_use_case: Get question use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Question details with answers
    """
    identity = jwt_service.get_identity_from_token(auth_token)

    return await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=question_id,
            user_id=str(identity.user_id) if identity else None,
        )
    )


@router.put("/{question_id}", response_model=UpdateQuestionResponse)
async def update_question(
    question_id: str,
    request: UpdateQuestionAPIRequest,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateQuestionResponse:
    """Edit the title, description or tags of a question.

    Only its author may do this. Votes and answers are unaffected.
    """
    identity = require_identity(jwt_service, auth_token, "edit a question")

    return await update_question_use_case.execute(
        UpdateQuestionRequest(
            question_id=question_id,
            title=request.title,
            description=request.description,
            tags=request.tags,
            user_id=str(identity.user_id),
        )
    )


@router.delete("/{question_id}", response_model=DeleteQuestionResponse)
async def delete_question(
    question_id: str,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteQuestionResponse:
    """Soft delete a question. Only its author may do this."""
    identity = require_identity(jwt_service, auth_token, "delete a question")

    return await delete_question_use_case.execute(
        DeleteQuestionRequest(question_id=question_id, user_id=str(identity.user_id))
    )
