"""Create question use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from qna.domain.service import QuestionService
from qna.domain.value import Identity, TagName, UserId, Username, parse_uuid


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str = Field(min_length=15, max_length=300)
    description: str = Field(min_length=30)
    tags: list[str] = Field(min_length=1, max_length=5)
    user_id: str  # User ID from authenticated user
    username: str


class CreateQuestionResponse(BaseModel):
    """Create question response."""

    question_id: str
    title: str
    tags: list[str]
    author_id: str
    author_username: str
    created_at: datetime


class CreateQuestionUseCase:
    """Use case for asking a question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Args:
            request: Create question request

        Returns:
            The new question
        """
        with logfire.span("create_question.execute", tags=request.tags):
            author = Identity(
                user_id=UserId(parse_uuid(request.user_id)),
                username=Username(request.username),
            )
            question = await self.question_service.create_question(
                author=author,
                title=request.title,
                description=request.description,
                tags=[TagName(tag) for tag in request.tags],
            )

            return CreateQuestionResponse(
                question_id=str(question.id),
                title=question.title,
                tags=[tag.root for tag in question.tags],
                author_id=str(question.author_id),
                author_username=question.author_username.root,
                created_at=question.created_at,
            )
