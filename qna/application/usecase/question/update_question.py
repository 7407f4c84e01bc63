"""Update question use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from qna.domain.service import QuestionService
from qna.domain.value import QuestionId, TagName, UserId, parse_uuid


class UpdateQuestionRequest(BaseModel):
    """Update question request. Omitted fields keep their value."""

    question_id: str  # UUID string
    title: Optional[str] = Field(default=None, min_length=15, max_length=300)
    description: Optional[str] = Field(default=None, min_length=30)
    tags: Optional[list[str]] = Field(default=None, min_length=1, max_length=5)
    user_id: str  # User ID from authenticated user


class UpdateQuestionResponse(BaseModel):
    """Update question response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    updated_at: datetime


class UpdateQuestionUseCase:
    """Use case for editing one's own question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: UpdateQuestionRequest) -> UpdateQuestionResponse:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question is missing or deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span("update_question.execute", question_id=request.question_id):
            question = await self.question_service.update_question(
                QuestionId(parse_uuid(request.question_id)),
                UserId(parse_uuid(request.user_id)),
                title=request.title,
                description=request.description,
                tags=(
                    [TagName(tag) for tag in request.tags]
                    if request.tags is not None
                    else None
                ),
            )

            return UpdateQuestionResponse(
                question_id=str(question.id),
                title=question.title,
                description=question.description,
                tags=[tag.root for tag in question.tags],
                updated_at=question.updated_at,
            )
