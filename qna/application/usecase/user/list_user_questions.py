"""List a user's questions use case."""

import logfire
from pydantic import BaseModel, Field

from qna.application.usecase.question import QuestionListItem
from qna.domain.service import QuestionService
from qna.domain.value import UserId, parse_uuid


class ListUserQuestionsRequest(BaseModel):
    """List user questions request."""

    user_id: str  # Whose questions
    viewer_id: str | None = None  # Current user ID (if authenticated)
    limit: int = Field(default=10, ge=1, le=50)
    offset: int = Field(default=0, ge=0)


class ListUserQuestionsResponse(BaseModel):
    """List user questions response."""

    questions: list[QuestionListItem]
    total: int
    limit: int
    offset: int


class ListUserQuestionsUseCase:
    """Use case for listing the live questions one user asked."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: ListUserQuestionsRequest) -> ListUserQuestionsResponse:
        """Execute list user questions flow.

        Returns:
            Newest questions first and the user's total question count
        """
        with logfire.span("list_user_questions.execute", user_id=request.user_id):
            author_id = UserId(parse_uuid(request.user_id))
            viewer_id = UserId(parse_uuid(request.viewer_id)) if request.viewer_id else None

            questions, total = await self.question_service.list_by_author(
                author_id, limit=request.limit, offset=request.offset
            )

            return ListUserQuestionsResponse(
                questions=[
                    QuestionListItem.from_question(question, viewer_id)
                    for question in questions
                ],
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
