"""List a user's answers use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, Field

from qna.application.usecase.answer import AnswerItem
from qna.domain.service import AnswerService, QuestionService
from qna.domain.value import UserId, parse_uuid


class UserAnswerItem(AnswerItem):
    """Answer together with the title of the question it answers."""

    question_title: Optional[str] = None


class ListUserAnswersRequest(BaseModel):
    """List user answers request."""

    user_id: str  # Whose answers
    viewer_id: str | None = None  # Current user ID (if authenticated)
    limit: int = Field(default=10, ge=1, le=50)
    offset: int = Field(default=0, ge=0)


class ListUserAnswersResponse(BaseModel):
    """List user answers response."""

    answers: list[UserAnswerItem]
    total: int
    limit: int
    offset: int


class ListUserAnswersUseCase:
    """Use case for listing the live answers one user wrote."""

    def __init__(
        self, answer_service: AnswerService, question_service: QuestionService
    ) -> None:
        """Initialize list user answers use case.

        Args:
            answer_service: Answer domain service
            question_service: Question domain service, for question titles
        """
        self.answer_service = answer_service
        self.question_service = question_service

    async def execute(self, request: ListUserAnswersRequest) -> ListUserAnswersResponse:
        """Execute list user answers flow.

        Returns:
            Newest answers first and the user's total answer count
        """
        with logfire.span("list_user_answers.execute", user_id=request.user_id):
            author_id = UserId(parse_uuid(request.user_id))
            viewer_id = UserId(parse_uuid(request.viewer_id)) if request.viewer_id else None

            answers, total = await self.answer_service.list_by_author(
                author_id, limit=request.limit, offset=request.offset
            )
            titles = await self.question_service.get_titles(
                [answer.question_id for answer in answers]
            )

            items = [
                UserAnswerItem(
                    **AnswerItem.from_answer(answer, viewer_id).model_dump(),
                    question_title=titles.get(answer.question_id),
                )
                for answer in answers
            ]

            return ListUserAnswersResponse(
                answers=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
