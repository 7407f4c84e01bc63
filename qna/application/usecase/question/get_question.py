"""Get question use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel

from qna.application.usecase.answer.create_answer import AnswerItem
from qna.domain.service import AnswerService, QuestionService
from qna.domain.value import QuestionId, UserId, parse_uuid


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionResponse(BaseModel):
    """Get question response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    author_username: str
    score: int
    views: int
    answer_count: int
    is_closed: bool
    accepted_answer_id: Optional[str]
    user_vote: Optional[str]
    created_at: datetime
    updated_at: datetime
    answers: list[AnswerItem]


class GetQuestionUseCase:
    """Use case for viewing a question with its answers."""

    def __init__(
        self, question_service: QuestionService, answer_service: AnswerService
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
        """
        self.question_service = question_service
        self.answer_service = answer_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Counts a view and returns the question with its live answers and
        the viewer's own votes.

        Raises:
            NotFoundError: If the question is missing or deleted
        """
        with logfire.span("get_question.execute", question_id=request.question_id):
            question_id = QuestionId(parse_uuid(request.question_id))
            viewer_id = UserId(parse_uuid(request.user_id)) if request.user_id else None

            question = await self.question_service.get_question(question_id)
            await self.question_service.record_view(question_id)
            answers = await self.answer_service.get_answers(question_id)

            direction = question.ledger.direction_of(viewer_id) if viewer_id else None

            return GetQuestionResponse(
                question_id=str(question.id),
                title=question.title,
                description=question.description,
                tags=[tag.root for tag in question.tags],
                author_id=str(question.author_id),
                author_username=question.author_username.root,
                score=question.score,
                views=question.views + 1,
                answer_count=len(answers),
                is_closed=question.is_closed,
                accepted_answer_id=(
                    str(question.accepted_answer_id)
                    if question.accepted_answer_id
                    else None
                ),
                user_vote=direction.value if direction else None,
                created_at=question.created_at,
                updated_at=question.updated_at,
                answers=[AnswerItem.from_answer(a, viewer_id) for a in answers],
            )
