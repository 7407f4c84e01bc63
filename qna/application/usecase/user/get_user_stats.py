"""User statistics use case."""

import logfire
from pydantic import BaseModel

from qna.domain.service import AnswerService, QuestionService
from qna.domain.value import UserId, parse_uuid


class GetUserStatsRequest(BaseModel):
    """User stats request."""

    user_id: str


class GetUserStatsResponse(BaseModel):
    """Totals over a user's live questions and answers."""

    user_id: str
    question_count: int
    answer_count: int
    accepted_answer_count: int
    question_score: int
    answer_score: int
    question_views: int


class GetUserStatsUseCase:
    """Use case for summarizing what a user has contributed."""

    def __init__(
        self, question_service: QuestionService, answer_service: AnswerService
    ) -> None:
        self.question_service = question_service
        self.answer_service = answer_service

    async def execute(self, request: GetUserStatsRequest) -> GetUserStatsResponse:
        """Execute user stats flow.

        A user without content gets all zeros.
        """
        with logfire.span("get_user_stats.execute", user_id=request.user_id):
            user_id = UserId(parse_uuid(request.user_id))
            questions = await self.question_service.author_totals(user_id)
            answers = await self.answer_service.author_totals(user_id)

            return GetUserStatsResponse(
                user_id=str(user_id),
                question_count=questions.count,
                answer_count=answers.count,
                accepted_answer_count=answers.accepted_count,
                question_score=questions.total_score,
                answer_score=answers.total_score,
                question_views=questions.total_views,
            )
