"""Unaccept answer use case."""


import logfire
from pydantic import BaseModel

from qna.domain.service import AcceptanceService
from qna.domain.value import AnswerId, QuestionId, UserId, parse_uuid


class UnacceptAnswerRequest(BaseModel):
    """Unaccept answer request."""

    question_id: str  # UUID string
    answer_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class UnacceptAnswerResponse(BaseModel):
    """Unaccept answer response."""

    accepted: bool
    question_id: str
    answer_id: str


class UnacceptAnswerUseCase:
    """Use case for withdrawing acceptance of an answer."""

    def __init__(self, acceptance_service: AcceptanceService) -> None:
        """Initialize unaccept answer use case.

        Args:
            acceptance_service: Acceptance domain service
        """
        self.acceptance_service = acceptance_service

    async def execute(self, request: UnacceptAnswerRequest) -> UnacceptAnswerResponse:
        """Execute unaccept answer flow.

        Raises:
            NotFoundError: If the question or answer is missing
            ForbiddenError: If the requester did not ask the question
            InvalidOperationError: If the answer is not the accepted one
        """
        with logfire.span(
            "unaccept_answer.execute",
            question_id=request.question_id,
            answer_id=request.answer_id,
        ):
            result = await self.acceptance_service.unaccept_answer(
                QuestionId(parse_uuid(request.question_id)),
                AnswerId(parse_uuid(request.answer_id)),
                UserId(parse_uuid(request.user_id)),
            )
            return UnacceptAnswerResponse(
                accepted=False,
                question_id=str(result.question_id),
                answer_id=str(result.answer_id),
            )
