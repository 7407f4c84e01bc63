"""Delete answer use case."""


import logfire
from pydantic import BaseModel

from qna.domain.service import AnswerService
from qna.domain.value import AnswerId, UserId, parse_uuid


class DeleteAnswerRequest(BaseModel):
    """Delete answer request."""

    answer_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteAnswerResponse(BaseModel):
    """Delete answer response."""

    success: bool
    message: str


class DeleteAnswerUseCase:
    """Use case for soft deleting one's own answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize delete answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: DeleteAnswerRequest) -> DeleteAnswerResponse:
        """Execute delete answer flow.

        Raises:
            NotFoundError: If the answer is missing or deleted
            ForbiddenError: If the requester is not the author
            InvalidOperationError: If the answer is accepted
        """
        with logfire.span("delete_answer.execute", answer_id=request.answer_id):
            await self.answer_service.delete_answer(
                AnswerId(parse_uuid(request.answer_id)), UserId(parse_uuid(request.user_id))
            )
            return DeleteAnswerResponse(
                success=True, message="Answer deleted successfully"
            )
