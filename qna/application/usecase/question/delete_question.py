"""Delete question use case."""


import logfire
from pydantic import BaseModel

from qna.domain.service import QuestionService
from qna.domain.value import QuestionId, UserId, parse_uuid


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    success: bool
    message: str


class DeleteQuestionUseCase:
    """Use case for soft deleting one's own question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize delete question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question is missing or deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span("delete_question.execute", question_id=request.question_id):
            await self.question_service.delete_question(
                QuestionId(parse_uuid(request.question_id)),
                UserId(parse_uuid(request.user_id)),
            )
            return DeleteQuestionResponse(
                success=True, message="Question deleted successfully"
            )
