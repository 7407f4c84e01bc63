"""Update answer use case."""

import logfire
from pydantic import BaseModel, Field

from qna.domain.service import AnswerService
from qna.domain.value import AnswerId, UserId, parse_uuid

from .create_answer import AnswerItem


class UpdateAnswerRequest(BaseModel):
    """Update answer request."""

    answer_id: str  # UUID string
    content: str = Field(min_length=30)
    user_id: str  # User ID from authenticated user


class UpdateAnswerResponse(BaseModel):
    """Update answer response."""

    answer: AnswerItem


class UpdateAnswerUseCase:
    """Use case for editing one's own answer."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: UpdateAnswerRequest) -> UpdateAnswerResponse:
        """Execute update answer flow.

        Raises:
            NotFoundError: If the answer is missing or deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span("update_answer.execute", answer_id=request.answer_id):
            user_id = UserId(parse_uuid(request.user_id))
            answer = await self.answer_service.update_answer(
                AnswerId(parse_uuid(request.answer_id)), user_id, request.content
            )
            return UpdateAnswerResponse(answer=AnswerItem.from_answer(answer, user_id))
