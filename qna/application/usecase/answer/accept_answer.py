"""Accept answer use case."""


import logfire
from pydantic import BaseModel

from qna.application.outbox import NotificationOutbox
from qna.domain.service import AcceptanceService, NotificationService
from qna.domain.value import (
    AnswerId,
    Identity,
    QuestionId,
    UserId,
    Username,
    parse_uuid,
)


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    question_id: str  # UUID string
    answer_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    username: str


class AcceptAnswerResponse(BaseModel):
    """Accept answer response."""

    accepted: bool
    question_id: str
    answer_id: str


class AcceptAnswerUseCase:
    """Use case for accepting an answer to one's own question."""

    def __init__(
        self, acceptance_service: AcceptanceService, outbox: NotificationOutbox
    ) -> None:
        """Initialize accept answer use case.

        Args:
            acceptance_service: Acceptance domain service
            outbox: Request notification outbox
        """
        self.acceptance_service = acceptance_service
        self.outbox = outbox

    async def execute(self, request: AcceptAnswerRequest) -> AcceptAnswerResponse:
        """Execute accept answer flow.

        The answer author is notified once the acceptance has committed.
        Re-accepting the accepted answer sends nothing.

        Raises:
            NotFoundError: If the question or answer is missing
            ForbiddenError: If the requester did not ask the question
        """
        with logfire.span(
            "accept_answer.execute",
            question_id=request.question_id,
            answer_id=request.answer_id,
        ):
            requester = Identity(
                user_id=UserId(parse_uuid(request.user_id)),
                username=Username(request.username),
            )
            result = await self.acceptance_service.accept_answer(
                QuestionId(parse_uuid(request.question_id)),
                AnswerId(parse_uuid(request.answer_id)),
                requester.user_id,
            )

            if result.changed:
                self.outbox.record(
                    NotificationService.answer_accepted(
                        question_id=result.question_id,
                        answer_id=result.answer_id,
                        answer_author_id=result.answer_author_id,
                        accepted_by=requester,
                    )
                )

            return AcceptAnswerResponse(
                accepted=True,
                question_id=str(result.question_id),
                answer_id=str(result.answer_id),
            )
