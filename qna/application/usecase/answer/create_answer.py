"""Create answer use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from qna.application.outbox import NotificationOutbox
from qna.domain.model.answer import Answer
from qna.domain.service import AnswerService, NotificationService, QuestionService
from qna.domain.value import Identity, QuestionId, UserId, Username, parse_uuid


class AnswerItem(BaseModel):
    """Answer as shown to a viewer."""

    answer_id: str
    question_id: str
    content: str
    author_id: str
    author_username: str
    score: int
    is_accepted: bool
    user_vote: Optional[str] = None  # Viewer's own vote, if any
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_answer(cls, answer: Answer, viewer_id: Optional[UserId] = None) -> "AnswerItem":
        """Build the item, including the viewer's vote when known."""
        direction = answer.ledger.direction_of(viewer_id) if viewer_id else None
        return cls(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            content=answer.content,
            author_id=str(answer.author_id),
            author_username=answer.author_username.root,
            score=answer.score,
            is_accepted=answer.is_accepted,
            user_vote=direction.value if direction else None,
            created_at=answer.created_at,
            updated_at=answer.updated_at,
        )


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str  # UUID string
    content: str = Field(min_length=30)
    user_id: str  # User ID from authenticated user
    username: str


class CreateAnswerResponse(BaseModel):
    """Create answer response."""

    answer: AnswerItem


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        outbox: NotificationOutbox,
    ) -> None:
        """Initialize create answer use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            outbox: Request notification outbox
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.outbox = outbox

    async def execute(self, request: CreateAnswerRequest) -> CreateAnswerResponse:
        """Execute create answer flow.

        Notifies the question author unless they answered themselves.

        Args:
            request: Create answer request

        Returns:
            The new answer

        Raises:
            NotFoundError: If the question is missing or deleted
            InvalidOperationError: If the question is closed
        """
        with logfire.span("create_answer.execute", question_id=request.question_id):
            author = Identity(
                user_id=UserId(parse_uuid(request.user_id)),
                username=Username(request.username),
            )
            question = await self.question_service.get_question(
                QuestionId(parse_uuid(request.question_id))
            )
            answer = await self.answer_service.create_answer(
                question, author, request.content
            )

            self.outbox.record(NotificationService.answer_posted(question, answer))

            return CreateAnswerResponse(
                answer=AnswerItem.from_answer(answer, author.user_id)
            )
