"""List questions use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from qna.domain.model.question import Question
from qna.domain.repository import QuestionSortOrder
from qna.domain.service import QuestionService
from qna.domain.value import TagName, UserId, parse_uuid


class QuestionListItem(BaseModel):
    """Question list item in response."""

    question_id: str
    title: str
    tags: list[str]
    author_id: str
    author_username: str
    score: int
    views: int
    answer_count: int
    has_accepted_answer: bool
    user_vote: Optional[str]
    created_at: datetime

    @classmethod
    def from_question(
        cls, question: Question, viewer_id: Optional[UserId] = None
    ) -> "QuestionListItem":
        """Build the item, including the viewer's vote when known."""
        direction = question.ledger.direction_of(viewer_id) if viewer_id else None
        return cls(
            question_id=str(question.id),
            title=question.title,
            tags=[tag.root for tag in question.tags],
            author_id=str(question.author_id),
            author_username=question.author_username.root,
            score=question.score,
            views=question.views,
            answer_count=question.answer_count,
            has_accepted_answer=question.accepted_answer_id is not None,
            user_vote=direction.value if direction else None,
            created_at=question.created_at,
        )


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    tag: str | None = None  # Filter by tag name
    search: str | None = Field(default=None, max_length=200)
    limit: int = Field(default=10, ge=1, le=50)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionListItem]
    total: int
    limit: int
    offset: int


class ListQuestionsUseCase:
    """Use case for listing questions with filtering and pagination."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Args:
            request: List questions request with filters and pagination

        Returns:
            Page of questions and the total matching count
        """
        with logfire.span(
            "list_questions.execute",
            sort=request.sort.value,
            tag=request.tag,
            limit=request.limit,
            offset=request.offset,
        ):
            tag_filter = TagName(request.tag) if request.tag else None
            viewer_id = UserId(parse_uuid(request.user_id)) if request.user_id else None

            questions, total = await self.question_service.list_questions(
                sort=request.sort,
                tag=tag_filter,
                search=request.search,
                limit=request.limit,
                offset=request.offset,
            )

            return ListQuestionsResponse(
                questions=[
                    QuestionListItem.from_question(question, viewer_id)
                    for question in questions
                ],
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
