"""Get tag use case."""

import logfire
from pydantic import BaseModel, Field

from qna.application.usecase.question import QuestionListItem
from qna.domain.repository import QuestionSortOrder
from qna.domain.service import QuestionService
from qna.domain.value import TagName, UserId, parse_uuid


class TagStatsItem(BaseModel):
    """Totals over the live questions carrying a tag."""

    question_count: int
    total_score: int
    total_views: int


class GetTagRequest(BaseModel):
    """Get tag request."""

    tag: str
    limit: int = Field(default=10, ge=1, le=50)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class GetTagResponse(BaseModel):
    """A tag's newest questions and its totals."""

    tag: str
    questions: list[QuestionListItem]
    total: int
    limit: int
    offset: int
    stats: TagStatsItem


class GetTagUseCase:
    """Use case for browsing one tag."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize get tag use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: GetTagRequest) -> GetTagResponse:
        """Execute get tag flow.

        An unused tag is not an error; it has no questions and zero totals.
        """
        with logfire.span("get_tag.execute", tag=request.tag):
            tag = TagName(request.tag)
            viewer_id = UserId(parse_uuid(request.user_id)) if request.user_id else None

            questions, total = await self.question_service.list_questions(
                sort=QuestionSortOrder.NEWEST,
                tag=tag,
                limit=request.limit,
                offset=request.offset,
            )
            stats = await self.question_service.get_tag_stats(tag)

            return GetTagResponse(
                tag=tag.root,
                questions=[
                    QuestionListItem.from_question(question, viewer_id)
                    for question in questions
                ],
                total=total,
                limit=request.limit,
                offset=request.offset,
                stats=TagStatsItem(
                    question_count=stats.question_count,
                    total_score=stats.total_score,
                    total_views=stats.total_views,
                ),
            )
