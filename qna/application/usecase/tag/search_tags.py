"""Search tags use case."""

import logfire
from pydantic import BaseModel, Field

from qna.domain.service import QuestionService

from .list_tags import TagItem


class SearchTagsRequest(BaseModel):
    """Search tags request."""

    query: str = Field(min_length=1, max_length=20)
    limit: int = Field(default=10, ge=1, le=100)


class SearchTagsResponse(BaseModel):
    """Search tags response."""

    query: str
    tags: list[TagItem]


class SearchTagsUseCase:
    """Use case for finding tags in use by part of their name."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: SearchTagsRequest) -> SearchTagsResponse:
        """Execute search tags flow.

        Raises:
            ValidationError: If the query is blank
        """
        with logfire.span("search_tags.execute", query=request.query):
            tags = await self.question_service.search_tags(
                request.query, limit=request.limit
            )
            return SearchTagsResponse(
                query=request.query.strip().lower(),
                tags=[
                    TagItem(name=tag.name.root, question_count=tag.question_count)
                    for tag in tags
                ],
            )
