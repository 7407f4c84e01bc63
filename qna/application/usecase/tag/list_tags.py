"""List tags use case."""

import logfire
from pydantic import BaseModel, Field

from qna.domain.service import QuestionService


class TagItem(BaseModel):
    """Tag item in response."""

    name: str
    question_count: int


class ListTagsRequest(BaseModel):
    """List tags request."""

    limit: int = Field(default=100, ge=1, le=100)


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]


class ListTagsUseCase:
    """Use case for listing tags in use."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize list tags use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow.

        Args:
            request: List tags request

        Returns:
            Tags ordered by how many live questions use them
        """
        with logfire.span("list_tags.execute", limit=request.limit):
            tags = await self.question_service.get_tag_usage(limit=request.limit)

            tag_items = [
                TagItem(name=tag.name.root, question_count=tag.question_count)
                for tag in tags
            ]

            logfire.info("Tags listed", count=len(tag_items))

            return ListTagsResponse(tags=tag_items)
