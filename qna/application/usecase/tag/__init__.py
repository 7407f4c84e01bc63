"""Tag use cases."""

from .get_tag import GetTagRequest, GetTagResponse, GetTagUseCase, TagStatsItem
from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase, TagItem
from .search_tags import SearchTagsRequest, SearchTagsResponse, SearchTagsUseCase

__all__ = [
    "GetTagRequest",
    "GetTagResponse",
    "GetTagUseCase",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "SearchTagsRequest",
    "SearchTagsResponse",
    "SearchTagsUseCase",
    "TagItem",
    "TagStatsItem",
]
