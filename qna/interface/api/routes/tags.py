"""Tag routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from qna.application.usecase.tag import (
    GetTagRequest,
    GetTagResponse,
    GetTagUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    SearchTagsRequest,
    SearchTagsResponse,
    SearchTagsUseCase,
)
from qna.domain.service import JWTService

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


@router.get("", response_model=ListTagsResponse)
async def list_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
    limit: int = Query(default=100, ge=1, le=100),
) -> ListTagsResponse:
    """List tags in use, most used first.

    Public endpoint - no authentication required.
    """
    return await list_tags_use_case.execute(ListTagsRequest(limit=limit))


@router.get("/popular", response_model=ListTagsResponse)
async def popular_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
    limit: int = Query(default=20, ge=1, le=100),
) -> ListTagsResponse:
    """The most used tags (20 unless asked otherwise)."""
    return await list_tags_use_case.execute(ListTagsRequest(limit=limit))


@router.get("/search/{query}", response_model=SearchTagsResponse)
async def search_tags(
    query: str,
    search_tags_use_case: FromDishka[SearchTagsUseCase],
    limit: int = Query(default=10, ge=1, le=100),
) -> SearchTagsResponse:
    """Tags in use whose name contains ``query``, most used first."""
    return await search_tags_use_case.execute(
        SearchTagsRequest(query=query, limit=limit)
    )


@router.get("/{tag}", response_model=GetTagResponse)
async def get_tag(
    tag: str,
    get_tag_use_case: FromDishka[GetTagUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=10, ge=1, le=50),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> GetTagResponse:
    """Newest questions with a tag, plus the tag's totals.

    Authentication is optional; signed-in users see their own votes.

    Args:
        tag: Tag name (case-insensitive)
        get_tag_use_case: Get tag use case from DI
        jwt_service: JWT service for token verification (injected)
        limit: Page size
        offset: Number of questions to skip
        auth_token: JWT token from cookie

    Returns:
        Questions, total count and tag statistics
    """
    identity = jwt_service.get_identity_from_token(auth_token)

    return await get_tag_use_case.execute(
        GetTagRequest(
            tag=tag,
            limit=limit,
            offset=offset,
            user_id=str(identity.user_id) if identity else None,
        )
    )
