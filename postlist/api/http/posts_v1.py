"""
Version 1 post endpoints: page-numbered listings with exact totals.

Example:
    GET /api/v1/posts?page=3&limit=20&title=alpha&sortBy=id&sortOrder=asc
"""

from fastapi import APIRouter

from postlist.commands.post_commands import (
    CountPostsCommand,
    CountPostsInput,
    GetPostCommand,
    GetPostInput,
    ListPostsOffsetCommand,
    ListPostsOffsetInput,
)
from postlist.dependencies import (
    FiltersDep,
    OffsetWindowDep,
    PostStoreDep,
    SortDep,
)
from postlist.schemas.response import (
    CountResponse,
    OffsetPageResponse,
    PostResponse,
)
from postlist.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/v1/posts", tags=["posts v1"])


@router.get(
    "",
    response_model=OffsetPageResponse,
    response_model_exclude_none=True,
    summary="List posts by page number",
)
@handle_http_errors
async def list_posts(
    store: PostStoreDep,
    filters: FiltersDep,
    sort: SortDep,
    window: OffsetWindowDep,
) -> OffsetPageResponse:
    """
    List non-deleted posts with an exact total and last page.

    Each post carries its author and comment count. Pages past the last
    one return no data and the same total.
    """
    command = ListPostsOffsetCommand(store)
    input_data = ListPostsOffsetInput(filters=filters, sort=sort, window=window)
    return await command.execute(input_data)


@router.get(
    "/count",
    response_model=CountResponse,
    response_model_exclude_none=True,
    summary="Count posts exactly",
)
@handle_http_errors
async def count_posts(store: PostStoreDep, filters: FiltersDep) -> CountResponse:
    command = CountPostsCommand(store)
    return await command.execute(CountPostsInput(filters=filters))


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    response_model_exclude_none=True,
    summary="Get a post with its comments",
)
@handle_http_errors
async def get_post(post_id: int, store: PostStoreDep) -> PostResponse:
    """
    Get one post with author and non-deleted comments.

    Returns 404 for missing and soft-deleted posts alike.
    """
    command = GetPostCommand(store)
    return await command.execute(GetPostInput(id=post_id, with_comments=True))
