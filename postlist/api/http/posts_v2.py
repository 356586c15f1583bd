"""
Version 2 post endpoints: cursor listings, full-text search and
statistics-backed count estimates.

Example:
    GET /api/v2/posts?limit=20&sortBy=id&sortOrder=asc
    GET /api/v2/posts?limit=20&sortBy=id&sortOrder=asc&cursor=20
"""

from fastapi import APIRouter

from postlist.commands.post_commands import (
    CountPostsCommand,
    CountPostsInput,
    EstimateCountCommand,
    GetPostCommand,
    GetPostInput,
    ListPostsCursorCommand,
    ListPostsCursorInput,
    SearchPostsCommand,
)
from postlist.dependencies import (
    CursorWindowDep,
    FiltersDep,
    PostStoreDep,
    SortDep,
)
from postlist.schemas.response import (
    CountResponse,
    CursorPageResponse,
    PostResponse,
)
from postlist.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api/v2/posts", tags=["posts v2"])


@router.get(
    "",
    response_model=CursorPageResponse,
    response_model_exclude_none=True,
    summary="List posts with a cursor",
)
@handle_http_errors
async def list_posts(
    store: PostStoreDep,
    filters: FiltersDep,
    sort: SortDep,
    window: CursorWindowDep,
) -> CursorPageResponse:
    """
    List non-deleted posts after ``cursor`` in sort order.

    Pass ``nextCursor`` of a response as ``cursor`` with the same filters
    and sort to continue. A cursor that does not parse for ``sortBy`` is
    rejected with 400.
    """
    command = ListPostsCursorCommand(store)
    input_data = ListPostsCursorInput(filters=filters, sort=sort, window=window)
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
    "/count/estimated",
    response_model=CountResponse,
    response_model_exclude_none=True,
    summary="Estimate the number of posts",
)
@handle_http_errors
async def estimate_posts(
    store: PostStoreDep, filters: FiltersDep
) -> CountResponse:
    """
    Count posts from table statistics when no filter is given.

    ``estimated`` tells whether the total is approximate. Filtered requests,
    small or never-analyzed tables and unavailable statistics are counted
    exactly.
    """
    command = EstimateCountCommand(store)
    return await command.execute(CountPostsInput(filters=filters))


@router.get(
    "/search",
    response_model=CursorPageResponse,
    response_model_exclude_none=True,
    summary="Full-text search with a cursor",
)
@handle_http_errors
async def search_posts(
    store: PostStoreDep,
    filters: FiltersDep,
    sort: SortDep,
    window: CursorWindowDep,
) -> CursorPageResponse:
    """
    Like the listing, but ``title`` is always matched as full text over
    title and content; a single word is searched as a quoted phrase.
    """
    command = SearchPostsCommand(store)
    input_data = ListPostsCursorInput(filters=filters, sort=sort, window=window)
    return await command.execute(input_data)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    response_model_exclude_none=True,
    summary="Get a post without comments",
)
@handle_http_errors
async def get_post(post_id: int, store: PostStoreDep) -> PostResponse:
    command = GetPostCommand(store)
    return await command.execute(GetPostInput(id=post_id))


@router.get(
    "/{post_id}/full",
    response_model=PostResponse,
    response_model_exclude_none=True,
    summary="Get a post with its comments",
)
@handle_http_errors
async def get_post_full(post_id: int, store: PostStoreDep) -> PostResponse:
    command = GetPostCommand(store)
    return await command.execute(GetPostInput(id=post_id, with_comments=True))
