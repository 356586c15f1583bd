"""
Dependency injection configuration for FastAPI.

Handlers depend on ``PostStoreDep``; tests swap the store through
``app.dependency_overrides[get_post_store]``.

Example:
    ```python
    @router.get("/posts/count")
    async def count_posts(store: PostStoreDep) -> CountResponse:
        return await CountPostsCommand(store).execute(CountPostsInput())
    ```
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from postlist.constants import FIRST_PAGE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from postlist.models.post import PostCategory, PostStatus
from postlist.protocols import PostStore
from postlist.repositories.post_repository import PostRepository
from postlist.schemas.filters import PostFilters
from postlist.schemas.pagination import CursorWindow, OffsetWindow
from postlist.schemas.sorting import SortSpec
from postlist.settings import app_settings
from postlist.storage.db import get_session
from postlist.utils.error_handler import handle_http_errors

# ============================================================================
# Database Session Dependencies
# ============================================================================

SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# Store Dependencies
# ============================================================================


def get_post_store(session: SessionDep) -> PostStore:
    """
    Get the post store for the request session.

    Returns:
        PostRepository bound to the request-scoped session.
    """
    return PostRepository(session)


PostStoreDep = Annotated[PostStore, Depends(get_post_store)]


# ============================================================================
# Query Parameter Dependencies
# ============================================================================


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def get_post_filters(
    title: str | None = Query(
        default=None,
        description="Title prefix (one word) or full-text phrase",
    ),
    author_name: str | None = Query(
        default=None,
        alias="authorName",
        description="Author name (case-insensitive partial match)",
    ),
    status: PostStatus | None = Query(default=None),
    category: PostCategory | None = Query(default=None),
) -> PostFilters:
    """Collect filter query parameters; blank strings count as absent."""
    return PostFilters(
        title=_blank_to_none(title),
        author_name=_blank_to_none(author_name),
        status=status,
        category=category,
    )


@handle_http_errors
async def get_sort_spec(
    sort_by: str | None = Query(
        default=None,
        alias="sortBy",
        description="One of id, title, createdAt, updatedAt",
    ),
    sort_order: str | None = Query(
        default=None,
        alias="sortOrder",
        description="asc or desc",
    ),
) -> SortSpec:
    """
    Validate sort query parameters.

    Raises:
        HTTPException: 400 if either value is outside the allow-list.
    """
    return SortSpec.parse(sort_by, sort_order)


def get_offset_window(
    page: int = Query(default=FIRST_PAGE, ge=FIRST_PAGE),
    limit: int = Query(
        default=app_settings.DEFAULT_PAGE_SIZE,
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
    ),
) -> OffsetWindow:
    return OffsetWindow(page=page, limit=limit)


def get_cursor_window(
    cursor: str | None = Query(
        default=None,
        description="nextCursor of the previous page",
    ),
    limit: int = Query(
        default=app_settings.DEFAULT_PAGE_SIZE,
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
    ),
) -> CursorWindow:
    return CursorWindow(limit=limit, cursor=cursor or None)


FiltersDep = Annotated[PostFilters, Depends(get_post_filters)]
SortDep = Annotated[SortSpec, Depends(get_sort_spec)]
OffsetWindowDep = Annotated[OffsetWindow, Depends(get_offset_window)]
CursorWindowDep = Annotated[CursorWindow, Depends(get_cursor_window)]
