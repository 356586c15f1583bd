"""
Commands for post listing operations.

Every command depends on a ``PostStore`` only, so the same command runs
against the SQL repository in production and the in-memory store in tests.

Example:
    ```python
    command = ListPostsCursorCommand(store)
    page = await command.execute(
        ListPostsCursorInput(
            filters=PostFilters(status=PostStatus.PUBLISHED),
            window=CursorWindow(limit=20, cursor="120"),
        )
    )
    ```
"""

from pydantic import BaseModel, Field

from postlist.commands.base import BaseCommand
from postlist.exceptions import NotFoundError
from postlist.logging import logger
from postlist.protocols import PostStore
from postlist.schemas.filters import PostFilters
from postlist.schemas.pagination import (
    CursorMeta,
    CursorWindow,
    OffsetMeta,
    OffsetWindow,
)
from postlist.schemas.response import (
    CountResponse,
    CursorPageResponse,
    OffsetPageResponse,
    PostResponse,
)
from postlist.schemas.sorting import SortSpec
from postlist.storage.estimator import CountEstimator
from postlist.storage.filter_compiler import compile_filters
from postlist.storage.pagination import (
    CursorPaginationStrategy,
    OffsetPaginationStrategy,
    PaginationStrategy,
)
from postlist.storage.search import as_search_phrase
from postlist.utils.result_assembler import (
    assemble_count,
    assemble_cursor_page,
    assemble_offset_page,
    assemble_post,
)

# ============================================================================
# Input Models
# ============================================================================


class ListPostsOffsetInput(BaseModel):  # type: ignore[misc]
    """Input model for page-numbered listings."""

    filters: PostFilters = Field(default_factory=PostFilters)
    sort: SortSpec = Field(default_factory=SortSpec)
    window: OffsetWindow = Field(default_factory=OffsetWindow)


class ListPostsCursorInput(BaseModel):  # type: ignore[misc]
    """Input model for cursor listings and searches."""

    filters: PostFilters = Field(default_factory=PostFilters)
    sort: SortSpec = Field(default_factory=SortSpec)
    window: CursorWindow = Field(default_factory=CursorWindow)


class CountPostsInput(BaseModel):  # type: ignore[misc]
    filters: PostFilters = Field(default_factory=PostFilters)


class GetPostInput(BaseModel):  # type: ignore[misc]
    id: int = Field(..., description="Post ID")
    with_comments: bool = Field(
        default=False, description="Include non-deleted comments"
    )


# ============================================================================
# Commands
# ============================================================================


class ListPostsOffsetCommand(
    BaseCommand[ListPostsOffsetInput, OffsetPageResponse]
):
    """List posts by page number with an exact total and comment counts."""

    def __init__(self, store: PostStore):
        self.store = store

    async def execute(
        self, input_data: ListPostsOffsetInput
    ) -> OffsetPageResponse:
        strategy: PaginationStrategy[OffsetMeta] = OffsetPaginationStrategy(
            self.store, page=input_data.window.page, with_comment_count=True
        )
        rows, meta = await strategy.paginate(
            compile_filters(input_data.filters),
            input_data.sort,
            input_data.window.limit,
        )
        return assemble_offset_page(rows, meta)


class ListPostsCursorCommand(
    BaseCommand[ListPostsCursorInput, CursorPageResponse]
):
    """
    List posts in keyset windows.

    Raises:
        InvalidCursorError: If the cursor does not parse for the sort column.
    """

    def __init__(self, store: PostStore):
        self.store = store

    async def execute(
        self, input_data: ListPostsCursorInput
    ) -> CursorPageResponse:
        strategy: PaginationStrategy[CursorMeta] = CursorPaginationStrategy(
            self.store, cursor=input_data.window.cursor
        )
        rows, meta = await strategy.paginate(
            compile_filters(input_data.filters),
            input_data.sort,
            input_data.window.limit,
        )
        return assemble_cursor_page(rows, meta)


class SearchPostsCommand(BaseCommand[ListPostsCursorInput, CursorPageResponse]):
    """
    Cursor listing with the title term forced to full-text search.

    A single-word title becomes a quoted phrase, so a search for ``alpha``
    matches ``alpha`` as a word in title or content rather than as a title
    prefix.
    """

    def __init__(self, store: PostStore):
        self.store = store

    async def execute(
        self, input_data: ListPostsCursorInput
    ) -> CursorPageResponse:
        filters = input_data.filters
        if filters.title:
            phrase = as_search_phrase(filters.title)
            logger.debug(f"Search term {filters.title!r} -> {phrase!r}")
            filters = filters.model_copy(update={"title": phrase})

        listing = ListPostsCursorCommand(self.store)
        return await listing.execute(
            input_data.model_copy(update={"filters": filters})
        )


class CountPostsCommand(BaseCommand[CountPostsInput, CountResponse]):
    """Exact count of matching posts."""

    def __init__(self, store: PostStore):
        self.store = store

    async def execute(self, input_data: CountPostsInput) -> CountResponse:
        estimator = CountEstimator(self.store)
        total = await estimator.exact_count(input_data.filters)
        return CountResponse(total=total, estimated=False)


class EstimateCountCommand(BaseCommand[CountPostsInput, CountResponse]):
    """Count matching posts, from table statistics when unfiltered."""

    def __init__(self, store: PostStore, estimator: CountEstimator | None = None):
        self.store = store
        self.estimator = estimator or CountEstimator(store)

    async def execute(self, input_data: CountPostsInput) -> CountResponse:
        return assemble_count(await self.estimator.count(input_data.filters))


class GetPostCommand(BaseCommand[GetPostInput, PostResponse]):
    """
    Look up one post by id.

    Raises:
        NotFoundError: If the post does not exist or is soft-deleted.
    """

    def __init__(self, store: PostStore):
        self.store = store

    async def execute(self, input_data: GetPostInput) -> PostResponse:
        row = await self.store.get(
            input_data.id, with_comments=input_data.with_comments
        )
        if row is None:
            raise NotFoundError(f"Post with ID {input_data.id} not found")
        return assemble_post(row)
