"""
Cursor-based pagination strategy (keyset windows).

Best for APIs, infinite scroll and large tables: each page is a bounded
index range scan starting after the previous page's last sort value, so the
cost does not grow with depth. No total is computed.
"""

from postlist.logging import logger
from postlist.protocols import PostStore
from postlist.schemas.pagination import CursorMeta
from postlist.schemas.post import PostRow
from postlist.schemas.sorting import SortSpec
from postlist.storage.cursor_token import decode_cursor, row_cursor
from postlist.storage.predicate import (
    SORT_FIELDS,
    Comparison,
    Inequality,
    Predicate,
)
from postlist.utils.metrics import pagination_query_duration_seconds


class CursorPaginationStrategy:
    """
    Cursor pagination on the sort column.

    The cursor is the sort value of the last row already returned; the next
    window holds rows strictly after it in sort order. Forward only.

    On a column with duplicate values (``title``, timestamps) rows sharing
    the boundary value with the previous page's last row are skipped.

    Example:
        ```python
        strategy = CursorPaginationStrategy(store, cursor=None)
        rows, meta = await strategy.paginate(predicate, sort, 20)

        if meta.has_more:
            strategy = CursorPaginationStrategy(store, cursor=meta.next_cursor)
            rows, meta = await strategy.paginate(predicate, sort, 20)
        ```
    """

    def __init__(
        self,
        store: PostStore,
        cursor: str | None = None,
        with_comment_count: bool = False,
    ):
        """
        Initialize cursor pagination strategy.

        Args:
            store: Query-execution interface.
            cursor: ``next_cursor`` of the previous page, or None to start
                from the beginning.
            with_comment_count: Attach comment counts to fetched rows.
        """
        self.store = store
        self.cursor = cursor
        self.with_comment_count = with_comment_count

    def window(self, predicate: Predicate, sort: SortSpec) -> Predicate:
        """
        Extend ``predicate`` with the cursor bound, if a cursor is set.

        Raises:
            InvalidCursorError: If the cursor does not parse for the sort
                column.
        """
        if self.cursor is None:
            return predicate

        bound = decode_cursor(self.cursor, sort.column)
        op = Comparison.GT if sort.ascending else Comparison.LT
        return predicate.and_(Inequality(SORT_FIELDS[sort.column], op, bound))

    async def paginate(
        self,
        predicate: Predicate,
        sort: SortSpec,
        page_size: int,
    ) -> tuple[list[PostRow], CursorMeta]:
        """
        Fetch the window after the cursor.

        Returns:
            Tuple of (rows, metadata) where metadata carries ``has_more`` and
            ``next_cursor`` (None when nothing follows).

        Raises:
            InvalidCursorError: If the cursor is malformed. Raised before
                the store is touched.
            StoreFailureError: If the fetch fails.
        """
        windowed = self.window(predicate, sort)

        with pagination_query_duration_seconds.labels(strategy="cursor").time():
            # One extra row tells whether another page follows
            rows = await self.store.fetch(
                windowed,
                sort,
                limit=page_size + 1,
                with_comment_count=self.with_comment_count,
            )

        has_more = len(rows) > page_size
        if has_more:
            rows = rows[:page_size]

        next_cursor = row_cursor(rows[-1], sort.column) if has_more else None
        logger.debug(
            f"Cursor page after {self.cursor!r}: {len(rows)} rows "
            f"(next: {next_cursor!r})"
        )
        meta = CursorMeta(
            limit=page_size,
            has_more=has_more,
            next_cursor=next_cursor,
        )
        return rows, meta
