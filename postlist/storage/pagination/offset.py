"""
Offset-based pagination strategy (traditional page numbers).

Best for user-facing interfaces where users expect "Page 1, 2, 3..."
navigation and a total. Cost grows with the offset, because the store must
walk past every skipped row.
"""

import math

from postlist.logging import logger
from postlist.protocols import PostStore
from postlist.schemas.pagination import OffsetMeta
from postlist.schemas.post import PostRow
from postlist.schemas.sorting import SortSpec
from postlist.settings import app_settings
from postlist.storage.predicate import Predicate
from postlist.utils.metrics import pagination_query_duration_seconds
from postlist.utils.pagination_cache import get_cached_count, set_cached_count


class OffsetPaginationStrategy:
    """
    Offset-based pagination (page 1, 2, 3...).

    Issues one exact count and one row fetch over the same predicate. The
    two are not taken from a single snapshot, so under concurrent writes the
    total and the rows can disagree slightly.

    Pros:
    - Shows total and last page
    - Allows jumping to any page

    Cons:
    - O(n) cost for large offsets
    - Duplicates/gaps when rows are inserted or deleted between requests

    Example:
        ```python
        strategy = OffsetPaginationStrategy(store, page=2)
        rows, meta = await strategy.paginate(predicate, SortSpec(), 20)
        print(f"Page {meta.page} of {meta.last_page} ({meta.total} posts)")
        ```
    """

    def __init__(
        self,
        store: PostStore,
        page: int = 1,
        cache_count: bool | None = None,
        with_comment_count: bool = True,
    ):
        """
        Initialize offset pagination strategy.

        Args:
            store: Query-execution interface.
            page: Page number (1-indexed).
            cache_count: Serve/store the total through the Redis count
                cache. Defaults to ``COUNT_CACHE_ENABLED``.
            with_comment_count: Attach comment counts to fetched rows.
        """
        self.store = store
        self.page = page
        self.cache_count = (
            app_settings.COUNT_CACHE_ENABLED
            if cache_count is None
            else cache_count
        )
        self.with_comment_count = with_comment_count

    async def paginate(
        self,
        predicate: Predicate,
        sort: SortSpec,
        page_size: int,
    ) -> tuple[list[PostRow], OffsetMeta]:
        """
        Fetch one numbered page.

        Pages past the last one come back empty with the same total.

        Returns:
            Tuple of (rows, metadata) where metadata carries ``total``,
            ``page``, ``limit`` and ``last_page``.

        Raises:
            StoreFailureError: If the count or the fetch fails.
        """
        with pagination_query_duration_seconds.labels(strategy="offset").time():
            total = await self._total(predicate)
            offset = (self.page - 1) * page_size
            rows = await self.store.fetch(
                predicate,
                sort,
                limit=page_size,
                offset=offset,
                with_comment_count=self.with_comment_count,
            )

        last_page = math.ceil(total / page_size) if total > 0 else 0
        logger.debug(
            f"Offset page {self.page}/{last_page}: {len(rows)} rows "
            f"(total: {total})"
        )
        meta = OffsetMeta(
            total=total,
            page=self.page,
            limit=page_size,
            last_page=last_page,
        )
        return rows, meta

    async def _total(self, predicate: Predicate) -> int:
        if not self.cache_count:
            return await self.store.count(predicate)

        table_name = app_settings.POST_TABLE_NAME
        parameters = predicate.parameters()
        cached_total = await get_cached_count(table_name, parameters)
        if cached_total is not None:
            return cached_total

        total = await self.store.count(predicate)
        await set_cached_count(table_name, total, parameters)
        return total
