"""
Row-count estimation with an exact-count fallback.

Unfiltered totals over a large table are expensive to count exactly, but
the store keeps a cardinality hint in its planner statistics. The estimator
uses that hint when it is plausible and falls back to an exact count
otherwise:

1. filters present: exact count (the hint covers the whole table only);
2. hint missing, non-positive, or below ``min_trusted_rows``: exact count
   (tables that were never analyzed report -1 or 0, and counting a small
   table is cheap anyway);
3. hint lookup failed or timed out: exact count;
4. otherwise: the hint, flagged as estimated.

The hint covers soft-deleted rows too and may be stale; ``estimated=True``
is the caller's signal that the total is approximate.
"""

import asyncio

from postlist.exceptions import StatisticsUnavailableError
from postlist.logging import logger
from postlist.protocols import PostStore
from postlist.schemas.filters import PostFilters
from postlist.schemas.pagination import CountEstimate
from postlist.settings import app_settings
from postlist.storage.filter_compiler import compile_filters
from postlist.utils.metrics import count_estimate_outcomes_total


class CountEstimator:
    """
    Count posts, cheaply when an estimate is good enough.

    Attributes:
        store: Query-execution interface.
        min_trusted_rows: Smallest statistics value taken at face value.
        statistics_timeout: Seconds to wait for the statistics lookup.
        table_name: Table whose statistics are consulted.
    """

    def __init__(
        self,
        store: PostStore,
        min_trusted_rows: int | None = None,
        statistics_timeout: float | None = None,
        table_name: str | None = None,
    ):
        self.store = store
        self.min_trusted_rows = (
            app_settings.ESTIMATE_MIN_TRUSTED_ROWS
            if min_trusted_rows is None
            else min_trusted_rows
        )
        self.statistics_timeout = (
            app_settings.STATISTICS_TIMEOUT_SECONDS
            if statistics_timeout is None
            else statistics_timeout
        )
        self.table_name = table_name or app_settings.POST_TABLE_NAME

    async def exact_count(self, filters: PostFilters | None = None) -> int:
        """
        Exact number of non-deleted posts matching ``filters``.

        Raises:
            StoreFailureError: If the count fails.
        """
        return await self.store.count(compile_filters(filters))

    async def count(self, filters: PostFilters | None = None) -> CountEstimate:
        """
        Return an estimated or exact total for ``filters``.

        Raises:
            StoreFailureError: If the exact count the ladder falls back to
                fails. Statistics failures are never raised.
        """
        if filters is not None and filters.has_filters():
            count_estimate_outcomes_total.labels(outcome="filtered").inc()
            return CountEstimate(total=await self.exact_count(filters))

        try:
            hint = await asyncio.wait_for(
                self.store.table_statistics(self.table_name),
                timeout=self.statistics_timeout,
            )
        except (StatisticsUnavailableError, asyncio.TimeoutError) as ex:
            logger.warning(
                f"Table statistics for '{self.table_name}' unavailable, "
                f"falling back to exact count: {ex!r}"
            )
            count_estimate_outcomes_total.labels(outcome="unavailable").inc()
            return CountEstimate(total=await self.exact_count())

        if hint is None or hint <= 0 or hint < self.min_trusted_rows:
            logger.debug(
                f"Table statistics for '{self.table_name}' untrusted "
                f"({hint}), falling back to exact count"
            )
            count_estimate_outcomes_total.labels(outcome="untrusted").inc()
            return CountEstimate(total=await self.exact_count())

        count_estimate_outcomes_total.labels(outcome="estimated").inc()
        return CountEstimate(total=hint, estimated=True)
