"""
Protocol classes for structural subtyping (duck typing with type safety).

The listing engine never talks to a database session directly; it talks to
a ``PostStore``. ``PostRepository`` is the SQL implementation, and any other
class with the same methods (the in-memory store used by the tests, for
example) is accepted without inheriting from anything.

Example:
    ```python
    from postlist.protocols import PostStore


    async def newest(store: PostStore) -> list[PostRow]:
        return await store.fetch(compile_filters(None), SortSpec(), limit=5)
    ```
"""

from typing import Protocol, runtime_checkable

from postlist.schemas.post import PostRow
from postlist.schemas.sorting import SortSpec
from postlist.storage.predicate import Predicate


@runtime_checkable
class PostStore(Protocol):
    """
    Query-execution interface consumed by paginators and the estimator.

    Implementations render the predicate themselves; callers only ever hand
    over predicate values, sort specs and bounds.
    """

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        limit: int,
        offset: int | None = None,
        with_comment_count: bool = False,
    ) -> list[PostRow]:
        """
        Fetch matching posts in sort order with the author projection.

        Args:
            predicate: Rows must satisfy every clause.
            sort: Ordering of the returned rows.
            limit: Maximum number of rows.
            offset: Rows to skip before the first returned one.
            with_comment_count: Attach the number of non-deleted comments.

        Raises:
            StoreFailureError: If the store cannot execute the fetch.
        """
        ...

    async def count(self, predicate: Predicate) -> int:
        """
        Exact number of rows matching the predicate.

        Raises:
            StoreFailureError: If the store cannot execute the count.
        """
        ...

    async def table_statistics(self, table_name: str) -> int | None:
        """
        Cardinality hint kept by the store for a whole table.

        The value may be stale, zero or negative when the store has not
        gathered statistics yet; callers decide whether to trust it.

        Raises:
            StatisticsUnavailableError: If the hint cannot be read.
        """
        ...

    async def get(
        self, post_id: int, with_comments: bool = False
    ) -> PostRow | None:
        """
        Look up one non-deleted post by id.

        Returns:
            The post with its author projection (and non-deleted comments
            when requested), or None if it is missing or soft-deleted.

        Raises:
            StoreFailureError: If the store cannot execute the lookup.
        """
        ...
