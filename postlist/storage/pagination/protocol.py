"""
Protocol definition for pagination strategies.

Follows the same structural-typing approach as ``postlist.protocols``: any
class with a matching ``paginate`` coroutine is a pagination strategy.
"""

from typing import Protocol, TypeVar

from postlist.schemas.pagination import CursorMeta, OffsetMeta
from postlist.schemas.post import PostRow
from postlist.schemas.sorting import SortSpec
from postlist.storage.predicate import Predicate

MetaT = TypeVar("MetaT", OffsetMeta, CursorMeta, covariant=True)


class PaginationStrategy(Protocol[MetaT]):
    """
    Protocol for pagination strategies.

    Type Parameters:
        MetaT: The metadata model the strategy returns with each page.
    """

    async def paginate(
        self,
        predicate: Predicate,
        sort: SortSpec,
        page_size: int,
    ) -> tuple[list[PostRow], MetaT]:
        """
        Fetch one page of posts.

        Args:
            predicate: Compiled filters; the strategy only adds windowing.
            sort: Ordering of the listing.
            page_size: Number of rows per page.

        Returns:
            Tuple of (rows, metadata).

        Raises:
            InvalidCursorError: If a cursor cannot be decoded.
            StoreFailureError: If the store fails.
        """
        ...
