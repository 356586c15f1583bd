"""
Pagination strategies for post listings.

This package implements the Strategy pattern for pagination: offset-based
("v1", page numbers plus an exact total) and cursor-based ("v2", keyset
windows without a total). Both consume the same compiled predicate and sort
spec, so a listing filtered one way returns the same rows under either
strategy, only windowed differently.

Example:
    ```python
    from postlist.storage.pagination import OffsetPaginationStrategy

    strategy = OffsetPaginationStrategy(store, page=2)
    rows, meta = await strategy.paginate(compile_filters(filters), sort, 20)
    ```
"""

from postlist.storage.pagination.cursor import CursorPaginationStrategy
from postlist.storage.pagination.offset import OffsetPaginationStrategy
from postlist.storage.pagination.protocol import PaginationStrategy

__all__ = [
    "PaginationStrategy",
    "OffsetPaginationStrategy",
    "CursorPaginationStrategy",
]
