"""
Cursor token encoding and decoding.

A cursor token is the plain string form of the sort-column value of the
last row of the previous page: ``"4"`` for id 4, an ISO-8601 timestamp
for ``createdAt``/``updatedAt`` (UTC written as ``Z`` so the token needs
no percent-encoding) and the title itself for ``title``. Tokens carry
no server-side state and are not bound to the filters or sort order that
produced them; reusing one under different parameters yields a window with
no defined positional meaning.
"""

from datetime import datetime
from operator import attrgetter
from typing import Any, Callable

from postlist.exceptions import InvalidCursorError
from postlist.schemas.post import PostRow
from postlist.schemas.sorting import SortColumn


def _parse_int(token: str) -> int:
    return int(token)


def _parse_str(token: str) -> str:
    return token


def _parse_datetime(token: str) -> datetime:
    return datetime.fromisoformat(token)


# Sort column -> (row accessor, token parser)
_CURSOR_CODECS: dict[
    SortColumn, tuple[Callable[[PostRow], Any], Callable[[str], Any]]
] = {
    SortColumn.ID: (attrgetter("id"), _parse_int),
    SortColumn.TITLE: (attrgetter("title"), _parse_str),
    SortColumn.CREATED_AT: (attrgetter("created_at"), _parse_datetime),
    SortColumn.UPDATED_AT: (attrgetter("updated_at"), _parse_datetime),
}


def sort_value(row: PostRow, column: SortColumn) -> Any:
    """Return the value of ``row`` in the given sort column."""
    accessor, _ = _CURSOR_CODECS[column]
    return accessor(row)


def encode_cursor(value: Any) -> str:
    """
    Stringify a sort-column value into a cursor token.

    Example:
        >>> encode_cursor(4)
        '4'
    """
    if isinstance(value, datetime):
        return value.isoformat().replace("+00:00", "Z")
    return str(value)


def decode_cursor(token: str, column: SortColumn) -> Any:
    """
    Parse a cursor token back into a value of the sort column's type.

    Args:
        token: Token produced by ``encode_cursor`` for the same column.
        column: Sort column the listing is ordered by.

    Returns:
        Decoded bound for the cursor inequality.

    Raises:
        InvalidCursorError: If the token cannot be parsed for ``column``.
    """
    _, parser = _CURSOR_CODECS[column]
    try:
        return parser(token)
    except (ValueError, TypeError) as ex:
        raise InvalidCursorError(
            f"Invalid cursor format for sort column '{column.value}': {token!r}"
        ) from ex


def row_cursor(row: PostRow, column: SortColumn) -> str:
    """Token that continues a listing after ``row``."""
    return encode_cursor(sort_value(row, column))
