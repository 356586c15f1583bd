"""
Sort specification for post listings.

Sortable columns form a closed enumeration. Every member is monotonic,
comparable and stable for a fixed record, so its value can be carried in a
cursor token without loss.
"""

from enum import Enum

from pydantic import BaseModel

from postlist.exceptions import InvalidSortError


class SortColumn(str, Enum):
    ID = "id"
    TITLE = "title"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):  # type: ignore[misc]
    """
    Column and direction a listing is ordered by.

    Defaults mirror the public API: newest first.
    """

    model_config = {"frozen": True}

    column: SortColumn = SortColumn.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC

    @classmethod
    def parse(
        cls,
        column: str | SortColumn | None = None,
        direction: str | SortDirection | None = None,
    ) -> "SortSpec":
        """
        Build a SortSpec from raw request values.

        Args:
            column: One of ``id``, ``title``, ``createdAt``, ``updatedAt``.
                None selects the default column.
            direction: ``asc`` or ``desc`` (case-insensitive). None selects
                the default direction.

        Returns:
            Validated SortSpec.

        Raises:
            InvalidSortError: If either value is outside the allow-list.
        """
        spec = cls()
        try:
            sort_column = (
                SortColumn(column) if column is not None else spec.column
            )
        except ValueError:
            allowed = ", ".join(c.value for c in SortColumn)
            raise InvalidSortError(
                f"Invalid sort column '{column}'. Allowed: {allowed}"
            )

        if isinstance(direction, str) and not isinstance(
            direction, SortDirection
        ):
            direction = direction.lower()
        try:
            sort_direction = (
                SortDirection(direction)
                if direction is not None
                else spec.direction
            )
        except ValueError:
            raise InvalidSortError(
                f"Invalid sort direction '{direction}'. Allowed: asc, desc"
            )

        return cls(column=sort_column, direction=sort_direction)
