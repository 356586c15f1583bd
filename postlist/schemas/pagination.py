"""Page windows and pagination metadata."""

from typing import Annotated

from pydantic import BaseModel, Field

from postlist.constants import FIRST_PAGE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from postlist.settings import app_settings

PageSize = Annotated[int, Field(ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)]


class OffsetWindow(BaseModel):  # type: ignore[misc]
    """1-based page number plus page size."""

    model_config = {"frozen": True}

    page: Annotated[int, Field(ge=FIRST_PAGE)] = FIRST_PAGE
    limit: PageSize = app_settings.DEFAULT_PAGE_SIZE


class CursorWindow(BaseModel):  # type: ignore[misc]
    """Page size plus the opaque continuation token of the previous page."""

    model_config = {"frozen": True}

    limit: PageSize = app_settings.DEFAULT_PAGE_SIZE
    cursor: str | None = None


class OffsetMeta(BaseModel):  # type: ignore[misc]
    total: Annotated[int, Field(ge=0)]
    page: Annotated[int, Field(ge=FIRST_PAGE)]
    limit: PageSize
    last_page: Annotated[int, Field(ge=0)]


class CursorMeta(BaseModel):  # type: ignore[misc]
    limit: PageSize
    has_more: bool
    next_cursor: str | None = None


class CountEstimate(BaseModel):  # type: ignore[misc]
    """Row total plus whether it came from store statistics."""

    model_config = {"frozen": True}

    total: Annotated[int, Field(ge=0)]
    estimated: bool = False
