"""
Type-safe filter schemas for post listing queries.

All fields are optional and combine with AND semantics; an absent field
imposes no constraint. Filters arrive here already validated by the
transport layer and are compiled into a predicate by
``postlist.storage.filter_compiler``.
"""

from typing import Any

from pydantic import BaseModel, Field

from postlist.models.post import PostCategory, PostStatus


class BaseFilter(BaseModel):  # type: ignore[misc]
    """
    Base class for all filter schemas.

    Provides common utilities for converting filters to dictionaries
    and excluding None values.
    """

    model_config = {
        "extra": "forbid",  # Reject unexpected fields
        "frozen": True,
    }

    def to_dict(self) -> dict[str, Any]:
        """
        Convert filter schema to dictionary, excluding None values.

        Example:
            >>> PostFilters(title="alpha", status=None).to_dict()
            {'title': 'alpha'}
        """
        return {
            k: v
            for k, v in self.model_dump(mode="json").items()
            if v is not None
        }

    def has_filters(self) -> bool:
        """Return True when at least one field constrains the result."""
        return bool(self.to_dict())


class PostFilters(BaseFilter):
    """
    Filter criteria for post listings, counts and estimates.

    Title matching policy: a title containing whitespace is a phrase and is
    matched with full-text search over title and content; a single token is
    matched as a title prefix.

    Example:
        >>> filters = PostFilters(title="alpha beta", status=PostStatus.PUBLISHED)
        >>> filters.has_filters()
        True
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        description="Title prefix (single token) or full-text phrase",
    )
    author_name: str | None = Field(
        default=None,
        min_length=1,
        description="Author name (case-insensitive partial match)",
    )
    status: PostStatus | None = Field(
        default=None,
        description="Filter by exact publication status",
    )
    category: PostCategory | None = Field(
        default=None,
        description="Filter by exact post category",
    )
