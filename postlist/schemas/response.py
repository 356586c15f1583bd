"""
Outward response shapes consumed by the HTTP layer.

Field names are snake_case in Python and camelCase on the wire
(``lastPage``, ``nextCursor``, ``hasMore``, ``commentCount``).
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from postlist.models.post import PostCategory, PostStatus


class CamelModel(BaseModel):  # type: ignore[misc]
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthorSummary(CamelModel):
    id: int
    name: str | None = None


class CommentResponse(CamelModel):
    id: int
    text: str
    author: AuthorSummary
    created_at: datetime


class PostResponse(CamelModel):
    id: int
    title: str
    content: str | None = None
    status: PostStatus
    category: PostCategory
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime
    comment_count: int | None = None
    comments: list[CommentResponse] | None = None


class OffsetPageMeta(CamelModel):
    total: Annotated[int, Field(ge=0)]
    page: Annotated[int, Field(ge=1)]
    limit: Annotated[int, Field(ge=1)]
    last_page: Annotated[int, Field(ge=0)]


class OffsetPageResponse(CamelModel):
    data: list[PostResponse]
    meta: OffsetPageMeta


class CursorPageResponse(CamelModel):
    data: list[PostResponse]
    next_cursor: str | None = None
    has_more: bool
    count: Annotated[int, Field(ge=0)]


class CountResponse(CamelModel):
    total: Annotated[int, Field(ge=0)]
    estimated: bool = False
