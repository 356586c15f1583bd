"""
Row shapes returned by the query-execution interface.

These are what a ``PostStore`` hands back: a post projected together with
its author's id and name (never the full author row), optionally with a
derived comment count or the post's comments.
"""

from datetime import datetime

from pydantic import BaseModel

from postlist.models.post import PostCategory, PostStatus


class CommentRow(BaseModel):  # type: ignore[misc]
    id: int
    text: str
    author_id: int
    author_name: str | None = None
    created_at: datetime


class PostRow(BaseModel):  # type: ignore[misc]
    id: int
    title: str
    content: str | None = None
    status: PostStatus
    category: PostCategory
    author_id: int
    author_name: str | None = None
    created_at: datetime
    updated_at: datetime
    comment_count: int | None = None
    comments: list[CommentRow] | None = None
