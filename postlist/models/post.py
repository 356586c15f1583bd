from enum import Enum

from sqlalchemy import Index, Text
from sqlmodel import Field

from postlist.models.base import BaseModel


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class PostCategory(str, Enum):
    NORMAL = "NORMAL"
    NOTICE = "NOTICE"
    EVENT = "EVENT"


class Post(BaseModel, table=True):
    """
    SQLModel representing the paginated record.

    The listing engine never writes to this table. ``id`` is monotonic and
    together with ``title``, ``created_at`` and ``updated_at`` forms the set
    of columns a listing can be sorted (and cursor-paginated) by.

    Attributes:
        id: Primary key identifier for the post
        title: Post title, prefix-matched or full-text searched
        content: Free-text body, only reached by full-text search
        status: Publication state
        category: Kind of post
        author_id: Foreign key to the authoring user
    """

    __table_args__ = (
        # Listing queries always filter soft-deleted rows before sorting
        Index("ix_post_deleted_at_id", "deleted_at", "id"),
        {"extend_existing": True},
    )

    title: str = Field(max_length=255, index=True)
    content: str | None = Field(default=None, sa_type=Text)
    status: PostStatus = Field(default=PostStatus.DRAFT, index=True)
    category: PostCategory = Field(default=PostCategory.NORMAL, index=True)
    author_id: int = Field(foreign_key="user.id", index=True)
