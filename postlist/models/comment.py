from sqlalchemy import Text
from sqlmodel import Field

from postlist.models.base import BaseModel


class Comment(BaseModel, table=True):
    """
    SQLModel representing a comment on a post.

    Read for the derived comment count of listing rows and for the "full"
    single-post view.
    """

    __table_args__ = {"extend_existing": True}

    text: str = Field(sa_type=Text)
    author_id: int = Field(foreign_key="user.id", index=True)
    post_id: int = Field(foreign_key="post.id", index=True)
