from sqlmodel import Field

from postlist.models.base import BaseModel


class User(BaseModel, table=True):
    """
    SQLModel representing a post author.

    Only ``id`` and ``name`` are ever projected into listing results; the
    author filter reaches ``name`` through a correlated EXISTS instead of
    loading this row.

    Attributes:
        id: Primary key identifier for the user
        email: Contact address of the user
        name: Display name, used by the author-name filter
    """

    __table_args__ = {"extend_existing": True}

    email: str = Field(max_length=255)
    name: str | None = Field(default=None, max_length=255, index=True)
