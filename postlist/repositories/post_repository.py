"""
SQL implementation of the post store.

All reads go through a request-scoped ``AsyncSession``. The statistics
lookup is the exception: it opens its own short-lived session so that a
slow or failing catalog query can be abandoned without leaving the request
session in an unknown state.
"""

from typing import Any, Callable

from sqlalchemy import BigInteger, cast, column, table
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from postlist.exceptions import StatisticsUnavailableError, StoreFailureError
from postlist.logging import logger
from postlist.models.comment import Comment
from postlist.models.post import Post
from postlist.models.user import User
from postlist.schemas.post import CommentRow, PostRow
from postlist.schemas.sorting import SortSpec
from postlist.storage.db import async_session
from postlist.storage.predicate import Predicate
from postlist.storage.translator import order_by, render

# PostgreSQL catalog; reltuples is -1 (or 0) until the table is analyzed
pg_class = table(
    "pg_class",
    column("relname"),
    column("relkind"),
    column("reltuples"),
)


def _comment_count():
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id, Comment.deleted_at.is_(None))
        .correlate(Post)
        .scalar_subquery()
    )


def _to_row(post: Post, author_name: str | None, **extra: Any) -> PostRow:
    row = PostRow.model_validate(post, from_attributes=True)
    return row.model_copy(update={"author_name": author_name, **extra})


class PostRepository:
    """
    Read-only data access for posts.

    Attributes:
        session: The database session for row fetches and counts.
        statistics_session: Factory for the session used by
            ``table_statistics``.
    """

    def __init__(
        self,
        session: AsyncSession,
        statistics_session: Callable[[], AsyncSession] = async_session,
    ):
        self.session = session
        self.statistics_session = statistics_session

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        limit: int,
        offset: int | None = None,
        with_comment_count: bool = False,
    ) -> list[PostRow]:
        columns: list[Any] = [Post, User.name.label("author_name")]
        if with_comment_count:
            columns.append(_comment_count().label("comment_count"))

        stmt = (
            select(*columns)
            .outerjoin(User, User.id == Post.author_id)
            .where(render(predicate))
            .order_by(*order_by(sort))
            .limit(limit)
        )
        if offset:
            stmt = stmt.offset(offset)

        try:
            result = await self.session.exec(stmt)
            records = result.all()
        except SQLAlchemyError as ex:
            logger.error(f"Error fetching posts: {ex}")
            raise StoreFailureError("Failed to fetch posts") from ex

        if with_comment_count:
            return [
                _to_row(post, author_name, comment_count=comment_count)
                for post, author_name, comment_count in records
            ]
        return [_to_row(post, author_name) for post, author_name in records]

    async def count(self, predicate: Predicate) -> int:
        stmt = select(func.count(Post.id)).where(render(predicate))
        try:
            result = await self.session.exec(stmt)
            return result.one()
        except SQLAlchemyError as ex:
            logger.error(f"Error counting posts: {ex}")
            raise StoreFailureError("Failed to count posts") from ex

    async def table_statistics(self, table_name: str) -> int | None:
        stmt = select(cast(pg_class.c.reltuples, BigInteger)).where(
            pg_class.c.relname == table_name,
            pg_class.c.relkind == "r",
        )
        try:
            async with self.statistics_session() as session:
                result = await session.exec(stmt)
                return result.first()
        except (SQLAlchemyError, OSError) as ex:
            raise StatisticsUnavailableError(
                f"Statistics for table '{table_name}' unavailable: {ex}"
            ) from ex

    async def get(
        self, post_id: int, with_comments: bool = False
    ) -> PostRow | None:
        stmt = (
            select(Post, User.name.label("author_name"))
            .outerjoin(User, User.id == Post.author_id)
            .where(Post.id == post_id, Post.deleted_at.is_(None))
        )
        try:
            result = await self.session.exec(stmt)
            record = result.first()
            if record is None:
                return None

            post, author_name = record
            if not with_comments:
                return _to_row(post, author_name)

            comments = await self._comments(post_id)
        except SQLAlchemyError as ex:
            logger.error(f"Error retrieving post {post_id}: {ex}")
            raise StoreFailureError(f"Failed to retrieve post {post_id}") from ex

        return _to_row(post, author_name, comments=comments)

    async def _comments(self, post_id: int) -> list[CommentRow]:
        stmt = (
            select(Comment, User.name.label("author_name"))
            .outerjoin(User, User.id == Comment.author_id)
            .where(Comment.post_id == post_id, Comment.deleted_at.is_(None))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.session.exec(stmt)
        return [
            CommentRow.model_validate(comment, from_attributes=True).model_copy(
                update={"author_name": author_name}
            )
            for comment, author_name in result.all()
        ]
