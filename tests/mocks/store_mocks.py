"""
In-memory post store and row factories.

``InMemoryPostStore`` implements the ``PostStore`` protocol by evaluating
predicate clauses in Python, so paginators, the estimator and commands can
be exercised end to end without a database.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

from postlist.models.post import PostCategory, PostStatus
from postlist.protocols import PostStore
from postlist.schemas.post import CommentRow, PostRow
from postlist.schemas.sorting import SortSpec
from postlist.storage.cursor_token import sort_value
from postlist.storage.predicate import (
    Clause,
    Comparison,
    Contains,
    Equals,
    FullText,
    Inequality,
    IsNull,
    JoinExists,
    Predicate,
    Prefix,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass
class StoredAuthor:
    id: int
    name: str | None
    deleted_at: datetime | None = None


@dataclass
class StoredComment:
    id: int
    post_id: int
    author_id: int
    text: str
    created_at: datetime = BASE_TIME
    deleted_at: datetime | None = None


@dataclass
class StoredPost:
    id: int
    title: str
    author_id: int = 1
    content: str | None = None
    status: PostStatus = PostStatus.PUBLISHED
    category: PostCategory = PostCategory.NORMAL
    created_at: datetime = BASE_TIME
    updated_at: datetime = BASE_TIME
    deleted_at: datetime | None = None


def _words(text: str) -> set[str]:
    return set(re.findall(r"\w+", text.lower()))


@dataclass
class InMemoryPostStore:
    """
    ``PostStore`` over plain lists.

    Attributes:
        statistics: Value returned by ``table_statistics``; set
            ``statistics_error`` to make the lookup raise instead.
        calls: Names of the methods called, in order.
    """

    posts: list[StoredPost] = field(default_factory=list)
    authors: dict[int, StoredAuthor] = field(default_factory=dict)
    comments: list[StoredComment] = field(default_factory=list)
    statistics: int | None = None
    statistics_error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def _matches(self, post: StoredPost, clause: Clause) -> bool:
        if isinstance(clause, JoinExists):
            author = self.authors.get(post.author_id)
            return author is not None and self._matches(author, clause.clause)
        return self._matches_value(post, clause)

    @staticmethod
    def _matches_value(record: Any, clause: Clause) -> bool:
        if isinstance(clause, IsNull):
            return getattr(record, clause.field.value) is None
        if isinstance(clause, Equals):
            return getattr(record, clause.field.value) == clause.value
        if isinstance(clause, Prefix):
            value = getattr(record, clause.field.value) or ""
            return value.startswith(clause.term)
        if isinstance(clause, Contains):
            value = getattr(record, clause.field.value) or ""
            return clause.term.lower() in value.lower()
        if isinstance(clause, FullText):
            document = " ".join(
                getattr(record, f.value) or "" for f in clause.fields
            )
            return _words(clause.query) <= _words(document)
        if isinstance(clause, Inequality):
            value = getattr(record, clause.field.value)
            if clause.op is Comparison.GT:
                return value > clause.value
            return value < clause.value
        raise TypeError(f"Unsupported predicate clause: {clause!r}")

    def _row(self, post: StoredPost, **extra: Any) -> PostRow:
        author = self.authors.get(post.author_id)
        return PostRow(
            id=post.id,
            title=post.title,
            content=post.content,
            status=post.status,
            category=post.category,
            author_id=post.author_id,
            author_name=author.name if author else None,
            created_at=post.created_at,
            updated_at=post.updated_at,
            **extra,
        )

    def _live_comments(self, post_id: int) -> list[StoredComment]:
        return [
            c
            for c in self.comments
            if c.post_id == post_id and c.deleted_at is None
        ]

    def _select(self, predicate: Predicate) -> list[StoredPost]:
        return [
            post
            for post in self.posts
            if all(self._matches(post, clause) for clause in predicate)
        ]

    async def fetch(
        self,
        predicate: Predicate,
        sort: SortSpec,
        limit: int,
        offset: int | None = None,
        with_comment_count: bool = False,
    ) -> list[PostRow]:
        self.calls.append("fetch")
        rows = [self._row(post) for post in self._select(predicate)]
        rows.sort(
            key=lambda row: (sort_value(row, sort.column), row.id),
            reverse=not sort.ascending,
        )
        start = offset or 0
        rows = rows[start : start + limit]
        if with_comment_count:
            rows = [
                row.model_copy(
                    update={"comment_count": len(self._live_comments(row.id))}
                )
                for row in rows
            ]
        return rows

    async def count(self, predicate: Predicate) -> int:
        self.calls.append("count")
        return len(self._select(predicate))

    async def table_statistics(self, table_name: str) -> int | None:
        self.calls.append("table_statistics")
        if self.statistics_error is not None:
            raise self.statistics_error
        return self.statistics

    async def get(
        self, post_id: int, with_comments: bool = False
    ) -> PostRow | None:
        self.calls.append("get")
        for post in self.posts:
            if post.id == post_id and post.deleted_at is None:
                if not with_comments:
                    return self._row(post)
                comments = [
                    CommentRow(
                        id=c.id,
                        text=c.text,
                        author_id=c.author_id,
                        author_name=getattr(
                            self.authors.get(c.author_id), "name", None
                        ),
                        created_at=c.created_at,
                    )
                    for c in self._live_comments(post_id)
                ]
                return self._row(post, comments=comments)
        return None


def make_posts(
    count: int, deleted_ids: tuple[int, ...] = (), **overrides: Any
) -> list[StoredPost]:
    """Posts with ids 1..count, one minute apart, titled ``Post <id>``."""
    return [
        StoredPost(
            id=i,
            title=f"Post {i}",
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
            deleted_at=BASE_TIME if i in deleted_ids else None,
            **overrides,
        )
        for i in range(1, count + 1)
    ]


def create_store(
    posts: list[StoredPost] | None = None, **kwargs: Any
) -> InMemoryPostStore:
    """In-memory store with a single author (id 1, "Alice") by default."""
    store = InMemoryPostStore(posts=posts or [], **kwargs)
    store.authors.setdefault(1, StoredAuthor(id=1, name="Alice"))
    return store


def make_row(post_id: int = 1, **overrides: Any) -> PostRow:
    values: dict[str, Any] = {
        "id": post_id,
        "title": f"Post {post_id}",
        "content": None,
        "status": PostStatus.PUBLISHED,
        "category": PostCategory.NORMAL,
        "author_id": 1,
        "author_name": "Alice",
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    values.update(overrides)
    return PostRow(**values)


def create_mock_post_store() -> AsyncMock:
    """
    Creates a mock PostStore with every method stubbed.

    Returns:
        AsyncMock: Mocked store returning empty results.
    """
    store_mock = AsyncMock(spec=PostStore)
    store_mock.fetch = AsyncMock(return_value=[])
    store_mock.count = AsyncMock(return_value=0)
    store_mock.table_statistics = AsyncMock(return_value=None)
    store_mock.get = AsyncMock(return_value=None)
    return store_mock


