"""
Tests for cursor-based pagination strategy.

Runs against the in-memory store so that windows, ordering and the
soft-delete exclusion are exercised together.
"""

from unittest.mock import AsyncMock

import pytest

from postlist.exceptions import InvalidCursorError
from postlist.schemas.filters import PostFilters
from postlist.schemas.sorting import SortColumn, SortDirection, SortSpec
from postlist.storage.filter_compiler import compile_filters
from postlist.storage.pagination.cursor import CursorPaginationStrategy
from tests.mocks.store_mocks import (
    create_mock_post_store,
    create_store,
    make_posts,
    make_row,
)

ID_ASC = SortSpec(column=SortColumn.ID, direction=SortDirection.ASC)
ID_DESC = SortSpec(column=SortColumn.ID, direction=SortDirection.DESC)


async def traverse(store, predicate, sort, page_size):
    """Follow next cursors from the start until the listing is exhausted."""
    pages = []
    cursor = None
    while True:
        strategy = CursorPaginationStrategy(store, cursor=cursor)
        rows, meta = await strategy.paginate(predicate, sort, page_size)
        pages.append(([row.id for row in rows], meta))
        if not meta.has_more:
            return pages
        cursor = meta.next_cursor


class TestCursorPaginationStrategy:
    """Tests for CursorPaginationStrategy."""

    @pytest.mark.asyncio
    async def test_ten_posts_in_pages_of_four(self, ten_posts_store):
        pages = await traverse(
            ten_posts_store, compile_filters(None), ID_ASC, 4
        )

        assert [ids for ids, _ in pages] == [
            [1, 2, 3, 4],
            [5, 6, 7, 8],
            [9, 10],
        ]
        assert [meta.next_cursor for _, meta in pages] == ["4", "8", None]
        assert [meta.has_more for _, meta in pages] == [True, True, False]

    @pytest.mark.asyncio
    async def test_exact_fit_reports_no_more(self):
        store = create_store(make_posts(8))

        pages = await traverse(store, compile_filters(None), ID_ASC, 4)

        assert len(pages) == 2
        assert pages[-1][0] == [5, 6, 7, 8]
        assert pages[-1][1].has_more is False
        assert pages[-1][1].next_cursor is None

    @pytest.mark.asyncio
    async def test_descending_uses_less_than(self, ten_posts_store):
        strategy = CursorPaginationStrategy(ten_posts_store, cursor="7")

        rows, meta = await strategy.paginate(compile_filters(None), ID_DESC, 3)

        assert [row.id for row in rows] == [6, 5, 4]
        assert meta.next_cursor == "4"

    @pytest.mark.asyncio
    async def test_empty_result(self):
        strategy = CursorPaginationStrategy(create_store([]))

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 4)

        assert rows == []
        assert meta.has_more is False
        assert meta.next_cursor is None

    @pytest.mark.asyncio
    async def test_fetches_one_extra_row(self):
        store = create_mock_post_store()
        store.fetch = AsyncMock(return_value=[make_row(i) for i in (1, 2, 3)])
        strategy = CursorPaginationStrategy(store)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 2)

        assert store.fetch.call_args.kwargs["limit"] == 3
        assert [row.id for row in rows] == [1, 2]
        assert meta.next_cursor == "2"

    @pytest.mark.asyncio
    async def test_invalid_cursor_rejected_before_store_access(self):
        store = create_mock_post_store()
        strategy = CursorPaginationStrategy(store, cursor="not-a-number")

        with pytest.raises(InvalidCursorError):
            await strategy.paginate(compile_filters(None), ID_ASC, 4)

        store.fetch.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [1, 3, 4, 7, 100])
    @pytest.mark.parametrize(
        "sort",
        [
            ID_ASC,
            ID_DESC,
            SortSpec(column=SortColumn.CREATED_AT),
            SortSpec(
                column=SortColumn.UPDATED_AT, direction=SortDirection.ASC
            ),
        ],
    )
    async def test_traversal_visits_every_live_row_once(self, page_size, sort):
        store = create_store(make_posts(23, deleted_ids=(3, 11, 20)))
        expected = [
            post.id
            for post in sorted(
                store.posts,
                key=lambda p: p.id,
                reverse=not sort.ascending,
            )
            if post.deleted_at is None
        ]

        pages = await traverse(store, compile_filters(None), sort, page_size)

        visited = [post_id for ids, _ in pages for post_id in ids]
        assert visited == expected

    @pytest.mark.asyncio
    async def test_traversal_respects_filters(self, mixed_store):
        predicate = compile_filters(PostFilters(author_name="bob"))

        pages = await traverse(mixed_store, predicate, ID_ASC, 1)

        assert [ids for ids, _ in pages] == [[3], [5]]

    @pytest.mark.asyncio
    async def test_duplicate_titles_on_page_boundary_are_skipped(self):
        posts = make_posts(6)
        for post, title in zip(posts, ["a", "b", "b", "b", "c", "d"]):
            post.title = title
        store = create_store(posts)
        sort = SortSpec(column=SortColumn.TITLE, direction=SortDirection.ASC)

        pages = await traverse(store, compile_filters(None), sort, 2)

        assert [ids for ids, _ in pages] == [[1, 2], [5, 6]]
        assert pages[0][1].next_cursor == "b"
