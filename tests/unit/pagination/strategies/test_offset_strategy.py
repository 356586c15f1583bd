"""
Tests for offset-based pagination strategy.

Tests page windows, totals and the optional count cache.
"""

from unittest.mock import AsyncMock, patch

import pytest

from postlist.schemas.filters import PostFilters
from postlist.schemas.sorting import SortColumn, SortDirection, SortSpec
from postlist.storage.filter_compiler import compile_filters
from postlist.storage.pagination.offset import OffsetPaginationStrategy
from tests.mocks.store_mocks import (
    StoredComment,
    create_mock_post_store,
    create_store,
    make_posts,
)

ID_ASC = SortSpec(column=SortColumn.ID, direction=SortDirection.ASC)


class TestOffsetPaginationStrategy:
    """Tests for OffsetPaginationStrategy."""

    @pytest.mark.asyncio
    async def test_first_page(self, ten_posts_store):
        strategy = OffsetPaginationStrategy(ten_posts_store, page=1)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 4)

        assert [row.id for row in rows] == [1, 2, 3, 4]
        assert meta.total == 10
        assert meta.page == 1
        assert meta.limit == 4
        assert meta.last_page == 3

    @pytest.mark.asyncio
    async def test_last_partial_page(self, ten_posts_store):
        strategy = OffsetPaginationStrategy(ten_posts_store, page=3)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 4)

        assert [row.id for row in rows] == [9, 10]
        assert meta.last_page == 3

    @pytest.mark.asyncio
    async def test_page_beyond_last_is_empty_with_same_total(
        self, ten_posts_store
    ):
        strategy = OffsetPaginationStrategy(ten_posts_store, page=5)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 4)

        assert rows == []
        assert meta.total == 10
        assert meta.last_page == 3

    @pytest.mark.asyncio
    async def test_empty_table_has_last_page_zero(self):
        strategy = OffsetPaginationStrategy(create_store([]), page=1)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 20)

        assert rows == []
        assert meta.total == 0
        assert meta.last_page == 0

    @pytest.mark.asyncio
    async def test_soft_deleted_posts_are_excluded(self):
        store = create_store(make_posts(5, deleted_ids=(2, 4)))
        strategy = OffsetPaginationStrategy(store)

        rows, meta = await strategy.paginate(compile_filters(None), ID_ASC, 10)

        assert [row.id for row in rows] == [1, 3, 5]
        assert meta.total == 3

    @pytest.mark.asyncio
    async def test_filtered_total_matches_rows(self, mixed_store):
        strategy = OffsetPaginationStrategy(mixed_store)
        predicate = compile_filters(PostFilters(title="alpha"))

        rows, meta = await strategy.paginate(predicate, ID_ASC, 10)

        assert [row.id for row in rows] == [1, 2]
        assert meta.total == 2

    @pytest.mark.asyncio
    async def test_rows_carry_live_comment_count(self):
        store = create_store(make_posts(2))
        store.comments = [
            StoredComment(id=1, post_id=1, author_id=1, text="a"),
            StoredComment(id=2, post_id=1, author_id=1, text="b"),
            StoredComment(
                id=3,
                post_id=1,
                author_id=1,
                text="gone",
                deleted_at=store.posts[0].created_at,
            ),
        ]
        strategy = OffsetPaginationStrategy(store)

        rows, _ = await strategy.paginate(compile_filters(None), ID_ASC, 10)

        assert [row.comment_count for row in rows] == [2, 0]

    @pytest.mark.asyncio
    async def test_offset_passed_to_store(self):
        store = create_mock_post_store()
        store.count = AsyncMock(return_value=100)
        strategy = OffsetPaginationStrategy(store, page=3, cache_count=False)

        await strategy.paginate(compile_filters(None), ID_ASC, 20)

        kwargs = store.fetch.call_args.kwargs
        assert kwargs["offset"] == 40
        assert kwargs["limit"] == 20
        store.count.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_total_skips_count(self):
        store = create_mock_post_store()

        with (
            patch(
                "postlist.storage.pagination.offset.get_cached_count",
                AsyncMock(return_value=42),
            ),
            patch(
                "postlist.storage.pagination.offset.set_cached_count",
                AsyncMock(),
            ) as mock_set,
        ):
            strategy = OffsetPaginationStrategy(store, cache_count=True)
            _, meta = await strategy.paginate(compile_filters(None), ID_ASC, 10)

        assert meta.total == 42
        assert meta.last_page == 5
        store.count.assert_not_called()
        mock_set.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_miss_counts_and_stores(self):
        store = create_mock_post_store()
        store.count = AsyncMock(return_value=7)
        predicate = compile_filters(PostFilters(title="alpha"))

        with (
            patch(
                "postlist.storage.pagination.offset.get_cached_count",
                AsyncMock(return_value=None),
            ),
            patch(
                "postlist.storage.pagination.offset.set_cached_count",
                AsyncMock(),
            ) as mock_set,
        ):
            strategy = OffsetPaginationStrategy(store, cache_count=True)
            _, meta = await strategy.paginate(predicate, ID_ASC, 10)

        assert meta.total == 7
        mock_set.assert_awaited_once_with("post", 7, predicate.parameters())

    @pytest.mark.asyncio
    async def test_cache_disabled_by_default(self):
        store = create_mock_post_store()

        with patch(
            "postlist.storage.pagination.offset.get_cached_count",
            AsyncMock(return_value=42),
        ) as mock_get:
            strategy = OffsetPaginationStrategy(store)
            await strategy.paginate(compile_filters(None), ID_ASC, 10)

        mock_get.assert_not_called()
        store.count.assert_awaited_once()
