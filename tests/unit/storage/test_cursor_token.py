"""
Tests for cursor token encoding and decoding.
"""

from datetime import UTC, datetime

import pytest

from postlist.exceptions import InvalidCursorError
from postlist.schemas.sorting import SortColumn
from postlist.storage.cursor_token import decode_cursor, encode_cursor, row_cursor
from tests.mocks.store_mocks import make_row


class TestCursorToken:
    """Tests for encode_cursor/decode_cursor."""

    def test_id_cursor_is_plain_number(self):
        assert encode_cursor(4) == "4"
        assert decode_cursor("4", SortColumn.ID) == 4

    def test_timestamp_cursor_is_iso_format(self):
        moment = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)

        token = encode_cursor(moment)

        assert token == "2024-05-01T12:30:00Z"
        assert decode_cursor(token, SortColumn.CREATED_AT) == moment

    def test_timestamp_cursor_is_url_safe(self):
        token = encode_cursor(datetime(2024, 5, 1, tzinfo=UTC))

        assert "+" not in token

    def test_numeric_offset_timestamp_still_decodes(self):
        decoded = decode_cursor(
            "2024-05-01T12:30:00+00:00", SortColumn.UPDATED_AT
        )

        assert decoded == datetime(2024, 5, 1, 12, 30, tzinfo=UTC)

    def test_title_cursor_is_the_title(self):
        assert decode_cursor("Post 7", SortColumn.TITLE) == "Post 7"

    def test_row_cursor_uses_sort_column(self):
        row = make_row(8, title="eighth")

        assert row_cursor(row, SortColumn.ID) == "8"
        assert row_cursor(row, SortColumn.TITLE) == "eighth"

    @pytest.mark.parametrize(
        "token,column",
        [
            ("abc", SortColumn.ID),
            ("4.5", SortColumn.ID),
            ("yesterday", SortColumn.CREATED_AT),
            ("", SortColumn.UPDATED_AT),
        ],
    )
    def test_malformed_token_raises(self, token, column):
        with pytest.raises(InvalidCursorError) as exc_info:
            decode_cursor(token, column)

        assert exc_info.value.http_status == 400
