"""
Combine fetched rows and pagination metadata into response shapes.

Pure functions, no I/O.
"""

from postlist.schemas.pagination import CountEstimate, CursorMeta, OffsetMeta
from postlist.schemas.post import CommentRow, PostRow
from postlist.schemas.response import (
    AuthorSummary,
    CommentResponse,
    CountResponse,
    CursorPageResponse,
    OffsetPageMeta,
    OffsetPageResponse,
    PostResponse,
)


def assemble_comment(row: CommentRow) -> CommentResponse:
    return CommentResponse(
        id=row.id,
        text=row.text,
        author=AuthorSummary(id=row.author_id, name=row.author_name),
        created_at=row.created_at,
    )


def assemble_post(row: PostRow) -> PostResponse:
    """Nest the author projection and carry optional derived fields."""
    comments = None
    if row.comments is not None:
        comments = [assemble_comment(comment) for comment in row.comments]

    return PostResponse(
        id=row.id,
        title=row.title,
        content=row.content,
        status=row.status,
        category=row.category,
        author=AuthorSummary(id=row.author_id, name=row.author_name),
        created_at=row.created_at,
        updated_at=row.updated_at,
        comment_count=row.comment_count,
        comments=comments,
    )


def assemble_offset_page(
    rows: list[PostRow], meta: OffsetMeta
) -> OffsetPageResponse:
    """
    Build the v1 page shape: ``{data, meta: {total, page, limit, lastPage}}``.
    """
    return OffsetPageResponse(
        data=[assemble_post(row) for row in rows],
        meta=OffsetPageMeta(
            total=meta.total,
            page=meta.page,
            limit=meta.limit,
            last_page=meta.last_page,
        ),
    )


def assemble_cursor_page(
    rows: list[PostRow], meta: CursorMeta
) -> CursorPageResponse:
    """
    Build the v2 page shape: ``{data, nextCursor, hasMore, count}``.

    ``count`` is the number of rows on this page, not a total.
    """
    return CursorPageResponse(
        data=[assemble_post(row) for row in rows],
        next_cursor=meta.next_cursor,
        has_more=meta.has_more,
        count=len(rows),
    )


def assemble_count(estimate: CountEstimate) -> CountResponse:
    return CountResponse(total=estimate.total, estimated=estimate.estimated)
