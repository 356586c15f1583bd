"""
Render store-agnostic predicates as SQLAlchemy expressions.

Every column a predicate or a sort can touch is listed explicitly below;
field names coming from a request never reach ``getattr`` on a model.
"""

from typing import Any

from sqlalchemy import ColumnElement, and_, cast, func, literal, select, true
from sqlalchemy.dialects.postgresql import REGCONFIG

from postlist.models.post import Post
from postlist.models.user import User
from postlist.schemas.sorting import SortSpec
from postlist.settings import app_settings
from postlist.storage.predicate import (
    LIKE_ESCAPE_CHAR,
    SORT_FIELDS,
    AuthorField,
    Clause,
    Comparison,
    Contains,
    Equals,
    FullText,
    Inequality,
    IsNull,
    JoinExists,
    PostField,
    Predicate,
    Prefix,
    Relation,
)

POST_COLUMNS: dict[PostField, Any] = {
    PostField.ID: Post.id,
    PostField.TITLE: Post.title,
    PostField.CONTENT: Post.content,
    PostField.STATUS: Post.status,
    PostField.CATEGORY: Post.category,
    PostField.AUTHOR_ID: Post.author_id,
    PostField.CREATED_AT: Post.created_at,
    PostField.UPDATED_AT: Post.updated_at,
    PostField.DELETED_AT: Post.deleted_at,
}

AUTHOR_COLUMNS: dict[AuthorField, Any] = {
    AuthorField.NAME: User.name,
}

SORT_COLUMNS = {
    sort_column: POST_COLUMNS[field]
    for sort_column, field in SORT_FIELDS.items()
}


def _column(field: PostField | AuthorField):
    if isinstance(field, AuthorField):
        return AUTHOR_COLUMNS[field]
    return POST_COLUMNS[field]


def _full_text(clause: FullText) -> ColumnElement[bool]:
    config = cast(literal(app_settings.FULLTEXT_CONFIG), REGCONFIG)
    document = None
    for field in clause.fields:
        text = func.coalesce(POST_COLUMNS[field], "")
        document = text if document is None else document + " " + text
    return func.to_tsvector(config, document).op("@@")(
        func.websearch_to_tsquery(config, clause.query)
    )


def _join_exists(clause: JoinExists) -> ColumnElement[bool]:
    if clause.relation is Relation.AUTHOR:
        # Correlated on the outer post row
        return (
            select(User.id)
            .where(User.id == Post.author_id, render_clause(clause.clause))
            .exists()
        )
    raise TypeError(f"Unsupported relation: {clause.relation!r}")


def render_clause(clause: Clause) -> ColumnElement[bool]:
    """
    Render a single clause.

    Raises:
        TypeError: If the clause kind is not known to this translator.
    """
    if isinstance(clause, IsNull):
        return _column(clause.field).is_(None)
    if isinstance(clause, Equals):
        return _column(clause.field) == clause.value
    if isinstance(clause, Prefix):
        return _column(clause.field).like(
            clause.pattern, escape=LIKE_ESCAPE_CHAR
        )
    if isinstance(clause, Contains):
        return _column(clause.field).ilike(
            clause.pattern, escape=LIKE_ESCAPE_CHAR
        )
    if isinstance(clause, FullText):
        return _full_text(clause)
    if isinstance(clause, Inequality):
        column = _column(clause.field)
        if clause.op is Comparison.GT:
            return column > clause.value
        return column < clause.value
    if isinstance(clause, JoinExists):
        return _join_exists(clause)
    raise TypeError(f"Unsupported predicate clause: {type(clause).__name__}")


def render(predicate: Predicate) -> ColumnElement[bool]:
    """
    Render a predicate as one AND-ed SQLAlchemy expression.

    Example:
        ```python
        query = select(Post).where(render(compile_filters(filters)))
        ```
    """
    if not predicate:
        return true()
    return and_(*(render_clause(clause) for clause in predicate))


def order_by(sort: SortSpec) -> list[Any]:
    """
    ORDER BY terms for a sort spec.

    Non-unique columns get ``id`` in the same direction as a tie-breaker so
    that row order is deterministic.
    """
    column = SORT_COLUMNS[sort.column]
    terms = [column.asc() if sort.ascending else column.desc()]
    if column is not Post.id:
        terms.append(Post.id.asc() if sort.ascending else Post.id.desc())
    return terms
