"""
Store-agnostic predicate values.

A ``Predicate`` is an immutable conjunction of tagged clauses. It is built
by the filter compiler and the cursor paginator and rendered into a concrete
query language by a store-specific translator
(``postlist.storage.translator`` for SQLAlchemy/PostgreSQL). Keeping the
predicate as plain data lets the same filter semantics drive the SQL store
and any other implementation of ``PostStore``.

Example:
    ```python
    predicate = Predicate().and_(
        IsNull(PostField.DELETED_AT),
        Prefix(PostField.TITLE, "alpha"),
    )
    predicate.parameters()
    # {'deleted_at__isnull': True, 'title__prefix': 'alpha%'}
    ```
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from postlist.schemas.sorting import SortColumn

LIKE_ESCAPE_CHAR = "\\"


class PostField(str, Enum):
    ID = "id"
    TITLE = "title"
    CONTENT = "content"
    STATUS = "status"
    CATEGORY = "category"
    AUTHOR_ID = "author_id"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DELETED_AT = "deleted_at"


class AuthorField(str, Enum):
    NAME = "name"


class Relation(str, Enum):
    """Relations reachable from a post through a foreign key."""

    AUTHOR = "author"


class Comparison(str, Enum):
    GT = ">"
    LT = "<"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so that ``term`` is matched literally."""
    return (
        term.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )


@dataclass(frozen=True)
class IsNull:
    field: PostField

    def parameters(self) -> dict[str, Any]:
        return {f"{self.field.value}__isnull": True}


@dataclass(frozen=True)
class Equals:
    field: PostField
    value: Any

    def parameters(self) -> dict[str, Any]:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return {self.field.value: value}


@dataclass(frozen=True)
class Prefix:
    """Starts-with match against a single column."""

    field: PostField | AuthorField
    term: str

    @property
    def pattern(self) -> str:
        return f"{escape_like(self.term)}%"

    def parameters(self) -> dict[str, Any]:
        return {f"{self.field.value}__prefix": self.pattern}


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match against a single column."""

    field: PostField | AuthorField
    term: str

    @property
    def pattern(self) -> str:
        return f"%{escape_like(self.term)}%"

    def parameters(self) -> dict[str, Any]:
        return {f"{self.field.value}__contains": self.pattern}


@dataclass(frozen=True)
class FullText:
    """Natural-language relevance match over several text columns."""

    fields: tuple[PostField, ...]
    query: str

    def parameters(self) -> dict[str, Any]:
        names = "+".join(f.value for f in self.fields)
        return {f"{names}__fulltext": self.query}


@dataclass(frozen=True)
class Inequality:
    """Strict bound on an orderable column, used for cursor windows."""

    field: PostField
    op: Comparison
    value: Any

    def parameters(self) -> dict[str, Any]:
        suffix = "gt" if self.op is Comparison.GT else "lt"
        return {f"{self.field.value}__{suffix}": self.value}


@dataclass(frozen=True)
class JoinExists:
    """A clause that must hold for the related row reached via ``relation``."""

    relation: Relation
    clause: "Clause"

    def parameters(self) -> dict[str, Any]:
        return {
            f"{self.relation.value}.{key}": value
            for key, value in self.clause.parameters().items()
        }


Clause = Union[IsNull, Equals, Prefix, Contains, FullText, Inequality, JoinExists]


@dataclass(frozen=True)
class Predicate:
    """Conjunction of clauses. An empty predicate matches every row."""

    clauses: tuple[Clause, ...] = ()

    def and_(self, *clauses: Clause) -> "Predicate":
        return Predicate(self.clauses + tuple(clauses))

    def parameters(self) -> dict[str, Any]:
        """
        Bound values of every clause, keyed by field and match kind.

        Used for log lines and count-cache keys; two predicates with equal
        parameters select the same rows.
        """
        params: dict[str, Any] = {}
        for clause in self.clauses:
            params.update(clause.parameters())
        return params

    def __iter__(self):
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)


# Sortable columns of the public API and the post field each one orders by
SORT_FIELDS: dict[SortColumn, PostField] = {
    SortColumn.ID: PostField.ID,
    SortColumn.TITLE: PostField.TITLE,
    SortColumn.CREATED_AT: PostField.CREATED_AT,
    SortColumn.UPDATED_AT: PostField.UPDATED_AT,
}


