"""
Compile filter criteria into a predicate.

The compiled predicate always starts with the soft-delete exclusion; each
present criterion then contributes one AND-ed clause. There is no OR across
fields and no error path: absent criteria are simply omitted.
"""

from postlist.schemas.filters import PostFilters
from postlist.storage.predicate import (
    AuthorField,
    Contains,
    Equals,
    IsNull,
    JoinExists,
    PostField,
    Predicate,
    Relation,
)
from postlist.storage.search import title_clause

NOT_DELETED = IsNull(PostField.DELETED_AT)


def compile_filters(filters: PostFilters | None) -> Predicate:
    """
    Build the predicate for a filter value.

    Args:
        filters: Validated filter criteria, or None for "no filters".

    Returns:
        Predicate whose first clause excludes soft-deleted posts.

    Example:
        >>> compile_filters(PostFilters(title="alpha")).parameters()
        {'deleted_at__isnull': True, 'title__prefix': 'alpha%'}
    """
    predicate = Predicate().and_(NOT_DELETED)
    if filters is None:
        return predicate

    if filters.title:
        predicate = predicate.and_(title_clause(filters.title))

    if filters.author_name:
        # Reaches user.name through post.author_id without loading the user
        predicate = predicate.and_(
            JoinExists(
                Relation.AUTHOR,
                Contains(AuthorField.NAME, filters.author_name),
            )
        )

    if filters.status is not None:
        predicate = predicate.and_(Equals(PostField.STATUS, filters.status))

    if filters.category is not None:
        predicate = predicate.and_(
            Equals(PostField.CATEGORY, filters.category)
        )

    return predicate
