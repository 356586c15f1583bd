"""
Title search dispatch.

Listing semantics: a title filter that contains whitespace is treated as a
phrase and matched with full-text relevance search over title and content;
a single token is matched as a title prefix, which a btree index on
``post.title`` serves cheaply.

Search semantics (the dedicated search entry point) always want relevance
matching, so a single unquoted token is wrapped in double quotes first.
The quoted form contains no bare prefix term anymore and is dispatched to
full-text search.
"""

import re

from postlist.storage.predicate import Clause, FullText, PostField, Prefix

_WHITESPACE = re.compile(r"\s")

FULL_TEXT_FIELDS = (PostField.TITLE, PostField.CONTENT)


def is_full_text(term: str) -> bool:
    """Return True if ``term`` should be matched with full-text search."""
    return bool(_WHITESPACE.search(term)) or _is_quoted(term)


def title_clause(term: str) -> Clause:
    """
    Choose the predicate shape for a title filter.

    Example:
        >>> title_clause("alpha").pattern
        'alpha%'
        >>> title_clause("alpha beta").query
        'alpha beta'
    """
    if is_full_text(term):
        return FullText(FULL_TEXT_FIELDS, term)
    return Prefix(PostField.TITLE, term)


def as_search_phrase(term: str) -> str:
    """
    Normalize a search-endpoint term so that it is matched as full text.

    A single unquoted token becomes a quoted phrase; anything containing
    whitespace or already quoted is returned unchanged.
    """
    if _WHITESPACE.search(term) or _is_quoted(term):
        return term
    return f'"{term}"'


def _is_quoted(term: str) -> bool:
    return len(term) >= 2 and term.startswith('"') and term.endswith('"')
