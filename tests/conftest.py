"""
Pytest configuration and fixtures for testing.

Required settings are provided through the environment before any
``postlist`` module is imported.
"""

import os

import pytest

# Database credentials (required, there are no defaults)
os.environ.setdefault("DB_USER", "test-user")
os.environ.setdefault("DB_PASSWORD", "test-password")

from postlist.models.post import PostStatus  # noqa: E402
from tests.mocks.store_mocks import (  # noqa: E402
    StoredAuthor,
    create_store,
    make_posts,
)


@pytest.fixture
def ten_posts_store():
    """Store holding live posts with ids 1-10."""
    return create_store(make_posts(10))


@pytest.fixture
def mixed_store():
    """
    Store with two authors, mixed statuses and categories, and one
    soft-deleted post (id 6).
    """
    posts = make_posts(6, deleted_ids=(6,))
    posts[0].title = "alpha launch notes"
    posts[0].content = "first release of the alpha build"
    posts[1].title = "alphabet soup"
    posts[2].title = "beta notes"
    posts[2].author_id = 2
    posts[3].title = "Alpha upper"
    posts[3].content = "the alpha program continues"
    posts[4].author_id = 2
    posts[4].status = PostStatus.DRAFT
    posts[5].title = "alpha deleted"

    store = create_store(posts)
    store.authors[2] = StoredAuthor(id=2, name="Bob Builder")
    return store
