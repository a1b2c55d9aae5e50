"""Shared pytest fixtures for the gqlforge test suite."""

from __future__ import annotations

import pytest

from tests.helpers import FakeContext, Post, User, load_blog


@pytest.fixture
def blog():
    """Namespace of the executed blog module."""
    return load_blog()


@pytest.fixture
def store():
    ada = User("Ada", "ada@example.com")
    first = Post("Hello", author=ada, tags=["intro", "meta"], words=120)
    second = Post("Again", tags=[], words=40)
    third = Post("Third", author=ada, tags=["x"], words=7)
    first.related_posts = [second, third]
    return {"ada": ada, "posts": [first, second, third]}


@pytest.fixture
def resolvers(blog, store):
    class BlogResolvers(blog["Resolvers"]):
        def __init__(self) -> None:
            self.calls: list[tuple] = []

        def Query_node(self, ctx, id):
            self.calls.append(("node", ctx, id))
            if id == "ada":
                return store["ada"]
            if id.startswith("post"):
                return store["posts"][int(id[4:])]
            return None

        def Query_posts(self, ctx):
            return store["posts"]

        def Query_search(self, ctx, term):
            return [p for p in store["posts"] if term in p.title_value] + [None, store["ada"]]

        def Post_author(self, ctx, it):
            self.calls.append(("author", ctx, it))
            return it.author

    return BlogResolvers()


@pytest.fixture
def ec(resolvers):
    return FakeContext(resolvers)
