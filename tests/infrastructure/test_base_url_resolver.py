from __future__ import annotations

import pytest

from infrastructure.url.base_url_resolver import BaseUrlResolver

BASES = {"api": "http://api.test", "auth": "http://auth.test"}


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://other.test/x", "https://other.test/x"),
        ("http://other.test/x", "http://other.test/x"),
        ("{auth}/login", "http://auth.test/login"),
        ("{api}/todos/1", "http://api.test/todos/1"),
        ("/todos", "http://api.test/todos"),
        ("{unknown}/x", "http://api.test{unknown}/x"),
    ],
)
def test_resolve_url(url: str, expected: str) -> None:
    assert BaseUrlResolver(BASES).resolve_url(url) == expected


def test_no_bases_leaves_url_alone() -> None:
    assert BaseUrlResolver({}).resolve_url("/todos") == "/todos"
