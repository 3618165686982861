"""Tests for url_with_query"""

from xsdkit.urls import url_with_query


class TestUrlWithQuery:
    def test_pairs(self) -> None:
        assert url_with_query("http://example.com", "a", "x", "b", "y") == "http://example.com?a=x&b=y"

    def test_trailing_key_ignored(self) -> None:
        assert url_with_query("http://example.com", "a", "x", "b", "y", "c") == (
            "http://example.com?a=x&b=y"
        )

    def test_empty_key_skipped(self) -> None:
        assert url_with_query("http://example.com", "a", "x", "b", "y", "", "") == (
            "http://example.com?a=x&b=y"
        )

    def test_existing_query_kept(self) -> None:
        assert url_with_query("http://example.com/p?q=1", "a", "x y") == "http://example.com/p?q=1&a=x+y"

    def test_no_pairs(self) -> None:
        assert url_with_query("http://example.com/p") == "http://example.com/p"
