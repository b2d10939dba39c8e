"""
Unit tests for URL resolution and external-link detection.
"""

import pytest
from gleancore.extractor.urls import is_data_uri, is_external_url, resolve_url

BASE = "https://example.com/blog/post.html"


class TestResolveUrl:
    """Absolute, protocol-relative, relative and data URIs."""

    @pytest.mark.parametrize(
        "candidate",
        ["https://cdn.example.org/a.jpg", "http://example.com/b", "HTTPS://Example.com/C"],
    )
    def test_absolute_urls_unchanged(self, candidate):
        assert resolve_url(candidate, BASE) == candidate

    def test_absolute_url_is_trimmed(self):
        assert resolve_url("  https://example.com/a  ", BASE) == "https://example.com/a"

    def test_data_uri_unchanged(self):
        data = "data:image/png;base64,iVBORw0KGgo%3D"
        assert resolve_url(data, BASE) == data

    def test_protocol_relative_takes_base_scheme(self):
        assert resolve_url("//cdn.example.org/a.jpg", "http://example.com/") == "http://cdn.example.org/a.jpg"

    def test_protocol_relative_defaults_to_https(self):
        assert resolve_url("//cdn.example.org/a.jpg", "example.com/page") == "https://cdn.example.org/a.jpg"

    @pytest.mark.parametrize(
        "candidate,expected",
        [
            ("image.jpg", "https://example.com/blog/image.jpg"),
            ("/root.jpg", "https://example.com/root.jpg"),
            ("../up.jpg", "https://example.com/up.jpg"),
            ("?page=2", "https://example.com/blog/post.html?page=2"),
            ("#comments", "https://example.com/blog/post.html#comments"),
        ],
    )
    def test_relative_resolution(self, candidate, expected):
        assert resolve_url(candidate, BASE) == expected

    def test_invalid_base_does_not_raise(self):
        assert resolve_url(" a.jpg ", "http://[invalid") == "a.jpg"

    def test_empty_candidate(self):
        assert resolve_url("   ", BASE) == ""


class TestExternalUrl:
    def test_prefix_of_base_is_internal(self):
        assert is_external_url("https://example.com/blog/other", "https://example.com/blog") is False

    def test_different_host_is_external(self):
        assert is_external_url("https://other.org/", "https://example.com") is True

    def test_www_mismatch_counts_as_external(self):
        assert is_external_url("https://www.example.com/a", "https://example.com") is True


def test_is_data_uri():
    assert is_data_uri(" DATA:image/gif;base64,R0lG")
    assert not is_data_uri("https://example.com/data:x")
