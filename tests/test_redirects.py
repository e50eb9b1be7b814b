"""
Tests for post-action redirect sanitizing.
"""

import pytest

from xman.redirects import is_safe_path, safe_redirect

FALLBACK = "/app/categories"


class TestSafeRedirect:
    def test_external_url_falls_back(self):
        assert safe_redirect("https://evil.example/x", FALLBACK) == FALLBACK

    def test_relative_path_is_kept(self):
        assert safe_redirect("/app/categories/edit/5", FALLBACK) == "/app/categories/edit/5"

    def test_none_falls_back(self):
        assert safe_redirect(None, FALLBACK) == FALLBACK

    def test_default_fallback_is_root(self):
        assert safe_redirect("") == "/"

    @pytest.mark.parametrize(
        "candidate",
        [
            "",
            "   ",
            "//evil.example",
            "/\\evil.example",
            "javascript:alert(1)",
            "app/categories",
            "http:/app",
            "/app\n/evil",
        ],
    )
    def test_unsafe_candidates_fall_back(self, candidate):
        assert safe_redirect(candidate, FALLBACK) == FALLBACK

    def test_non_string_falls_back(self):
        assert safe_redirect(42, FALLBACK) == FALLBACK

    def test_query_string_is_preserved(self):
        assert safe_redirect("/app?tab=expense", FALLBACK) == "/app?tab=expense"


def test_is_safe_path_rejects_protocol_relative():
    assert is_safe_path("/ok")
    assert not is_safe_path("//host/path")
