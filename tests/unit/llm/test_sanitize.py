# tests/unit/llm/test_sanitize.py — v1
"""Tests for llm/sanitize.py — PII stripping and key format check."""

from __future__ import annotations

import pytest

from aigate.llm.sanitize import is_valid_google_key, sanitize_text


class TestSanitizeText:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("mail jane.doe@example.com now", "mail [email] now"),
            ("see https://x.io/cb?token=abc123", "see [url-with-token]"),
            ("card 4111 1111 1111 1111", "card [card]"),
            ("ssn 123-45-6789", "ssn [ssn]"),
            ("call 555-123-4567", "call [phone]"),
            ("host 192.168.1.10", "host [ip]"),
            ("key sk_live_" + "a" * 32, "key [token]"),
        ],
    )
    def test_patterns(self, text, expected):
        assert sanitize_text(text) == expected

    def test_plain_text_untouched(self):
        text = "A minimalist portfolio with 3 pages"
        assert sanitize_text(text) == text


class TestGoogleKey:
    def test_valid(self):
        assert is_valid_google_key("AIza" + "B" * 35)

    @pytest.mark.parametrize("key", ["", "AIza123", "XXza" + "B" * 35, "AIza" + "B" * 36])
    def test_invalid(self, key):
        assert not is_valid_google_key(key)
