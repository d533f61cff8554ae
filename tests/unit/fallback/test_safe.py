# tests/unit/fallback/test_safe.py — v1
"""Tests for fallback/safe.py — the never-raise adapter."""

from __future__ import annotations

import logging

import pytest

from aigate.fallback.safe import safe


def _boom(*args, **kwargs):
    raise RuntimeError("rule exploded")


class TestSafe:
    def test_passes_through(self):
        wrapped = safe(lambda x: x * 2, 0)
        assert wrapped(21) == 42

    def test_returns_default_and_logs(self, caplog):
        wrapped = safe(_boom, {"score": 75, "items": []})
        with caplog.at_level(logging.ERROR, logger="aigate.fallback.safe"):
            assert wrapped() == {"score": 75, "items": []}
        assert "returning neutral default" in caplog.text

    def test_default_is_copied(self):
        wrapped = safe(_boom, {"items": []})
        first = wrapped()
        first["items"].append("mutated")
        assert wrapped() == {"items": []}

    def test_default_factory_sees_arguments(self):
        wrapped = safe(_boom, default_factory=lambda text, n=0: f"{text}:{n}")
        assert wrapped("x", n=3) == "x:3"

    def test_requires_default(self):
        with pytest.raises(ValueError):
            safe(_boom)

    def test_preserves_name(self):
        def scorer():
            return 1

        assert safe(scorer, 0).__name__ == "scorer"
