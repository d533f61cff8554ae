# tests/unit/logging/test_handlers.py — v1
"""Tests for logging/handlers.py — file rotation handler."""

from __future__ import annotations

import pytest

from aigate.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize(
        "size, expected",
        [("10MB", 10 * 1024**2), ("512KB", 512 * 1024), ("1GB", 1024**3),
         ("10mb", 10 * 1024**2), ("2048", 2048), (" 5 MB ", 5 * 1024**2)],
    )
    def test_units(self, size, expected):
        assert parse_size(size) == expected

    @pytest.mark.parametrize("size", ["10bytes", "", "MB"])
    def test_invalid(self, size):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(size)


class TestCreateRotatingHandler:
    def test_creates_parent_dir(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "aigate.log"
        handler = create_rotating_handler(log_file, rotation="1KB", retention=3)
        try:
            assert log_file.parent.is_dir()
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3
        finally:
            handler.close()
