# tests/unit/logging/test_logger.py — v1
"""Tests for logging/logger.py — formatters and setup."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from aigate.logging.context import clear_context, set_request_context, set_state
from aigate.logging.logger import ROOT_LOGGER, JsonFormatter, TextFormatter, setup_logging


def _record(msg: str = "Hello", args: tuple = (), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="aigate.test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=args, exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello %s", ("world",))))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello world"
        assert parsed["logger"] == "aigate.test"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_includes_context(self):
        set_request_context("req-123", "analysis", "alice")
        set_state("Live")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {
            "request_id": "req-123",
            "operation": "analysis",
            "identity": "alice",
            "state": "Live",
        }

    def test_includes_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"key": "analysis:abc"})))
        assert parsed["data"] == {"key": "analysis:abc"}

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_plain(self):
        line = TextFormatter().format(_record())
        assert "[INFO    ]" in line
        assert line.endswith("aigate.test - Hello")

    def test_with_context(self):
        set_request_context("abcdef1234567890", "chat")
        set_state("Fallback")
        line = TextFormatter().format(_record())
        assert "[abcdef12] [chat] (Fallback) - Hello" in line


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore(self):
        yield
        root = logging.getLogger(ROOT_LOGGER)
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.setLevel(logging.NOTSET)

    def test_console_only(self):
        root = setup_logging(level="DEBUG", log_format="text")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_reinit_does_not_stack(self):
        setup_logging()
        root = setup_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "aigate.log"
        root = setup_logging(log_file=log_file, rotation="1MB", retention=2)
        assert len(root.handlers) == 2
        logging.getLogger("aigate.orchestrator").warning("written")
        for handler in root.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging(level="LOUD").level == logging.INFO
