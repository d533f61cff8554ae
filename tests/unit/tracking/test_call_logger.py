# tests/unit/tracking/test_call_logger.py — v1
"""Tests for tracking/call_logger.py — per-request records and JSONL files."""

from __future__ import annotations

from aigate.core.errors import ErrorKind
from aigate.tracking.call_logger import CallLogger


class TestCallLogger:
    def test_record_live(self):
        cl = CallLogger()
        record = cl.record(
            operation="analysis", latency_ms=420, source="live",
            provider="google", model="gemini-2.0-flash-exp",
            input_tokens=1000, output_tokens=500,
        )
        assert record.total_tokens == 1500
        assert record.cache_hit is False
        assert record.estimated_cost_usd > 0
        assert cl.total_calls == 1
        assert cl.total_tokens == 1500

    def test_cache_hits(self):
        cl = CallLogger()
        assert cl.record(operation="chat", latency_ms=1, source="cache").cache_hit
        assert cl.record(operation="chat", latency_ms=9, source="remote").cache_hit

    def test_error_record(self):
        cl = CallLogger()
        record = cl.record(
            operation="chat", latency_ms=5, success=False, error=ErrorKind.RATE_LIMIT,
        )
        assert record.source is None
        assert record.estimated_cost_usd == 0.0

    def test_capped(self):
        cl = CallLogger(max_records=3)
        for i in range(5):
            cl.record(operation="chat", latency_ms=i, source="fallback")
        assert [r.latency_ms for r in cl.records] == [2, 3, 4]

    def test_uncapped(self):
        cl = CallLogger(max_records=None)
        for i in range(5):
            cl.record(operation="chat", latency_ms=i)
        assert cl.total_calls == 5

    def test_records_is_copy(self):
        cl = CallLogger()
        cl.record(operation="chat", latency_ms=1)
        cl.records.clear()
        assert cl.total_calls == 1

    def test_clear(self):
        cl = CallLogger()
        cl.record(operation="chat", latency_ms=1)
        cl.clear()
        assert cl.total_calls == 0

    def test_save_and_load(self, tmp_path):
        cl = CallLogger()
        cl.record(operation="analysis", latency_ms=10, source="live", model="gpt-4o",
                  provider="openai", input_tokens=10, output_tokens=5)
        cl.record(operation="chat", latency_ms=3, source="fallback", error=ErrorKind.TIMEOUT_ERROR)
        path = tmp_path / "calls" / "calls.jsonl"
        cl.save(path)
        assert len(path.read_text().splitlines()) == 2
        loaded = CallLogger.load(path)
        assert [r.operation for r in loaded] == ["analysis", "chat"]
        assert loaded[1].error == ErrorKind.TIMEOUT_ERROR

    def test_load_missing(self, tmp_path):
        assert CallLogger.load(tmp_path / "nope.jsonl") == []
