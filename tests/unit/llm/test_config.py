# tests/unit/llm/test_config.py — v1
"""Tests for llm/config.py — per-operation LLM routing cascade."""

from __future__ import annotations

from aigate.config.settings import Settings
from aigate.llm.config import LLMAssignment, resolve_all, resolve_llm


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestResolveLLM:
    def test_default(self):
        r = resolve_llm("analysis", _settings())
        assert r.provider == "google"
        assert r.model == "gemini-2.0-flash-exp"
        assert r.source == "default"

    def test_per_operation_override(self):
        r = resolve_llm("chat", _settings(llm_op_chat="openai:gpt-4o-mini"))
        assert r.provider == "openai"
        assert r.model == "gpt-4o-mini"
        assert r.source == "operation"

    def test_override_is_per_operation(self):
        s = _settings(llm_op_chat="openai:gpt-4o-mini")
        assert resolve_llm("analysis", s).source == "default"

    def test_malformed_override_ignored(self):
        r = resolve_llm("chat", _settings(llm_op_chat="openai"))
        assert r.source == "default"

    def test_hardcoded_fallback(self):
        r = resolve_llm("analysis", _settings(llm_default_provider="", llm_default_model=""))
        assert r.key == "google:gemini-2.0-flash-exp"
        assert r.source == "fallback"

    def test_key_format(self):
        r = LLMAssignment(provider="ollama", model="llama3", source="operation")
        assert r.key == "ollama:llama3"


class TestResolveAll:
    def test_covers_every_operation(self):
        assignments = resolve_all(_settings())
        assert set(assignments) == {"analysis", "suggestions", "enhancement", "chat"}
