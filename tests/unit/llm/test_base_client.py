# tests/unit/llm/test_base_client.py — v1
"""Tests for llm/base_client.py and llm/models.py — client interface types."""

from __future__ import annotations

import pytest

from aigate.llm.base_client import BaseLLMClient
from aigate.llm.models import LLMResponse, Message


class TestBaseLLMClient:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLLMClient()  # type: ignore[abstract]

    def test_has_required_methods(self):
        assert hasattr(BaseLLMClient, "complete")
        assert hasattr(BaseLLMClient, "provider_name")
        assert hasattr(BaseLLMClient, "model_name")


class TestModels:
    def test_all_roles(self):
        for role in ["user", "assistant", "system"]:
            assert Message(role=role, content="test").role == role

    def test_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            Message(role="tool", content="x")

    def test_usage_defaults_to_zero(self):
        r = LLMResponse(content="ok", model="m", provider="p", latency_ms=1)
        assert r.input_tokens == 0
        assert r.output_tokens == 0
