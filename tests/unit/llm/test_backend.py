# tests/unit/llm/test_backend.py — v1
"""Tests for llm/backend.py — routing, credentials, timeout, retry, parsing."""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from aigate.config.settings import Settings
from aigate.core.errors import AIServiceError, BackendUnavailableError, ErrorKind
from aigate.core.models import AIRequest, ProjectAnalysis
from aigate.llm.backend import AIBackend, estimate_tokens
from aigate.llm.models import LLMResponse

ANALYSIS_BODY = json.dumps({
    "projectType": "Portfolio",
    "designStyle": "minimalist",
    "colorTheme": "monochrome-modern",
    "reasoning": "Clean layouts suit portfolios.",
    "confidence": 0.8,
})


def _response(content: str, input_tokens: int = 100, output_tokens: int = 50) -> LLMResponse:
    return LLMResponse(
        content=content,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        model="gemini-2.0-flash-exp",
        provider="google",
        latency_ms=120,
    )


@pytest.fixture
def factory(mock_llm_client):
    return MagicMock(return_value=mock_llm_client)


@pytest.fixture
def backend(settings, factory):
    return AIBackend(settings, client_factory=factory, sleep=AsyncMock())


def _analysis() -> AIRequest:
    return AIRequest(operation="analysis", text="A portfolio", category="Portfolio")


class TestInvoke:
    @pytest.mark.asyncio
    async def test_analysis(self, backend, mock_llm_client):
        mock_llm_client.complete.return_value = _response(ANALYSIS_BODY)
        result = await backend.invoke(_analysis(), timeout_s=1.0)
        assert isinstance(result.value, ProjectAnalysis)
        assert result.provider == "google"
        assert result.model == "gemini-2.0-flash-exp"
        assert (result.input_tokens, result.output_tokens) == (100, 50)
        assert mock_llm_client.complete.await_args.kwargs["json_mode"] is True

    @pytest.mark.asyncio
    async def test_chat_is_free_text(self, backend, mock_llm_client):
        mock_llm_client.complete.return_value = _response("Try a serif heading font.")
        result = await backend.invoke(AIRequest(operation="chat", text="Fonts?"), timeout_s=1.0)
        assert result.value.message == "Try a serif heading font."
        assert mock_llm_client.complete.await_args.kwargs["json_mode"] is False

    @pytest.mark.asyncio
    async def test_estimates_missing_usage(self, backend, mock_llm_client):
        mock_llm_client.complete.return_value = _response("12345678", 0, 0)
        result = await backend.invoke(AIRequest(operation="chat", text="Hi"), timeout_s=1.0)
        assert result.output_tokens == 2
        assert result.input_tokens > 0

    @pytest.mark.asyncio
    async def test_invalid_body(self, backend, mock_llm_client):
        mock_llm_client.complete.return_value = _response("not json")
        with pytest.raises(AIServiceError) as exc:
            await backend.invoke(_analysis(), timeout_s=1.0)
        assert exc.value.kind == ErrorKind.INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_timeout_per_attempt(self, backend, mock_llm_client):
        async def slow(*args, **kwargs):
            await asyncio.sleep(1)

        mock_llm_client.complete = AsyncMock(side_effect=slow)
        with pytest.raises(AIServiceError) as exc:
            await backend.invoke(_analysis(), timeout_s=0.01)
        assert exc.value.kind == ErrorKind.TIMEOUT_ERROR
        assert mock_llm_client.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_network_errors(self, backend, mock_llm_client):
        mock_llm_client.complete.side_effect = [
            ConnectionError("network down"),
            _response(ANALYSIS_BODY),
        ]
        retries = []
        result = await backend.invoke(
            _analysis(), timeout_s=1.0, on_retry=lambda n, err: retries.append(n),
        )
        assert result.value.project_type == "Portfolio"
        assert retries == [1]

    @pytest.mark.asyncio
    async def test_client_reused(self, backend, factory, mock_llm_client):
        mock_llm_client.complete.return_value = _response("ok")
        await backend.invoke(AIRequest(operation="chat", text="a"), timeout_s=1.0)
        await backend.invoke(AIRequest(operation="chat", text="b"), timeout_s=1.0)
        factory.assert_called_once()


class TestCredentials:
    @pytest.mark.asyncio
    async def test_missing_key(self, keyless_settings, factory):
        backend = AIBackend(keyless_settings, client_factory=factory)
        with pytest.raises(BackendUnavailableError) as exc:
            await backend.invoke(_analysis(), timeout_s=1.0)
        assert exc.value.kind == ErrorKind.API_ERROR
        assert exc.value.recoverable is True
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_google_key(self, factory):
        s = Settings(_env_file=None, store_backend="memory", google_api_key="not-a-key")
        backend = AIBackend(s, client_factory=factory)
        with pytest.raises(AIServiceError) as exc:
            await backend.invoke(_analysis(), timeout_s=1.0)
        assert exc.value.kind == ErrorKind.INVALID_API_KEY
        assert exc.value.recoverable is False

    def test_keyless_provider_available(self, factory):
        s = Settings(_env_file=None, google_api_key="", llm_op_chat="ollama:llama3")
        backend = AIBackend(s, client_factory=factory)
        assert backend.is_available("chat") is True
        assert backend.is_available("analysis") is False

    def test_assignment(self, backend):
        assert backend.assignment("chat").key == "google:gemini-2.0-flash-exp"


class TestEstimateTokens:
    def test_four_chars_per_token(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2
