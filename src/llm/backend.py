# src/llm/backend.py — v1
"""AI backend: the single boundary between the orchestrator and the LLMs.

One ``invoke`` per live dispatch:
  1. route the operation to a provider:model (llm/config.py cascade),
  2. render the prompt (PII already stripped),
  3. call the client under a per-attempt timeout, with retry,
  4. parse and validate the body into the operation's payload model.

Everything that goes wrong surfaces as AIServiceError. A missing credential
is BackendUnavailableError (recoverable); a malformed Gemini key is
INVALID_API_KEY (not recoverable).
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Callable

from pydantic import ValidationError

from aigate.config.settings import Settings, load_settings
from aigate.core.errors import AIServiceError, BackendUnavailableError, ErrorKind
from aigate.core.models import AIRequest, OperationValue
from aigate.llm.base_client import BaseLLMClient
from aigate.llm.client_factory import (
    UnsupportedProviderError,
    create_llm_client,
    provider_credential,
    requires_credential,
)
from aigate.llm.config import LLMAssignment, resolve_llm
from aigate.llm.models import LLMResponse, Message
from aigate.llm.parsing import parse_analysis, parse_chat, parse_enhancement, parse_suggestions
from aigate.llm.prompts import JSON_OPERATIONS, build_prompt
from aigate.llm.retry import RetryPolicy, with_retry
from aigate.llm.sanitize import is_valid_google_key

logger = logging.getLogger(__name__)


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters."""
    return math.ceil(len(text) / 4)


@dataclass
class BackendResult:
    """Validated live answer plus the call metadata tracking needs."""

    value: OperationValue
    provider: str
    model: str
    input_tokens: int
    output_tokens: int
    latency_ms: int


class AIBackend:
    """Routes, calls and validates live AI requests."""

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: Callable[..., BaseLLMClient] = create_llm_client,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or load_settings()
        self._client_factory = client_factory
        self._retry_policy = retry_policy or RetryPolicy(
            max_retries=self._settings.ai_max_retries,
            base_delay_s=self._settings.ai_retry_base_delay_s,
        )
        self._sleep = sleep
        self._clients: dict[str, BaseLLMClient] = {}

    def assignment(self, operation: str) -> LLMAssignment:
        return resolve_llm(operation, self._settings)

    def is_available(self, operation: str) -> bool:
        """Whether a client could be built for ``operation`` (no network call)."""
        try:
            self._client_for(operation)
        except AIServiceError:
            return False
        return True

    def _client_for(self, operation: str) -> BaseLLMClient:
        assignment = self.assignment(operation)
        cached = self._clients.get(assignment.key)
        if cached is not None:
            return cached

        if requires_credential(assignment.provider):
            key = provider_credential(assignment.provider, self._settings)
            if not key:
                raise BackendUnavailableError()
            if assignment.provider == "google" and not is_valid_google_key(key):
                raise AIServiceError(
                    ErrorKind.INVALID_API_KEY,
                    "Invalid API key format. Expected format: AIza[35 characters]",
                )

        try:
            client = self._client_factory(
                assignment.provider, assignment.model, self._settings,
            )
        except UnsupportedProviderError as e:
            raise BackendUnavailableError(str(e)) from e
        self._clients[assignment.key] = client
        logger.info(
            "AI client ready for %s: %s (%s)", operation, assignment.key, assignment.source,
        )
        return client

    async def invoke(
        self,
        request: AIRequest,
        timeout_s: float,
        on_retry: Callable[[int, AIServiceError], None] | None = None,
    ) -> BackendResult:
        """Run one live request.

        ``timeout_s`` bounds each attempt; an expired attempt is cancelled
        and not retried.

        Raises:
            AIServiceError: On any failure.
        """
        op = request.operation
        client = self._client_for(op)
        prompt = build_prompt(request)

        async def attempt() -> LLMResponse:
            return await asyncio.wait_for(
                client.complete(
                    [Message(role="user", content=prompt)],
                    max_tokens=self._settings.llm_max_output_tokens,
                    temperature=self._settings.llm_temperature,
                    json_mode=op in JSON_OPERATIONS,
                ),
                timeout=timeout_s,
            )

        response: LLMResponse = await with_retry(
            attempt,
            operation=op,
            policy=self._retry_policy,
            sleep=self._sleep,
            on_retry=on_retry,
        )

        value = self._parse(request, response.content, client.model_name)
        return BackendResult(
            value=value,
            provider=client.provider_name,
            model=client.model_name,
            input_tokens=response.input_tokens or estimate_tokens(prompt),
            output_tokens=response.output_tokens or estimate_tokens(response.content),
            latency_ms=response.latency_ms,
        )

    @staticmethod
    def _parse(request: AIRequest, content: str, model: str) -> OperationValue:
        try:
            if request.operation == "analysis":
                return parse_analysis(content)
            if request.operation == "suggestions":
                return parse_suggestions(content, model)
            if request.operation == "enhancement":
                return parse_enhancement(content, request.text, model)
            return parse_chat(content, model)
        except ValidationError as e:
            raise AIServiceError(
                ErrorKind.INVALID_RESPONSE, f"Response failed validation: {e.error_count()} error(s)",
            ) from e
