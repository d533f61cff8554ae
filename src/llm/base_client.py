# src/llm/base_client.py — v1
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from aigate.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Text completion. ``json_mode`` asks the provider for a JSON body."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, openai, anthropic, ollama)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model the client sends requests to."""
