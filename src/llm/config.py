# src/llm/config.py — v1
"""Per-operation LLM routing with cascade resolution.

Resolution order:
  1. Per-operation env var (LLM_OP_CHAT=openai:gpt-4o-mini)
  2. Default provider + model (LLM_DEFAULT_PROVIDER + LLM_DEFAULT_MODEL)
  3. Hardcoded fallback (google:gemini-2.0-flash-exp)
"""

from __future__ import annotations

from dataclasses import dataclass

from aigate.config.settings import Settings
from aigate.core.models import OPERATIONS

_FALLBACK_PROVIDER = "google"
_FALLBACK_MODEL = "gemini-2.0-flash-exp"


@dataclass(frozen=True)
class LLMAssignment:
    """Resolved LLM provider:model for an operation."""

    provider: str
    model: str
    source: str  # "operation", "default", or "fallback"

    @property
    def key(self) -> str:
        """Return 'provider:model' string."""
        return f"{self.provider}:{self.model}"


def _parse_assignment(value: str) -> tuple[str, str] | None:
    """Parse 'provider:model' string. Returns None if empty."""
    if not value or ":" not in value:
        return None
    provider, model = value.split(":", 1)
    provider, model = provider.strip(), model.strip()
    if not provider or not model:
        return None
    return (provider, model)


def resolve_llm(operation: str, settings: Settings) -> LLMAssignment:
    """Resolve the LLM assignment for an operation.

    Args:
        operation: One of analysis, suggestions, enhancement, chat.
        settings: Application settings.
    """
    parsed = _parse_assignment(getattr(settings, f"llm_op_{operation}", ""))
    if parsed:
        return LLMAssignment(provider=parsed[0], model=parsed[1], source="operation")

    if settings.llm_default_provider and settings.llm_default_model:
        return LLMAssignment(
            provider=settings.llm_default_provider,
            model=settings.llm_default_model,
            source="default",
        )

    return LLMAssignment(
        provider=_FALLBACK_PROVIDER,
        model=_FALLBACK_MODEL,
        source="fallback",
    )


def resolve_all(settings: Settings) -> dict[str, LLMAssignment]:
    """Resolve LLM assignments for every operation."""
    return {op: resolve_llm(op, settings) for op in OPERATIONS}
