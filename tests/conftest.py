# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a controllable clock, an in-memory state store, sample design
selections, a mock LLM client and isolated settings.
No external dependencies — all I/O is mocked.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from aigate.config.settings import Settings
from aigate.core.selection import (
    ColorThemeRef,
    ComponentRef,
    FunctionalityRef,
    ProjectSelection,
)
from aigate.llm.models import LLMResponse
from aigate.store.memory_store import MemoryStateStore

VALID_GOOGLE_KEY = "AIza" + "x" * 35


class FakeClock:
    """Callable clock returning epoch seconds that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES: Infrastructure ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def settings() -> Settings:
    """Isolated settings: no .env, memory store, valid Gemini key, no waits."""
    return Settings(
        _env_file=None,
        store_backend="memory",
        google_api_key=VALID_GOOGLE_KEY,
        ai_retry_base_delay_s=0.01,
    )


@pytest.fixture
def keyless_settings() -> Settings:
    return Settings(_env_file=None, store_backend="memory", google_api_key="")


# === FIXTURES: Sample selections ===


@pytest.fixture
def empty_selection() -> ProjectSelection:
    return ProjectSelection()


@pytest.fixture
def harmonious_selection() -> ProjectSelection:
    """Minimalist portfolio whose options raise no rule."""
    return ProjectSelection(
        project_name="Studio",
        project_type="Portfolio",
        design_style="minimalist",
        color_theme=ColorThemeRef(
            id="monochrome-modern", title="Monochrome Modern", colors=["#000", "#fff"],
        ),
        components=[ComponentRef(id="carousel", title="Carousel")],
        animations=["fade-in"],
    )


@pytest.fixture
def conflicting_selection() -> ProjectSelection:
    """Selection that trips several compatibility rules."""
    return ProjectSelection(
        project_type="E-commerce",
        design_style="minimalist",
        color_theme=ColorThemeRef(
            id="monochrome-modern",
            title="Monochrome Modern",
            colors=["#000", "#333", "#666", "#999", "#fff"],
        ),
        functionality=[
            FunctionalityRef(id="advanced-package", features=["User authentication"]),
        ],
        background="neon-glow",
        components=[ComponentRef(id="carousel", title="Carousel")],
        animations=["a1", "a2", "a3", "a4", "a5", "a6"],
    )


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    return LLMResponse(
        content="Test response",
        input_tokens=100,
        output_tokens=50,
        model="gemini-2.0-flash-exp",
        provider="google",
        latency_ms=500,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> MagicMock:
    """Mock BaseLLMClient returning ``mock_llm_response``."""
    client = MagicMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "google"
    client.model_name = "gemini-2.0-flash-exp"
    return client
