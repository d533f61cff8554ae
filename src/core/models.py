# src/core/models.py — v1
"""Core domain models: requests, tagged results and per-operation payloads.

A request enters the orchestrator as an AIRequest and leaves as a Result,
which is either a Success (tagged with where the value came from) or a
Failure (tagged with an ErrorKind).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, computed_field

from aigate.core.errors import ErrorKind
from aigate.core.selection import ProjectSelection

Operation = Literal["analysis", "suggestions", "enhancement", "chat"]
OPERATIONS: tuple[str, ...] = ("analysis", "suggestions", "enhancement", "chat")

ResultSource = Literal["cache", "remote", "live", "fallback"]
Severity = Literal["low", "medium", "high"]


class OrchestratorState(str, Enum):
    """States visited while resolving a request."""

    IDLE = "Idle"
    CACHE_CHECK = "CacheCheck"
    RATE_CHECK = "RateCheck"
    LIVE = "Live"
    RETRY = "Retry"
    SUCCESS = "Success"
    FALLBACK = "Fallback"
    DONE = "Done"


class ChatTurn(BaseModel):
    """One previous message in a conversation."""

    role: Literal["user", "assistant"]
    content: str


class AIRequest(BaseModel):
    """A single semantic request.

    ``text`` holds the free-text payload (project description, prompt or chat
    message). ``selection`` holds the structured snapshot used by
    suggestions and as chat context.
    """

    operation: Operation
    text: str = ""
    selection: ProjectSelection | None = None
    category: str | None = None
    history: list[ChatTurn] = Field(default_factory=list)
    identity: str | None = None
    enable_fallback: bool | None = None
    enable_cache: bool | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cache_key(self) -> str:
        """Deterministic key derived from the payload."""
        from aigate.core.keys import derive_cache_key

        return derive_cache_key(self)


# --- Operation payloads ---


class ProjectAnalysis(BaseModel):
    """Result of the ``analysis`` operation."""

    project_type: str
    design_style: str | None = None
    color_theme: str | None = None
    layout: str | None = None
    defaults: dict[str, Any] = Field(default_factory=dict)
    suggested_components: list[str] = Field(default_factory=list)
    suggested_animations: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


class DesignSuggestion(BaseModel):
    type: Literal["improvement", "warning", "tip"]
    severity: Severity
    message: str
    reasoning: str
    auto_fixable: bool = False
    affected: list[str] = Field(default_factory=list)


class SuggestionsResult(BaseModel):
    """Result of the ``suggestions`` operation."""

    suggestions: list[DesignSuggestion] = Field(default_factory=list)
    score: int | None = None
    harmony: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


class PromptEnhancement(BaseModel):
    """Result of the ``enhancement`` operation."""

    original_prompt: str
    enhanced_prompt: str
    improvements: list[str] = Field(default_factory=list)
    added_sections: list[str] = Field(default_factory=list)
    score: int | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


class ChatReply(BaseModel):
    """Result of the ``chat`` operation."""

    message: str
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


OperationValue = Union[ProjectAnalysis, SuggestionsResult, PromptEnhancement, ChatReply]

VALUE_MODELS: dict[str, type[BaseModel]] = {
    "analysis": ProjectAnalysis,
    "suggestions": SuggestionsResult,
    "enhancement": PromptEnhancement,
    "chat": ChatReply,
}


# --- Results ---


class Success(BaseModel):
    kind: Literal["success"] = "success"
    value: Any
    source: ResultSource
    cache_key: str | None = None
    trace: list[OrchestratorState] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    kind: Literal["error"] = "error"
    error: ErrorKind
    message: str
    recoverable: bool
    reset_at: float | None = None
    trace: list[OrchestratorState] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False


Result = Annotated[Union[Success, Failure], Field(discriminator="kind")]


class OrchestratorConfig(BaseModel):
    """Recognized orchestration options (durations in milliseconds)."""

    max_requests_per_window: int = 20
    window_duration_ms: int = 3_600_000
    cache_ttl_ms: int = 3_600_000
    cache_max_entries: int = 100
    ai_timeout_ms: int = 5000
    enable_fallback: bool = True
    enable_cache: bool = True
    operation_timeouts_ms: dict[str, int] = Field(
        default_factory=lambda: {"chat": 6000, "enhancement": 8000}
    )

    def timeout_for(self, operation: str) -> float:
        """Live-call timeout in seconds for an operation."""
        return self.operation_timeouts_ms.get(operation, self.ai_timeout_ms) / 1000.0
