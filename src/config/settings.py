# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for every deployment-specific knob: rate limiting,
local and remote caching, the persisted state store, AI backend routing,
timeouts, retry, circuit breaker and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aigate.core.models import OrchestratorConfig


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Rate limiting ===
    rate_limit_max_requests: int = 20
    rate_limit_window_ms: int = 3_600_000
    privileged_identities: str = ""
    default_identity: str = "local"

    # === Local cache ===
    cache_enabled: bool = True
    cache_ttl_ms: int = 3_600_000
    cache_max_entries: int = 100

    # === Persisted state store ===
    store_backend: Literal["memory", "json", "sqlite"] = "json"
    store_root: Path = Path("~/.aigate/state")

    # === Remote shared cache ===
    remote_cache_enabled: bool = False
    remote_cache_url: str = "http://localhost:3001/api/cache"
    remote_cache_timeout_ms: int = 500
    remote_cache_health_timeout_ms: int = 2000
    remote_cache_health_interval_s: float = 60.0

    # === AI backend ===
    llm_default_provider: str = "google"
    llm_default_model: str = "gemini-2.0-flash-exp"
    llm_temperature: float = 0.7
    llm_max_output_tokens: int = 1000

    # Provider credentials
    google_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434"

    # Per-operation LLM assignment (provider:model, highest priority)
    llm_op_analysis: str = ""
    llm_op_suggestions: str = ""
    llm_op_enhancement: str = ""
    llm_op_chat: str = ""

    # === Timeouts ===
    ai_timeout_ms: int = 5000
    ai_timeout_chat_ms: int = 6000
    ai_timeout_enhancement_ms: int = 8000

    # === Retry ===
    ai_max_retries: int = 3
    ai_retry_base_delay_s: float = 1.0

    # === Fallback ===
    fallback_enabled: bool = True

    # === Circuit breaker ===
    circuit_breaker_enabled: bool = True
    circuit_failure_threshold: int = 5
    circuit_open_duration_ms: int = 300_000
    circuit_half_open_attempts: int = 3

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator(
        "rate_limit_max_requests",
        "rate_limit_window_ms",
        "cache_ttl_ms",
        "cache_max_entries",
        "ai_timeout_ms",
        "ai_timeout_chat_ms",
        "ai_timeout_enhancement_ms",
        "remote_cache_timeout_ms",
    )
    @classmethod
    def validate_positive(cls, v: int, info) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("ai_max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("ai_max_retries must be >= 0")
        return v

    @field_validator("llm_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:  # noqa: N805
        if not 0.0 <= v <= 2.0:
            raise ValueError("llm_temperature must be within [0, 2]")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.remote_cache_enabled and not self.remote_cache_url:
            errors.append("REMOTE_CACHE_ENABLED requires REMOTE_CACHE_URL")

        if self.store_backend != "memory" and not str(self.store_root).strip():
            errors.append(f"STORE_BACKEND={self.store_backend} requires STORE_ROOT")

        if self.circuit_breaker_enabled and self.circuit_failure_threshold < 1:
            errors.append("CIRCUIT_FAILURE_THRESHOLD must be >= 1")

        if self.circuit_breaker_enabled and self.circuit_half_open_attempts < 1:
            errors.append("CIRCUIT_HALF_OPEN_ATTEMPTS must be >= 1")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def privileged_identities_list(self) -> list[str]:
        """Parse comma-separated privileged identities."""
        return [i.strip() for i in self.privileged_identities.split(",") if i.strip()]

    @property
    def orchestrator_config(self) -> OrchestratorConfig:
        """Project the recognized orchestration options."""
        return OrchestratorConfig(
            max_requests_per_window=self.rate_limit_max_requests,
            window_duration_ms=self.rate_limit_window_ms,
            cache_ttl_ms=self.cache_ttl_ms,
            cache_max_entries=self.cache_max_entries,
            ai_timeout_ms=self.ai_timeout_ms,
            enable_fallback=self.fallback_enabled,
            enable_cache=self.cache_enabled,
            operation_timeouts_ms={
                "chat": self.ai_timeout_chat_ms,
                "enhancement": self.ai_timeout_enhancement_ms,
            },
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off runs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
