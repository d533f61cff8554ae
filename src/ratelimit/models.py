# src/ratelimit/models.py — v1
"""Rate limiting, tier and circuit breaker models.

Timestamps are epoch seconds (float) in memory. The persisted rate-limit
record keeps the wire names ``requests`` and ``windowStart`` in milliseconds.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

PRIVILEGED_REMAINING = 999


class AdmissionDecision(BaseModel):
    """Outcome of a rate-limit admission check."""

    admitted: bool
    remaining: int
    reset_at: float
    reserved_at: float | None = None

    def minutes_until_reset(self, now: float) -> int:
        """Whole minutes (rounded up, at least 1) until the window frees a slot."""
        seconds = max(0.0, self.reset_at - now)
        return max(1, -(-int(seconds * 1000) // 60_000))


class RateLimitRecord(BaseModel):
    """Persisted per-identity window: ``{requests: [...], windowStart}`` in ms."""

    requests: list[int] = Field(default_factory=list)
    window_start: int = Field(0, alias="windowStart")

    model_config = {"populate_by_name": True}


class RateLimitStatus(BaseModel):
    """Read-only view for dashboards and the CLI."""

    identity: str
    used: int
    limit: int
    remaining: int
    reset_at: float
    privileged: bool = False


class TierRecord(BaseModel):
    """Persisted premium status for one identity (ms timestamps)."""

    is_premium: bool = Field(False, alias="isPremium")
    tier: str = "free"
    activated_at: int | None = Field(None, alias="activatedAt")
    expires_at: int | None = Field(None, alias="expiresAt")

    model_config = {"populate_by_name": True}


class CircuitState(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitSnapshot(BaseModel):
    """Persisted circuit breaker state (ms timestamps)."""

    state: CircuitState = CircuitState.CLOSED
    consecutive_failures: int = Field(0, alias="consecutiveFailures")
    last_failure_time: int = Field(0, alias="lastFailureTime")
    opened_at: int = Field(0, alias="openedAt")
    half_open_attempts: int = Field(0, alias="halfOpenAttempts")

    model_config = {"populate_by_name": True}
