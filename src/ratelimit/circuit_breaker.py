# src/ratelimit/circuit_breaker.py — v1
"""Circuit breaker around the AI backend.

CLOSED   normal operation; consecutive live failures are counted.
OPEN     entered after ``failure_threshold`` consecutive failures; live calls
         are skipped for ``open_duration_s`` and requests go straight to the
         fallback path.
HALF_OPEN entered when the open period elapses; at most
         ``half_open_attempts`` probe calls are let through. A success closes
         the circuit, a failure re-opens it.

State is written through to the injected state store so a restart does not
forget an open circuit.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

from aigate.ratelimit.models import CircuitSnapshot, CircuitState
from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)

_STATE_KEY = "state"


class CircuitBreaker:
    """Consecutive-failure circuit breaker."""

    def __init__(
        self,
        store: BaseStateStore | None = None,
        failure_threshold: int = 5,
        open_duration_s: float = 300.0,
        half_open_attempts: int = 3,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._failure_threshold = failure_threshold
        self._open_duration_s = open_duration_s
        self._half_open_limit = half_open_attempts
        self._clock = clock
        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._last_failure_time = 0.0
        self._opened_at = 0.0
        self._half_open_attempts = 0
        self._loaded = store is None

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    async def state(self) -> CircuitState:
        await self._ensure_loaded()
        changed = self._update_state()
        if changed:
            await self._persist()
        return self._state

    async def allow_request(self) -> bool:
        """Whether a live call may be attempted now (consumes a half-open probe)."""
        await self._ensure_loaded()
        changed = self._update_state()
        with self._lock:
            if self._state == CircuitState.CLOSED:
                allowed = True
            elif self._state == CircuitState.OPEN:
                allowed = False
            else:
                allowed = self._half_open_attempts < self._half_open_limit
                if allowed:
                    self._half_open_attempts += 1
                    changed = True
        if changed:
            await self._persist()
        return allowed

    async def record_success(self) -> None:
        await self._ensure_loaded()
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                logger.info("AI service recovered, closing circuit")
                self._state = CircuitState.CLOSED
                self._half_open_attempts = 0
                self._opened_at = 0.0
            self._consecutive_failures = 0
        await self._persist()

    async def record_failure(self) -> None:
        await self._ensure_loaded()
        now = self._clock()
        with self._lock:
            self._consecutive_failures += 1
            self._last_failure_time = now
            if self._state == CircuitState.HALF_OPEN:
                logger.warning("AI service still failing, re-opening circuit")
                self._state = CircuitState.OPEN
                self._opened_at = now
                self._half_open_attempts = 0
            elif (
                self._state == CircuitState.CLOSED
                and self._consecutive_failures >= self._failure_threshold
            ):
                logger.warning(
                    "Failure threshold reached (%d), opening circuit",
                    self._failure_threshold,
                )
                self._state = CircuitState.OPEN
                self._opened_at = now
        await self._persist()

    def time_until_recovery(self) -> float:
        """Seconds until an open circuit turns half-open (0 otherwise)."""
        if self._state != CircuitState.OPEN:
            return 0.0
        return max(0.0, self._open_duration_s - (self._clock() - self._opened_at))

    def status_message(self) -> str:
        if self._state == CircuitState.CLOSED:
            return "AI service is operational"
        if self._state == CircuitState.OPEN:
            minutes = math.ceil(self.time_until_recovery() / 60)
            plural = "" if minutes == 1 else "s"
            return (
                "AI service temporarily unavailable. "
                f"Retrying in {minutes} minute{plural}"
            )
        return "AI service is recovering, testing connection..."

    async def reset(self) -> None:
        with self._lock:
            self._state = CircuitState.CLOSED
            self._consecutive_failures = 0
            self._last_failure_time = 0.0
            self._opened_at = 0.0
            self._half_open_attempts = 0
        await self._persist()

    def _update_state(self) -> bool:
        """OPEN -> HALF_OPEN once the open period has elapsed."""
        with self._lock:
            if (
                self._state == CircuitState.OPEN
                and self._clock() - self._opened_at >= self._open_duration_s
            ):
                logger.info("Open duration elapsed, circuit half-open")
                self._state = CircuitState.HALF_OPEN
                self._half_open_attempts = 0
                return True
        return False

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        try:
            raw = await self._store.get(_STATE_KEY)
        except Exception as e:
            logger.warning("Circuit breaker state unreadable: %s", e)
            return
        if raw is None:
            return
        try:
            snap = CircuitSnapshot.model_validate(raw)
        except ValueError as e:
            logger.warning("Discarding corrupt circuit breaker state: %s", e)
            return
        with self._lock:
            self._state = snap.state
            self._consecutive_failures = snap.consecutive_failures
            self._last_failure_time = snap.last_failure_time / 1000.0
            self._opened_at = snap.opened_at / 1000.0
            self._half_open_attempts = snap.half_open_attempts
        logger.debug("Circuit breaker restored in state %s", snap.state.value)

    async def _persist(self) -> None:
        if self._store is None:
            return
        with self._lock:
            snap = CircuitSnapshot(
                state=self._state,
                consecutive_failures=self._consecutive_failures,
                last_failure_time=int(self._last_failure_time * 1000),
                opened_at=int(self._opened_at * 1000),
                half_open_attempts=self._half_open_attempts,
            )
        try:
            await self._store.set(_STATE_KEY, snap.model_dump(mode="json", by_alias=True))
        except Exception as e:
            logger.warning("Circuit breaker state not saved: %s", e)
