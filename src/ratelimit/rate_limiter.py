# src/ratelimit/rate_limiter.py — v1
"""Sliding-window admission control per caller identity.

A request is admitted while fewer than ``max_requests`` timestamps are
younger than ``window_s``. Timestamps that fall out of the window are pruned
before every decision, so quota comes back one request at a time instead of
all at once at a fixed boundary.

Only live AI dispatches are counted. The orchestrator reserves a slot with
``try_acquire`` before dispatching and hands it back with ``release`` when
the call fails, so concurrent requests never overrun the window. Cache hits
and fallbacks never take a slot.

Windows live in memory and are written through to the injected state store
as ``{requests: [ms...], windowStart: ms}`` per identity. Store failures are
logged and absorbed.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from aigate.ratelimit.models import AdmissionDecision, RateLimitRecord, RateLimitStatus
from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)


class RateLimiter:
    """Per-identity sliding window limiter."""

    def __init__(
        self,
        store: BaseStateStore | None = None,
        max_requests: int = 20,
        window_s: float = 3600.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_s <= 0:
            raise ValueError("window_s must be > 0")
        self._store = store
        self._max_requests = max_requests
        self._window_s = window_s
        self._clock = clock
        self._windows: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_s(self) -> float:
        return self._window_s

    async def check_admission(self, identity: str) -> AdmissionDecision:
        """Decide whether ``identity`` may dispatch one more live request."""
        await self._ensure_loaded(identity)
        now = self._clock()
        with self._lock:
            window, pruned = self._prune(identity, now)
            count = len(window)
            remaining = max(0, self._max_requests - count)
            reset_at = (window[0] + self._window_s) if window else now + self._window_s
        if pruned:
            await self._persist(identity)

        decision = AdmissionDecision(
            admitted=count < self._max_requests, remaining=remaining, reset_at=reset_at,
        )
        if not decision.admitted:
            logger.info(
                "Rate limit reached for %s (%d/%d), resets in %.0fs",
                identity, count, self._max_requests, reset_at - now,
            )
        return decision

    async def record_request(self, identity: str) -> None:
        """Count one dispatched live request against ``identity``."""
        await self._ensure_loaded(identity)
        now = self._clock()
        with self._lock:
            window, _ = self._prune(identity, now)
            window.append(now)
            used = len(window)
        logger.debug("Recorded request for %s (%d/%d)", identity, used, self._max_requests)
        await self._persist(identity)

    async def try_acquire(self, identity: str) -> AdmissionDecision:
        """Check and reserve one slot for ``identity`` in a single step.

        Concurrent callers cannot both take the last slot. An admitted
        decision carries ``reserved_at``; hand it back to ``release`` when
        the live call does not go through.
        """
        await self._ensure_loaded(identity)
        now = self._clock()
        with self._lock:
            window, _ = self._prune(identity, now)
            count = len(window)
            admitted = count < self._max_requests
            if admitted:
                window.append(now)
                count += 1
            remaining = max(0, self._max_requests - count)
            reset_at = window[0] + self._window_s if window else now + self._window_s
        if admitted:
            await self._persist(identity)
            logger.debug("Reserved request for %s (%d/%d)", identity, count, self._max_requests)
        else:
            logger.info(
                "Rate limit reached for %s (%d/%d), resets in %.0fs",
                identity, count, self._max_requests, reset_at - now,
            )
        return AdmissionDecision(
            admitted=admitted,
            remaining=remaining,
            reset_at=reset_at,
            reserved_at=now if admitted else None,
        )

    async def release(self, identity: str, reserved_at: float) -> None:
        """Give back a slot taken by ``try_acquire``."""
        with self._lock:
            window = self._windows.get(identity, [])
            try:
                window.remove(reserved_at)
            except ValueError:
                return
        logger.debug("Released reservation for %s", identity)
        await self._persist(identity)

    async def status(self, identity: str, privileged: bool = False) -> RateLimitStatus:
        decision = await self.check_admission(identity)
        return RateLimitStatus(
            identity=identity,
            used=self._max_requests - decision.remaining,
            limit=self._max_requests,
            remaining=decision.remaining,
            reset_at=decision.reset_at,
            privileged=privileged,
        )

    async def time_until_reset(self, identity: str) -> float:
        """Seconds until the oldest counted request leaves the window (0 if none)."""
        await self._ensure_loaded(identity)
        now = self._clock()
        with self._lock:
            window, _ = self._prune(identity, now)
            if not window:
                return 0.0
            return max(0.0, window[0] + self._window_s - now)

    async def reset(self, identity: str) -> None:
        with self._lock:
            self._windows[identity] = []
        if self._store is not None:
            try:
                await self._store.delete(identity)
            except Exception as e:
                logger.warning("Rate limit reset not persisted for %s: %s", identity, e)

    def denial_message(self, decision: AdmissionDecision) -> str:
        """Caller-facing text for a denied admission."""
        minutes = decision.minutes_until_reset(self._clock())
        plural = "" if minutes == 1 else "s"
        return f"AI limit reached. Please try again in {minutes} minute{plural}."

    def _prune(self, identity: str, now: float) -> tuple[list[float], bool]:
        """Drop timestamps older than the window. Caller holds the lock."""
        window = self._windows.setdefault(identity, [])
        cutoff = now - self._window_s
        kept = [t for t in window if t > cutoff]
        pruned = len(kept) != len(window)
        if pruned:
            self._windows[identity] = kept
        return self._windows[identity], pruned

    async def _ensure_loaded(self, identity: str) -> None:
        if identity in self._windows or self._store is None:
            return
        try:
            raw = await self._store.get(identity)
        except Exception as e:
            logger.warning("Rate limit record unreadable for %s: %s", identity, e)
            raw = None

        timestamps: list[float] = []
        if raw is not None:
            try:
                record = RateLimitRecord.model_validate(raw)
                timestamps = sorted(t / 1000.0 for t in record.requests)
            except ValueError as e:
                logger.warning("Discarding corrupt rate limit record for %s: %s", identity, e)
        with self._lock:
            self._windows.setdefault(identity, timestamps)

    async def _persist(self, identity: str) -> None:
        if self._store is None:
            return
        with self._lock:
            window = list(self._windows.get(identity, []))
        now_ms = int(self._clock() * 1000)
        record = RateLimitRecord(
            requests=[int(t * 1000) for t in window],
            window_start=int(window[0] * 1000) if window else now_ms,
        )
        try:
            await self._store.set(identity, record.model_dump(by_alias=True))
        except Exception as e:
            logger.warning("Rate limit record not saved for %s: %s", identity, e)
