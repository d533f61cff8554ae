# src/orchestrator/orchestrator.py — v1
"""Request orchestrator: one ``resolve`` per semantic request.

States:
  Idle -> CacheCheck -> RateCheck -> Live -> (Success | Retry | Fallback) -> Done

  - Validation runs first and short-circuits without touching cache,
    limiter or fallback.
  - CacheCheck: local hit -> source "cache"; remote hit -> written into the
    local cache, source "remote".
  - RateCheck: skipped for privileged identities. Admission reserves a
    slot, released again unless the live call succeeds. A denial is a
    non-recoverable RATE_LIMIT failure and never falls back.
  - Live: the circuit breaker may skip the call. Success writes through both
    caches and keeps the reserved slot. Recoverable failures go to
    fallback when enabled; RATE_LIMIT and INVALID_API_KEY never do.

There is no single-flight: concurrent misses on the same key each run the
full path.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING, Callable

from aigate.core.errors import AIServiceError, BackendUnavailableError, ErrorKind
from aigate.core.models import (
    VALUE_MODELS,
    AIRequest,
    Failure,
    OperationValue,
    OrchestratorConfig,
    OrchestratorState,
    Success,
)
from aigate.fallback.dispatch import run_fallback
from aigate.logging.context import clear_context, set_request_context, set_state
from aigate.ratelimit.models import PRIVILEGED_REMAINING, RateLimitStatus

if TYPE_CHECKING:
    from aigate.cache.local_cache import LocalCache
    from aigate.cache.remote_cache import RemoteCacheClient
    from aigate.llm.backend import AIBackend, BackendResult
    from aigate.ratelimit.circuit_breaker import CircuitBreaker
    from aigate.ratelimit.rate_limiter import RateLimiter
    from aigate.ratelimit.tiers import TierRegistry
    from aigate.tracking.call_logger import CallLogger

logger = logging.getLogger(__name__)

CIRCUIT_OPEN_MESSAGE = "AI service temporarily unavailable"

_EMPTY_TEXT_MESSAGES = {
    "analysis": "Project description cannot be empty",
    "enhancement": "Prompt cannot be empty",
    "chat": "Message cannot be empty",
}


class _Run:
    """Mutable bookkeeping for one resolve call."""

    def __init__(self, request: AIRequest, identity: str) -> None:
        self.request = request
        self.identity = identity
        self.trace: list[OrchestratorState] = []
        self.retries = 0
        self.live: BackendResult | None = None
        self.error: ErrorKind | None = None

    def enter(self, state: OrchestratorState) -> None:
        self.trace.append(state)
        set_state(state.value)


class Orchestrator:
    """State machine in front of the AI backend.

    Args:
        backend: Live AI backend.
        limiter: Sliding-window rate limiter.
        local_cache: Process-local cache (None disables caching).
        remote_cache: Shared remote cache client (None = local only).
        tiers: Premium/privileged identity registry (None = nobody privileged).
        circuit_breaker: Optional breaker in front of Live.
        call_logger: Optional tracking logger.
        config: Recognized orchestration options.
        default_identity: Identity used when a request carries none.
        fallback: Deterministic fallback dispatcher.
        timer: Monotonic clock for latency measurement.
    """

    def __init__(
        self,
        backend: AIBackend,
        limiter: RateLimiter,
        local_cache: LocalCache | None = None,
        remote_cache: RemoteCacheClient | None = None,
        tiers: TierRegistry | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        call_logger: CallLogger | None = None,
        config: OrchestratorConfig | None = None,
        default_identity: str = "local",
        fallback: Callable[[AIRequest], OperationValue] = run_fallback,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._backend = backend
        self._limiter = limiter
        self._local = local_cache
        self._remote = remote_cache
        self._tiers = tiers
        self._breaker = circuit_breaker
        self._call_logger = call_logger
        self._config = config or OrchestratorConfig()
        self._default_identity = default_identity
        self._fallback = fallback
        self._timer = timer

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    @property
    def local_cache(self) -> LocalCache | None:
        return self._local

    @property
    def remote_cache(self) -> RemoteCacheClient | None:
        return self._remote

    @property
    def tiers(self) -> TierRegistry | None:
        return self._tiers

    @property
    def call_logger(self) -> CallLogger | None:
        return self._call_logger

    async def resolve(self, request: AIRequest) -> Success | Failure:
        """Resolve one request to a tagged result. Never raises for AI failures."""
        run = _Run(request, request.identity or self._default_identity)
        started = self._timer()
        set_request_context(str(uuid.uuid4()), request.operation, run.identity)
        try:
            run.enter(OrchestratorState.IDLE)
            result = await self._resolve(run)
            run.enter(OrchestratorState.DONE)
            result.trace = run.trace
            logger.info(
                "Resolved %s via %s",
                request.operation,
                result.source if isinstance(result, Success) else result.error.value,
            )
            self._track(run, result, started)
            return result
        finally:
            clear_context()

    async def _resolve(self, run: _Run) -> Success | Failure:
        request = run.request
        invalid = self._validate(request)
        if invalid is not None:
            return invalid

        use_cache = self._flag(request.enable_cache, self._config.enable_cache)
        key = request.cache_key

        if use_cache:
            run.enter(OrchestratorState.CACHE_CHECK)
            cached = await self._lookup(request.operation, key)
            if cached is not None:
                return cached

        run.enter(OrchestratorState.RATE_CHECK)
        reserved_at: float | None = None
        if not await self._is_privileged(run.identity):
            decision = await self._limiter.try_acquire(run.identity)
            if not decision.admitted:
                run.error = ErrorKind.RATE_LIMIT
                return Failure(
                    error=ErrorKind.RATE_LIMIT,
                    message=self._limiter.denial_message(decision),
                    recoverable=False,
                    reset_at=decision.reset_at,
                )
            reserved_at = decision.reserved_at

        try:
            return await self._dispatch(run, use_cache)
        finally:
            # Only a live success keeps its slot.
            if reserved_at is not None and run.live is None:
                await self._limiter.release(run.identity, reserved_at)

    async def _dispatch(self, run: _Run, use_cache: bool) -> Success | Failure:
        request = run.request
        key = request.cache_key
        if self._breaker is not None and not await self._breaker.allow_request():
            logger.warning("Circuit open, skipping live call: %s", self._breaker.status_message())
            error = AIServiceError(ErrorKind.API_ERROR, CIRCUIT_OPEN_MESSAGE)
            return self._fail_over(run, error)

        run.enter(OrchestratorState.LIVE)
        try:
            live = await self._backend.invoke(
                request,
                timeout_s=self._config.timeout_for(request.operation),
                on_retry=lambda attempt, error: self._on_retry(run, attempt, error),
            )
        except AIServiceError as e:
            await self._record_live_failure(e)
            return self._fail_over(run, e)

        run.live = live
        run.enter(OrchestratorState.SUCCESS)
        if self._breaker is not None:
            await self._breaker.record_success()
        if use_cache:
            await self._write_through(request.operation, key, live.value)
        return Success(value=live.value, source="live", cache_key=key)

    def _validate(self, request: AIRequest) -> Failure | None:
        message: str | None = None
        if request.operation == "suggestions":
            if request.selection is None:
                message = "A project selection is required for suggestions"
        elif not request.text.strip():
            message = _EMPTY_TEXT_MESSAGES[request.operation]
        if message is None:
            return None
        # Input errors are never fallback material, whatever their kind.
        return Failure(error=ErrorKind.API_ERROR, message=message, recoverable=False)

    async def _lookup(self, operation: str, key: str) -> Success | None:
        if self._local is not None:
            raw = await self._local.get(key)
            value = self._revive(operation, raw)
            if value is not None:
                logger.debug("Local cache hit: %s", key)
                return Success(value=value, source="cache", cache_key=key)

        if self._remote is not None and (self._remote.available or await self._remote.health()):
            raw = await self._remote.get(key, operation)
            value = self._revive(operation, raw)
            if value is not None:
                if self._local is not None:
                    await self._local.set(key, raw, self._config.cache_ttl_ms / 1000.0)
                return Success(value=value, source="remote", cache_key=key)
        return None

    @staticmethod
    def _revive(operation: str, raw: object) -> OperationValue | None:
        """Re-validate a cached payload; anything malformed counts as a miss."""
        if raw is None:
            return None
        try:
            return VALUE_MODELS[operation].model_validate(raw)  # type: ignore[return-value]
        except ValueError as e:
            logger.warning("Ignoring malformed cached %s value: %s", operation, e)
            return None

    async def _write_through(self, operation: str, key: str, value: OperationValue) -> None:
        data = value.model_dump(mode="json")
        ttl_s = self._config.cache_ttl_ms / 1000.0
        if self._local is not None:
            await self._local.set(key, data, ttl_s)
        if self._remote is not None and self._remote.available:
            await self._remote.set(key, operation, data, ttl_s)

    def _fail_over(self, run: _Run, error: AIServiceError) -> Success | Failure:
        run.error = error.kind
        use_fallback = self._flag(run.request.enable_fallback, self._config.enable_fallback)
        if not error.recoverable or not use_fallback:
            logger.warning("%s failed: %s (%s)", run.request.operation, error.kind.value, error.message)
            return Failure(
                error=error.kind, message=error.message, recoverable=error.recoverable,
            )

        run.enter(OrchestratorState.FALLBACK)
        logger.info("Using fallback for %s after %s", run.request.operation, error.kind.value)
        value = self._fallback(run.request)
        return Success(value=value, source="fallback", cache_key=run.request.cache_key)

    async def _record_live_failure(self, error: AIServiceError) -> None:
        # Configuration problems say nothing about upstream health.
        if self._breaker is None or error.kind in (ErrorKind.RATE_LIMIT, ErrorKind.INVALID_API_KEY):
            return
        if isinstance(error, BackendUnavailableError):
            return
        await self._breaker.record_failure()

    @staticmethod
    def _on_retry(run: _Run, attempt: int, error: AIServiceError) -> None:
        run.retries = attempt
        run.enter(OrchestratorState.RETRY)

    async def _is_privileged(self, identity: str) -> bool:
        return self._tiers is not None and await self._tiers.is_privileged(identity)

    @staticmethod
    def _flag(override: bool | None, default: bool) -> bool:
        return default if override is None else override

    def _track(self, run: _Run, result: Success | Failure, started: float) -> None:
        if self._call_logger is None:
            return
        live = run.live
        self._call_logger.record(
            operation=run.request.operation,
            latency_ms=int((self._timer() - started) * 1000),
            source=result.source if isinstance(result, Success) else None,
            success=result.ok,
            provider=live.provider if live else None,
            model=live.model if live else None,
            input_tokens=live.input_tokens if live else 0,
            output_tokens=live.output_tokens if live else 0,
            error=run.error,
            retry_count=run.retries,
        )

    async def rate_limit_status(self, identity: str | None = None) -> RateLimitStatus:
        """Quota view for ``identity``; privileged callers report 999 remaining."""
        identity = identity or self._default_identity
        if await self._is_privileged(identity):
            status = await self._limiter.status(identity, privileged=True)
            return status.model_copy(update={"remaining": PRIVILEGED_REMAINING})
        return await self._limiter.status(identity)

    async def aclose(self) -> None:
        if self._remote is not None:
            await self._remote.aclose()
