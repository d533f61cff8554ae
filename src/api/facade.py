# src/api/facade.py — v1
"""Public API facade: build a wired Orchestrator from Settings.

Usage:
    from aigate.api.facade import create_orchestrator
    orchestrator = await create_orchestrator()
    result = await orchestrator.resolve(AIRequest(operation="analysis", text="..."))

Every collaborator can be injected for tests; anything not injected is built
from Settings. One persisted store is shared, split into the namespaces
``ratelimit``, ``cache``, ``tiers`` and ``circuit``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from aigate.cache.local_cache import LocalCache
from aigate.cache.remote_cache import RemoteCacheClient
from aigate.cache.warming import warm_local_cache
from aigate.config.settings import Settings, load_settings
from aigate.llm.backend import AIBackend
from aigate.orchestrator.orchestrator import Orchestrator
from aigate.ratelimit.circuit_breaker import CircuitBreaker
from aigate.ratelimit.rate_limiter import RateLimiter
from aigate.ratelimit.tiers import TierRegistry
from aigate.store.store_factory import create_state_store
from aigate.tracking.call_logger import CallLogger

if TYPE_CHECKING:
    import httpx

    from aigate.core.models import AIRequest, Failure, Success
    from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)


async def create_orchestrator(
    settings: Settings | None = None,
    store: BaseStateStore | None = None,
    backend: AIBackend | None = None,
    call_logger: CallLogger | None = None,
    remote_transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], float] = time.time,
    warm_cache: bool = True,
) -> Orchestrator:
    """Wire an Orchestrator and its collaborators.

    Args:
        settings: Global settings. Loaded from .env if None.
        store: Persisted state store. Built from settings if None.
        backend: Live AI backend. Built from settings if None.
        call_logger: Tracking logger. A fresh one if None.
        remote_transport: httpx transport for the remote cache (tests).
        clock: Wall clock (epoch seconds) for limiter, cache and breaker.
        warm_cache: Pre-populate the local cache with common analyses.

    Returns:
        Ready-to-use Orchestrator.
    """
    settings = settings or load_settings()
    store = store if store is not None else create_state_store(settings)
    config = settings.orchestrator_config

    local_cache: LocalCache | None = None
    if settings.cache_enabled:
        local_cache = LocalCache(
            store=store.namespace("cache"),
            max_entries=settings.cache_max_entries,
            default_ttl_s=settings.cache_ttl_ms / 1000.0,
            clock=clock,
        )
        restored = await local_cache.load()
        if warm_cache:
            await warm_local_cache(local_cache, ttl_s=settings.cache_ttl_ms / 1000.0)
        logger.debug("Local cache ready (%d restored entries)", restored)

    remote_cache: RemoteCacheClient | None = None
    if settings.remote_cache_enabled:
        remote_cache = RemoteCacheClient(
            api_url=settings.remote_cache_url,
            timeout_s=settings.remote_cache_timeout_ms / 1000.0,
            health_timeout_s=settings.remote_cache_health_timeout_ms / 1000.0,
            health_interval_s=settings.remote_cache_health_interval_s,
            transport=remote_transport,
        )

    breaker: CircuitBreaker | None = None
    if settings.circuit_breaker_enabled:
        breaker = CircuitBreaker(
            store=store.namespace("circuit"),
            failure_threshold=settings.circuit_failure_threshold,
            open_duration_s=settings.circuit_open_duration_ms / 1000.0,
            half_open_attempts=settings.circuit_half_open_attempts,
            clock=clock,
        )

    orchestrator = Orchestrator(
        backend=backend or AIBackend(settings),
        limiter=RateLimiter(
            store=store.namespace("ratelimit"),
            max_requests=settings.rate_limit_max_requests,
            window_s=settings.rate_limit_window_ms / 1000.0,
            clock=clock,
        ),
        local_cache=local_cache,
        remote_cache=remote_cache,
        tiers=TierRegistry(
            store=store.namespace("tiers"),
            static_identities=settings.privileged_identities_list,
            clock=clock,
        ),
        circuit_breaker=breaker,
        call_logger=call_logger or CallLogger(),
        config=config,
        default_identity=settings.default_identity,
    )
    logger.info(
        "Orchestrator ready: store=%s, cache=%s, remote=%s, breaker=%s",
        settings.store_backend, settings.cache_enabled,
        settings.remote_cache_enabled, settings.circuit_breaker_enabled,
    )
    return orchestrator


async def resolve(request: AIRequest, settings: Settings | None = None) -> Success | Failure:
    """One-shot convenience: build, resolve, close."""
    orchestrator = await create_orchestrator(settings)
    try:
        return await orchestrator.resolve(request)
    finally:
        await orchestrator.aclose()
