# src/cache/remote_cache.py — v1
"""HTTP client for the shared remote cache service.

REST contract:
    GET    /cache?key=&type=      -> {success, data | null}   (404 = miss)
    POST   /cache {key,type,value,ttl} -> {success, data: {key, ttl}}
    DELETE /cache?key=&type=      -> {success}
    POST   /cache/clear {type}    -> {success, deletedCount, type}
    GET    /cache/stats           -> {totalKeys, hitRate, totalHits, totalMisses}
    GET    /health                -> 2xx when the service is usable

The remote store is an optimization, not a dependency. Every call has its own
short timeout and every failure degrades to "absent" / no-op / 0. Nothing
here raises to the caller and nothing is retried.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from aigate.cache.models import CACHE_TYPES, RemoteCacheStats

logger = logging.getLogger(__name__)


class RemoteCacheClient:
    """Best-effort client for the shared cache REST service."""

    def __init__(
        self,
        api_url: str,
        timeout_s: float = 0.5,
        health_timeout_s: float = 2.0,
        health_interval_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._health_url = _derive_health_url(self._api_url)
        self._timeout_s = timeout_s
        self._health_timeout_s = health_timeout_s
        self._health_interval_s = health_interval_s
        self._clock = clock
        self._client = httpx.AsyncClient(transport=transport, timeout=timeout_s)
        self._available = True
        self._last_health_check: float | None = None

    @property
    def available(self) -> bool:
        """Last known health (no network call)."""
        return self._available

    async def health(self, force: bool = False) -> bool:
        """Probe the service, at most once per health interval unless forced."""
        now = self._clock()
        if (
            not force
            and self._last_health_check is not None
            and now - self._last_health_check < self._health_interval_s
        ):
            return self._available

        self._last_health_check = now
        try:
            response = await self._client.get(
                self._health_url, timeout=self._health_timeout_s,
            )
            self._available = response.is_success
        except httpx.HTTPError as e:
            logger.debug("Remote cache health check failed: %s", e)
            self._available = False

        if not self._available:
            logger.warning("Remote cache unavailable at %s", self._health_url)
        return self._available

    async def get(self, key: str, cache_type: str) -> Any | None:
        """Return the cached value or None."""
        if not self._check_type(cache_type):
            return None
        body = await self._request(
            "GET", self._api_url, params={"key": key, "type": cache_type},
            miss_statuses=(404,),
        )
        if not body or not body.get("success"):
            return None
        data = body.get("data")
        if data is not None:
            logger.debug("Remote cache hit: %s (%s)", key, cache_type)
        return data

    async def set(
        self, key: str, cache_type: str, value: Any, ttl_s: float | None = None,
    ) -> None:
        """Store a value. TTL travels in milliseconds; None leaves it to the server."""
        if not self._check_type(cache_type):
            return
        payload: dict[str, Any] = {"key": key, "type": cache_type, "value": value}
        if ttl_s is not None:
            payload["ttl"] = max(1000, int(ttl_s * 1000))
        await self._request("POST", self._api_url, json=payload)

    async def delete(self, key: str, cache_type: str) -> None:
        if not self._check_type(cache_type):
            return
        await self._request(
            "DELETE", self._api_url, params={"key": key, "type": cache_type},
        )

    async def clear(self, cache_type: str = "all") -> int:
        """Clear one namespace (or ``"all"``). Returns the deleted count."""
        if cache_type != "all" and not self._check_type(cache_type):
            return 0
        body = await self._request(
            "POST", f"{self._api_url}/clear", json={"type": cache_type},
        )
        if not body or not body.get("success"):
            return 0
        count = body.get("deletedCount", 0)
        return count if isinstance(count, int) else 0

    async def stats(self) -> RemoteCacheStats | None:
        body = await self._request("GET", f"{self._api_url}/stats")
        if not body:
            return None
        try:
            return RemoteCacheStats.model_validate(body.get("data", body))
        except ValueError as e:
            logger.debug("Unexpected remote stats body: %s", e)
            return None

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        miss_statuses: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> dict[str, Any] | None:
        """Issue one request; any failure yields None."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            logger.debug("Remote cache %s %s timed out", method, url)
            return None
        except httpx.HTTPError as e:
            logger.debug("Remote cache %s %s failed: %s", method, url, e)
            self._available = False
            return None

        if response.status_code in miss_statuses:
            return None
        if not response.is_success:
            logger.debug(
                "Remote cache %s %s returned %d", method, url, response.status_code,
            )
            return None
        try:
            body = response.json()
        except ValueError:
            logger.debug("Remote cache %s %s returned a non-JSON body", method, url)
            return None
        return body if isinstance(body, dict) else None

    @staticmethod
    def _check_type(cache_type: str) -> bool:
        if cache_type in CACHE_TYPES:
            return True
        logger.warning("Unknown remote cache type: %r", cache_type)
        return False


def _derive_health_url(api_url: str) -> str:
    """``http://host/api/cache`` -> ``http://host/api/health``."""
    if api_url.endswith("/cache"):
        return api_url[: -len("/cache")] + "/health"
    return api_url + "/health"
