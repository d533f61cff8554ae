# tests/unit/cache/test_remote_cache.py — v1
"""Tests for cache/remote_cache.py — REST contract and silent degradation."""

from __future__ import annotations

import json

import httpx
import pytest

from aigate.cache.remote_cache import RemoteCacheClient

API = "http://cache.test/api/cache"


def _client(handler, **kwargs) -> RemoteCacheClient:
    return RemoteCacheClient(API, transport=httpx.MockTransport(handler), **kwargs)


class TestRemoteGet:
    @pytest.mark.asyncio
    async def test_hit(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"success": True, "data": {"v": 1}})

        client = _client(handler)
        assert await client.get("k1", "analysis") == {"v": 1}
        assert seen["params"] == {"key": "k1", "type": "analysis"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_404_is_miss(self):
        client = _client(lambda r: httpx.Response(404, json={"success": False}))
        assert await client.get("k", "chat") is None
        assert client.available is True
        await client.aclose()

    @pytest.mark.asyncio
    async def test_null_data_is_miss(self):
        client = _client(lambda r: httpx.Response(200, json={"success": True, "data": None}))
        assert await client.get("k", "chat") is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_server_error_is_miss(self):
        client = _client(lambda r: httpx.Response(500))
        assert await client.get("k", "chat") is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_bad_body_is_miss(self):
        client = _client(lambda r: httpx.Response(200, content=b"<html>"))
        assert await client.get("k", "chat") is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_error_marks_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        client = _client(handler)
        assert await client.get("k", "analysis") is None
        assert client.available is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_is_miss(self):
        def handler(request):
            raise httpx.ReadTimeout("slow")

        client = _client(handler)
        assert await client.get("k", "analysis") is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unknown_type_never_sent(self):
        calls = []
        client = _client(lambda r: calls.append(r) or httpx.Response(200, json={}))
        assert await client.get("k", "images") is None
        assert calls == []
        await client.aclose()


class TestRemoteWrite:
    @pytest.mark.asyncio
    async def test_set_sends_ttl_in_ms(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "data": {"key": "k", "ttl": 60000}})

        client = _client(handler)
        await client.set("k", "suggestions", {"a": 1}, ttl_s=60)
        assert bodies == [{"key": "k", "type": "suggestions", "value": {"a": 1}, "ttl": 60000}]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_delete(self):
        methods = []

        def handler(request):
            methods.append((request.method, dict(request.url.params)))
            return httpx.Response(200, json={"success": True})

        client = _client(handler)
        await client.delete("k", "chat")
        assert methods == [("DELETE", {"key": "k", "type": "chat"})]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_clear_returns_count(self):
        def handler(request):
            assert request.url.path == "/api/cache/clear"
            assert json.loads(request.content) == {"type": "all"}
            return httpx.Response(200, json={"success": True, "deletedCount": 7, "type": "all"})

        client = _client(handler)
        assert await client.clear() == 7
        await client.aclose()

    @pytest.mark.asyncio
    async def test_clear_failure_returns_zero(self):
        client = _client(lambda r: httpx.Response(503))
        assert await client.clear("analysis") == 0
        await client.aclose()


class TestRemoteStatsAndHealth:
    @pytest.mark.asyncio
    async def test_stats(self):
        body = {"totalKeys": 3, "hitRate": 0.5, "totalHits": 2, "totalMisses": 2}
        client = _client(lambda r: httpx.Response(200, json=body))
        stats = await client.stats()
        assert stats.total_keys == 3
        assert stats.hit_rate == 0.5
        await client.aclose()

    @pytest.mark.asyncio
    async def test_health_url_and_interval(self, clock):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json={"status": "ok"})

        client = _client(handler, health_interval_s=60, clock=clock)
        assert await client.health() is True
        assert await client.health() is True
        assert paths == ["/api/health"]

        clock.advance(61)
        await client.health()
        assert len(paths) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unhealthy(self):
        client = _client(lambda r: httpx.Response(503))
        assert await client.health(force=True) is False
        assert client.available is False
        await client.aclose()
