# tests/unit/ratelimit/test_tiers.py — v1
"""Tests for ratelimit/tiers.py — premium grants and static identities."""

from __future__ import annotations

import pytest

from aigate.ratelimit.tiers import TierRegistry
from aigate.store.memory_store import MemoryStateStore


class TestTierRegistry:
    @pytest.mark.asyncio
    async def test_unknown_is_free(self, clock):
        registry = TierRegistry(store=MemoryStateStore(), clock=clock)
        assert await registry.is_privileged("alice") is False
        assert (await registry.get("alice")).tier == "free"

    @pytest.mark.asyncio
    async def test_static_identity(self):
        registry = TierRegistry(static_identities=["ops"])
        assert await registry.is_privileged("ops") is True
        assert (await registry.get("ops")).tier == "premium"

    @pytest.mark.asyncio
    async def test_grant_without_expiry(self, clock):
        registry = TierRegistry(store=MemoryStateStore(), clock=clock)
        await registry.grant("alice")
        assert await registry.is_privileged("alice") is True

    @pytest.mark.asyncio
    async def test_grant_expires(self, clock):
        store = MemoryStateStore()
        registry = TierRegistry(store=store, clock=clock)
        await registry.grant("alice", expires_at=clock.now + 60)
        assert await registry.is_privileged("alice") is True
        clock.advance(61)
        assert await registry.is_privileged("alice") is False
        assert (await store.get("alice"))["isPremium"] is False

    @pytest.mark.asyncio
    async def test_revoke(self, clock):
        registry = TierRegistry(store=MemoryStateStore(), clock=clock)
        await registry.grant("alice")
        await registry.revoke("alice")
        assert await registry.is_privileged("alice") is False

    @pytest.mark.asyncio
    async def test_persisted_wire_names(self, clock):
        store = MemoryStateStore()
        registry = TierRegistry(store=store, clock=clock)
        await registry.grant("alice", expires_at=clock.now + 10)
        raw = await store.get("alice")
        assert raw["isPremium"] is True
        assert raw["activatedAt"] == int(clock.now * 1000)
        assert raw["expiresAt"] == int((clock.now + 10) * 1000)

    @pytest.mark.asyncio
    async def test_no_store(self):
        registry = TierRegistry()
        await registry.grant("alice")
        assert await registry.is_privileged("alice") is False
