# tests/unit/cache/test_warming.py — v1
"""Tests for cache/warming.py."""

from __future__ import annotations

import pytest

from aigate.cache.local_cache import LocalCache
from aigate.cache.warming import COMMON_ANALYSES, warm_entries, warm_local_cache
from aigate.core.models import AIRequest, ProjectAnalysis


class TestWarming:
    def test_entries_use_request_keys(self):
        keys = [k for k, _ in warm_entries()]
        expected = AIRequest(operation="analysis", text=COMMON_ANALYSES[0][0]).cache_key
        assert keys[0] == expected
        assert len(set(keys)) == len(COMMON_ANALYSES)

    def test_entries_validate(self):
        for _, value in warm_entries():
            ProjectAnalysis.model_validate(value)

    @pytest.mark.asyncio
    async def test_warm_local_cache(self, clock):
        cache = LocalCache(clock=clock)
        assert await warm_local_cache(cache) == len(COMMON_ANALYSES)
        assert await warm_local_cache(cache) == 0

    @pytest.mark.asyncio
    async def test_case_insensitive_hit(self, clock):
        cache = LocalCache(clock=clock)
        await warm_local_cache(cache)
        key = AIRequest(operation="analysis", text="Analytics Dashboard").cache_key
        assert (await cache.get(key))["project_type"] == "Dashboard"
