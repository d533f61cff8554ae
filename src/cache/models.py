# src/cache/models.py — v1
"""Cache domain models: CacheEntry, CacheStats, RemoteCacheStats."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, model_validator

CacheType = Literal["analysis", "suggestions", "enhancement", "chat"]
CACHE_TYPES: tuple[str, ...] = ("analysis", "suggestions", "enhancement", "chat")


class CacheEntry(BaseModel):
    """Cached value with its lifetime (timestamps are epoch seconds)."""

    data: Any
    created_at: float
    expires_at: float
    hit_count: int = 0

    @model_validator(mode="after")
    def validate_lifetime(self) -> CacheEntry:
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")
        return self

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheStats(BaseModel):
    """Local cache counters."""

    size: int
    max_entries: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class RemoteCacheStats(BaseModel):
    """Body of ``GET /cache/stats``."""

    total_keys: int = Field(0, alias="totalKeys")
    hit_rate: float = Field(0.0, alias="hitRate")
    total_hits: int = Field(0, alias="totalHits")
    total_misses: int = Field(0, alias="totalMisses")

    model_config = {"populate_by_name": True}
