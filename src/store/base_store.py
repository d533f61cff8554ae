# src/store/base_store.py — v1
"""Abstract persisted key-value store.

One interface for every piece of state that must survive between calls:
local cache snapshots, rate-limit windows, circuit breaker state and premium
tiers. Values are JSON-compatible (dict, list, str, number, bool, None).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseStateStore(ABC):
    """Unified interface for state storage backends."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the stored value or None."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value (upsert)."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    @abstractmethod
    async def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with prefix."""

    def namespace(self, name: str) -> StoreNamespace:
        """Return a view of this store confined to ``name``."""
        return StoreNamespace(self, name)

    def close(self) -> None:
        """Release resources held by the backend."""


class StoreNamespace(BaseStateStore):
    """Prefixing view over another store."""

    SEPARATOR = "/"

    def __init__(self, inner: BaseStateStore, name: str) -> None:
        if not name:
            raise ValueError("namespace name must not be empty")
        self._inner = inner
        self._prefix = f"{name}{self.SEPARATOR}"

    @property
    def prefix(self) -> str:
        return self._prefix

    async def get(self, key: str) -> Any | None:
        return await self._inner.get(self._prefix + key)

    async def set(self, key: str, value: Any) -> None:
        await self._inner.set(self._prefix + key, value)

    async def delete(self, key: str) -> None:
        await self._inner.delete(self._prefix + key)

    async def keys(self, prefix: str = "") -> list[str]:
        full = await self._inner.keys(self._prefix + prefix)
        return [k[len(self._prefix):] for k in full]
