# src/store/memory_store.py — v1
"""In-process state store (STORE_BACKEND=memory).

Values are round-tripped through JSON so that callers never share mutable
objects with the store, matching the behaviour of the persistent backends.
"""

from __future__ import annotations

import json
from typing import Any

from aigate.store.base_store import BaseStateStore


class MemoryStateStore(BaseStateStore):
    """Dictionary-backed store, lost when the process exits."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def __len__(self) -> int:
        return len(self._data)
