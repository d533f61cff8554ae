# src/cache/local_cache.py — v1
"""Bounded in-process cache with TTL and insertion-order eviction.

- Capacity is fixed. Inserting a new key when full evicts the entry that was
  inserted first (not the least recently used one). Overwriting an existing
  key keeps its original position.
- Expiry is checked on read; an expired entry is purged by the read that
  finds it. There is no background sweep.
- Entries are snapshotted to an injected state store after every mutation
  and restored by ``load()``. Store failures are logged and never raised.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Iterable

from aigate.cache.models import CacheEntry, CacheStats
from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)

_SNAPSHOT_KEY = "entries"


class LocalCache:
    """Process-local TTL cache."""

    def __init__(
        self,
        store: BaseStateStore | None = None,
        max_entries: int = 100,
        default_ttl_s: float = 3600.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        if default_ttl_s <= 0:
            raise ValueError("default_ttl_s must be > 0")
        self._store = store
        self._max_entries = max_entries
        self._default_ttl_s = default_ttl_s
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    async def load(self) -> int:
        """Restore the persisted snapshot, dropping expired entries.

        Returns:
            Number of entries restored.
        """
        if self._store is None:
            return 0
        try:
            snapshot = await self._store.get(_SNAPSHOT_KEY)
        except Exception as e:
            logger.warning("Local cache snapshot unreadable: %s", e)
            return 0
        if not isinstance(snapshot, dict):
            return 0

        now = self._clock()
        restored = 0
        with self._lock:
            for key, raw in snapshot.items():
                try:
                    entry = CacheEntry.model_validate(raw)
                except ValueError as e:
                    logger.debug("Skipping corrupt cache entry %s: %s", key, e)
                    continue
                if entry.is_expired(now) or key in self._entries:
                    continue
                if len(self._entries) >= self._max_entries:
                    break
                self._entries[key] = entry
                restored += 1
        logger.debug("Local cache restored %d entries", restored)
        return restored

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""
        now = self._clock()
        purged = False
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(now):
                del self._entries[key]
                entry = None
                purged = True
            if entry is None:
                self._misses += 1
                value = None
            else:
                entry.hit_count += 1
                self._hits += 1
                value = entry.data
        if purged:
            logger.debug("Local cache entry expired: %s", key)
            await self._persist()
        return value

    async def has(self, key: str) -> bool:
        """Whether a live entry exists (does not count as a hit or miss)."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if not entry.is_expired(now):
                return True
            del self._entries[key]
        await self._persist()
        return False

    async def set(self, key: str, value: Any, ttl_s: float | None = None) -> None:
        """Store a value for ``ttl_s`` seconds (default TTL when None).

        Writes that cannot be kept are logged and dropped: a TTL too small to
        move the expiry past now, or, with a store attached, a value that
        cannot be snapshotted as JSON.
        """
        ttl = self._default_ttl_s if ttl_s is None else ttl_s
        now = self._clock()
        if ttl <= 0 or now + ttl <= now:
            logger.warning("Ignoring cache write with a TTL too small to expire later: %s", key)
            return
        try:
            entry = CacheEntry(data=value, created_at=now, expires_at=now + ttl)
            if self._store is not None:
                entry.model_dump(mode="json")
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring cache write that cannot be stored: %s (%s)", key, e)
            return
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                self._evictions += 1
                logger.debug("Local cache evicted %s", oldest)
            self._entries[key] = entry
        await self._persist()

    async def delete(self, key: str) -> None:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            await self._persist()

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        await self._persist()

    async def warm(self, entries: Iterable[tuple[str, Any]], ttl_s: float | None = None) -> int:
        """Pre-populate keys that are not already cached.

        Returns:
            Number of entries written.
        """
        written = 0
        for key, value in entries:
            if await self.has(key):
                continue
            await self.set(key, value, ttl_s)
            written += 1
        if written:
            logger.info("Warmed local cache with %d entries", written)
        return written

    def keys(self) -> list[str]:
        """Keys in insertion order (may include not-yet-purged expired ones)."""
        with self._lock:
            return list(self._entries)

    def entry(self, key: str) -> CacheEntry | None:
        """Raw entry inspection (no expiry check, no hit counting)."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.model_copy() if entry is not None else None

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_entries=self._max_entries,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def __len__(self) -> int:
        return len(self._entries)

    async def _persist(self) -> None:
        if self._store is None:
            return
        with self._lock:
            entries = list(self._entries.items())
        snapshot: dict[str, Any] = {}
        for key, entry in entries:
            try:
                snapshot[key] = entry.model_dump(mode="json")
            except (TypeError, ValueError) as e:
                logger.debug("Leaving %s out of the cache snapshot: %s", key, e)
        try:
            await self._store.set(_SNAPSHOT_KEY, snapshot)
        except Exception as e:
            logger.warning("Local cache snapshot not saved: %s", e)
