# src/store/store_factory.py — v1
"""Factory for state store instantiation."""

from __future__ import annotations

from aigate.config.settings import Settings
from aigate.store.base_store import BaseStateStore


def create_state_store(settings: Settings | None = None) -> BaseStateStore:
    """Instantiate the configured state backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseStateStore implementation.
    """
    backend = "memory" if settings is None else settings.store_backend

    if backend == "memory":
        from aigate.store.memory_store import MemoryStateStore
        return MemoryStateStore()

    if backend == "json":
        from aigate.store.json_store import JsonStateStore
        return JsonStateStore(root=settings.store_root)

    if backend == "sqlite":
        from aigate.store.sqlite_store import SqliteStateStore
        db_path = settings.store_root.expanduser() / "aigate_state.db"
        return SqliteStateStore(db_path=db_path)

    raise ValueError(f"Unsupported store backend: {backend!r}")
