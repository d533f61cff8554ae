# src/store/json_store.py — v1
"""JSON file-based state store (default STORE_BACKEND=json).

Stores each key as an individual JSON file under STORE_ROOT. Writes go to a
temporary file first and are then renamed, so a reader never sees a
half-written record.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from aigate.store.base_store import BaseStateStore

logger = logging.getLogger(__name__)


class JsonStateStore(BaseStateStore):
    """File-based store using one JSON file per key."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str) -> Any | None:
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read state entry %s: %s", key, e)
            return None

    async def set(self, key: str, value: Any) -> None:
        path = self._entry_path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(value), encoding="utf-8")
        os.replace(tmp, path)

    async def delete(self, key: str) -> None:
        path = self._entry_path(key)
        if path.exists():
            path.unlink()

    async def keys(self, prefix: str = "") -> list[str]:
        if not self._root.is_dir():
            return []
        found = (unquote(p.stem) for p in self._root.glob("*.json"))
        return sorted(k for k in found if k.startswith(prefix))

    def _entry_path(self, key: str) -> Path:
        """Return file path for a key (percent-encoded, flat layout)."""
        return self._root / f"{quote(key, safe='')}.json"
