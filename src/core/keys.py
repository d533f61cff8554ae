# src/core/keys.py — v1
"""Deterministic cache-key derivation.

Same payload gives the same key. The key is ``<operation>:<sha256 prefix>``
over a canonical JSON rendering of the fields that influence the answer.
Identity and per-call switches are deliberately excluded.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aigate.core.models import AIRequest

_KEY_DIGEST_CHARS = 32


def derive_cache_key(request: AIRequest) -> str:
    """Compute the cache key for a request."""
    payload = _canonical_payload(request)
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
    return f"{request.operation}:{digest[:_KEY_DIGEST_CHARS]}"


def _canonical_payload(request: AIRequest) -> dict[str, Any]:
    op = request.operation
    selection = (
        request.selection.model_dump(mode="json", exclude_none=True)
        if request.selection is not None
        else None
    )
    if op == "analysis":
        return {"text": normalize_text(request.text), "category": request.category}
    if op == "suggestions":
        return {"selection": selection}
    if op == "enhancement":
        return {"text": request.text.strip()}
    return {
        "text": normalize_text(request.text),
        "selection": selection,
        "history": [t.model_dump() for t in request.history],
    }


def normalize_text(text: str) -> str:
    """Lowercase and collapse whitespace."""
    return re.sub(r"\s+", " ", text.strip().lower())
