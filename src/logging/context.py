# src/logging/context.py — v1
"""Per-request logging context: request_id, operation, identity, state.

Values live in context variables, so concurrent ``resolve`` calls on one
event loop each see their own context.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_identity: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "identity", default=None
)
_state: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "state", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    request_id: str | None = None
    operation: str | None = None
    identity: str | None = None
    state: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        request_id=_request_id.get(),
        operation=_operation.get(),
        identity=_identity.get(),
        state=_state.get(),
    )


def set_request_context(request_id: str, operation: str, identity: str | None = None) -> None:
    """Set request-level context (once per resolve)."""
    _request_id.set(request_id)
    _operation.set(operation)
    _identity.set(identity)
    _state.set(None)


def set_state(state: str) -> None:
    """Record the orchestrator state the request is currently in."""
    _state.set(state)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _operation.set(None)
    _identity.set(None)
    _state.set(None)
