# src/core/errors.py — v1
"""Error taxonomy for the AI request path.

Every caller-visible failure is one of six ErrorKind values. Each kind carries
a default ``recoverable`` flag: recoverable kinds may be served by a fallback
engine, non-recoverable ones are always surfaced verbatim. The one exception
is input validation: the orchestrator reports rejected input as API_ERROR
with ``recoverable=False``, so callers must read ``Failure.recoverable``
rather than ``Failure.error.recoverable``.

AIServiceError is the only exception that crosses the AI backend boundary.
The orchestrator converts it into a Failure result.
"""

from __future__ import annotations

import asyncio
from enum import Enum


class ErrorKind(str, Enum):
    """Typed failure categories.

    ``recoverable`` describes failures of the AI call itself. Validation
    failures reuse API_ERROR but are never recoverable.
    """

    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    RATE_LIMIT = "RATE_LIMIT"
    INVALID_API_KEY = "INVALID_API_KEY"

    @property
    def recoverable(self) -> bool:
        """Whether a fallback result may stand in for this failure."""
        return self not in _NON_RECOVERABLE


_NON_RECOVERABLE = frozenset({ErrorKind.RATE_LIMIT, ErrorKind.INVALID_API_KEY})

# Caller-facing messages per kind (used when the cause carries no better text).
DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.API_ERROR: "The AI service returned an error.",
    ErrorKind.NETWORK_ERROR: "Network error. Please check your internet connection.",
    ErrorKind.TIMEOUT_ERROR: "Request timed out. The AI service took too long to respond.",
    ErrorKind.INVALID_RESPONSE: "Failed to parse AI response. The response format was invalid.",
    ErrorKind.RATE_LIMIT: "AI limit reached.",
    ErrorKind.INVALID_API_KEY: "Invalid or missing API key",
}


class AIServiceError(Exception):
    """Failure raised by the AI backend boundary."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        retryable: bool = False,
    ) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.retryable = retryable
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        return self.kind.recoverable


class BackendUnavailableError(AIServiceError):
    """No AI client is configured (e.g. missing credential).

    Treated as a recoverable API_ERROR: the request degrades to fallback
    instead of being rejected.
    """

    def __init__(self, reason: str = "no API key configured") -> None:
        super().__init__(
            ErrorKind.API_ERROR, f"AI service not available ({reason})"
        )


_NETWORK_MARKERS = (
    "network", "fetch", "econnrefused", "enotfound", "etimedout", "connection",
)
_SERVER_MARKERS = (
    "500", "502", "503", "504", "internal server error", "bad gateway",
    "service unavailable", "gateway timeout",
)
_CLIENT_MARKERS = (
    "api key", "invalid", "bad request", "unauthorized", "forbidden",
    "timeout", "400", "401", "403", "404",
)


def _status_code(error: BaseException) -> int | None:
    """Best-effort HTTP status extraction from SDK exceptions."""
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def classify_exception(error: BaseException) -> ErrorKind:
    """Map an arbitrary exception to an ErrorKind."""
    if isinstance(error, AIServiceError):
        return error.kind
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return ErrorKind.TIMEOUT_ERROR

    msg = str(error)
    lower = msg.lower()
    name = type(error).__name__.lower()
    status = _status_code(error)

    if "timeout" in lower or "timeout" in name:
        return ErrorKind.TIMEOUT_ERROR
    if status in (401, 403) or "API key" in msg or "API_KEY" in msg:
        return ErrorKind.INVALID_API_KEY
    if (
        isinstance(error, (ConnectionError, OSError))
        or any(m in lower for m in ("network", "fetch", "econnrefused"))
        or "connect" in name
    ):
        return ErrorKind.NETWORK_ERROR
    if "json" in lower or "parse" in lower or "decode" in name:
        return ErrorKind.INVALID_RESPONSE
    return ErrorKind.API_ERROR


def is_retryable(error: BaseException) -> bool:
    """Whether a failed live call is worth another attempt.

    Network errors, upstream 429 and 5xx are retried. Timeouts, credential
    problems and other 4xx are not.
    """
    if isinstance(error, AIServiceError):
        return error.retryable
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return False

    status = _status_code(error)
    if status is not None:
        return status == 429 or 500 <= status < 600

    lower = str(error).lower()
    if isinstance(error, ConnectionError) or any(m in lower for m in _NETWORK_MARKERS):
        return True
    if "429" in lower or "rate limit" in lower:
        return True
    if any(m in lower for m in _SERVER_MARKERS):
        return True
    if any(m in lower for m in _CLIENT_MARKERS):
        return False
    return False


def to_service_error(error: BaseException) -> AIServiceError:
    """Wrap any exception into an AIServiceError (idempotent)."""
    if isinstance(error, AIServiceError):
        return error
    kind = classify_exception(error)
    if kind == ErrorKind.API_ERROR:
        message = str(error) or DEFAULT_MESSAGES[kind]
    else:
        message = DEFAULT_MESSAGES[kind]
    return AIServiceError(kind, message, retryable=is_retryable(error))
