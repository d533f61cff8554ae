# src/llm/retry.py — v1
"""Retry policy with exponential backoff for live AI calls.

Network errors, upstream 429 and 5xx are retried (1s, 2s, 4s by default).
Timeouts, credential problems and other 4xx fail immediately. Whatever
escapes is an AIServiceError.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from aigate.core.errors import AIServiceError, is_retryable, to_service_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration for live calls."""

    max_retries: int = 3
    base_delay_s: float = 1.0
    backoff_factor: float = 2.0
    jitter: bool = False


DEFAULT_POLICY = RetryPolicy()


def compute_delay(policy: RetryPolicy, attempt: int) -> float:
    """Compute delay for a given attempt (0-based)."""
    delay = policy.base_delay_s * (policy.backoff_factor ** attempt)
    if policy.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    operation: str = "unknown",
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    on_retry: Callable[[int, AIServiceError], None] | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Args:
        on_retry: Called with (attempt, error) before each backoff sleep.

    Raises:
        AIServiceError: When the error is not retryable or retries run out.
    """
    policy = policy or DEFAULT_POLICY
    attempts = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            error = to_service_error(e)
            attempts += 1
            if not is_retryable(e) or attempts > policy.max_retries:
                if attempts > 1:
                    logger.warning(
                        "Operation '%s' failed after %d attempts: %s",
                        operation, attempts, error.message,
                    )
                if error is e:
                    raise
                raise error from e

            delay = compute_delay(policy, attempts - 1)
            logger.warning(
                "Operation '%s' %s (attempt %d/%d), retrying in %.1fs",
                operation, error.kind.value, attempts, policy.max_retries, delay,
            )
            if on_retry is not None:
                on_retry(attempts, error)
            await sleep(delay)
