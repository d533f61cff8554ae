# src/fallback/safe.py — v1
"""Generic never-raise adapter shared by all fallback engines."""

from __future__ import annotations

import copy
import functools
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def safe(
    fn: Callable[..., T],
    default: T | None = None,
    *,
    default_factory: Callable[..., T] | None = None,
) -> Callable[..., T]:
    """Wrap ``fn`` so that any exception is logged and a neutral value returned.

    ``default`` is deep-copied for every failing call. When the neutral value
    depends on the input, pass ``default_factory`` instead: it is called with
    the same arguments as ``fn``.
    """
    if default is None and default_factory is None:
        raise ValueError("safe() needs a default or a default_factory")
    name = getattr(fn, "__qualname__", repr(fn))

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except Exception:
            logger.exception("%s failed, returning neutral default", name)
            if default_factory is not None:
                return default_factory(*args, **kwargs)
            return copy.deepcopy(default)

    return wrapper
