# src/__init__.py — v1
"""aigate: AI request orchestration with caching, rate limiting and offline fallback."""

from aigate.version import __version__

__all__ = ["__version__"]
