# src/cache/warming.py — v1
"""Pre-populate the local cache with analyses for very common descriptions.

Warm entries use the same key derivation as live requests, so a user typing
one of these descriptions is served from cache without spending quota.
Entries already present are never overwritten.
"""

from __future__ import annotations

import logging

from aigate.cache.local_cache import LocalCache
from aigate.core.models import AIRequest, ProjectAnalysis

logger = logging.getLogger(__name__)

COMMON_ANALYSES: list[tuple[str, ProjectAnalysis]] = [
    (
        "portfolio website to showcase my work",
        ProjectAnalysis(
            project_type="Portfolio", design_style="minimalist",
            color_theme="monochrome-modern",
            suggested_components=["carousel", "accordion"],
            suggested_animations=["fade-in"],
            confidence=0.9,
            reasoning="Portfolio sites benefit from clean, minimalist design that puts focus on the work itself",
        ),
    ),
    (
        "developer portfolio with projects",
        ProjectAnalysis(
            project_type="Portfolio", design_style="glassmorphism",
            color_theme="tech-neon",
            suggested_components=["tabs", "accordion"],
            suggested_animations=["blob-cursor"],
            confidence=0.87,
            reasoning="Developer portfolios can showcase technical skills with modern glassmorphism and tech-inspired colors",
        ),
    ),
    (
        "online store for selling products",
        ProjectAnalysis(
            project_type="E-commerce", design_style="modern",
            color_theme="sunset-warmth",
            suggested_components=["carousel", "tabs"],
            suggested_animations=["fade-in"],
            confidence=0.92,
            reasoning="E-commerce sites need modern, trustworthy design with warm, inviting colors",
        ),
    ),
    (
        "e-commerce website for fashion",
        ProjectAnalysis(
            project_type="E-commerce", design_style="minimalist",
            color_theme="monochrome-modern",
            suggested_components=["carousel"],
            suggested_animations=["slide-in"],
            confidence=0.89,
            reasoning="Fashion e-commerce benefits from minimalist design that highlights products",
        ),
    ),
    (
        "admin dashboard for data visualization",
        ProjectAnalysis(
            project_type="Dashboard", design_style="material-design",
            color_theme="tech-neon",
            suggested_components=["tabs", "accordion"],
            confidence=0.91,
            reasoning="Dashboards need clear, organized layouts with Material Design principles",
        ),
    ),
    (
        "analytics dashboard",
        ProjectAnalysis(
            project_type="Dashboard", design_style="modern",
            color_theme="ocean-breeze",
            suggested_components=["tabs"],
            confidence=0.88,
            reasoning="Analytics dashboards work well with modern design and calming colors for extended viewing",
        ),
    ),
]


def warm_entries() -> list[tuple[str, dict]]:
    """(cache key, serialized value) pairs for every common analysis."""
    return [
        (
            AIRequest(operation="analysis", text=description).cache_key,
            analysis.model_dump(mode="json"),
        )
        for description, analysis in COMMON_ANALYSES
    ]


async def warm_local_cache(cache: LocalCache, ttl_s: float | None = None) -> int:
    """Load the common analyses into ``cache``. Returns the number written."""
    written = await cache.warm(warm_entries(), ttl_s=ttl_s)
    logger.debug("Cache warming wrote %d of %d entries", written, len(COMMON_ANALYSES))
    return written
