# src/fallback/compatibility.py — v1
"""Rule-based compatibility scorer for a design selection.

Each rule group inspects one pair of attributes and yields at most one
finding. Issues are blocking problems, warnings are stylistic concerns.

Score starts at 100:
    issue   high -20 / medium -15 / low -10
    warning medium -10 / low -5
clamped to [0, 100]. Harmony bands: excellent >= 90, good >= 75, fair >= 60.
"""

from __future__ import annotations

import logging

from aigate.core.models import DesignSuggestion, SuggestionsResult
from aigate.core.selection import (
    ColorThemeRef,
    ComponentRef,
    FunctionalityRef,
    ProjectSelection,
)
from aigate.fallback.models import CompatibilityIssue, CompatibilityResult, Harmony
from aigate.fallback.safe import safe

logger = logging.getLogger(__name__)

RULES_CONFIDENCE = 0.75
MAX_ANIMATIONS = 5

_ISSUE_PENALTY = {"high": 20, "medium": 15, "low": 10}
_WARNING_PENALTY = {"high": 10, "medium": 10, "low": 5}


def calculate_score(
    issues: list[CompatibilityIssue], warnings: list[CompatibilityIssue],
) -> int:
    score = 100
    score -= sum(_ISSUE_PENALTY[i.severity] for i in issues)
    score -= sum(_WARNING_PENALTY[w.severity] for w in warnings)
    return max(0, min(100, score))


def harmony_level(score: int) -> Harmony:
    if score >= 90:
        return "excellent"
    if score >= 75:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"


def _count_selections(selection: ProjectSelection) -> int:
    return sum(
        bool(v)
        for v in (
            selection.design_style,
            selection.color_theme,
            selection.components,
            selection.functionality,
            selection.background,
            selection.animations,
        )
    )


def check_compatibility(selection: ProjectSelection | None) -> CompatibilityResult:
    """Score how well the selected options work together.

    Fewer than two selections yields the ``pending`` state with score 0. This
    is the one issue-free result that does not score 100: there is nothing to
    judge yet.
    """
    selection = selection or ProjectSelection()
    if _count_selections(selection) < 2:
        return CompatibilityResult(
            score=0,
            harmony="pending",
            confidence=0.0,
            reasoning="Select at least two design options to check compatibility",
        )

    issues: list[CompatibilityIssue] = []
    warnings: list[CompatibilityIssue] = []

    style = selection.design_style
    theme = selection.color_theme

    if style and theme:
        _append(warnings, _style_color(style, theme))
    if style and selection.components:
        _append(warnings, _component_count(style, selection.components))
    if selection.functionality:
        _append(issues, _functionality_components(selection.functionality, selection.components))
    if selection.background and theme:
        _append(warnings, _background_color(selection.background, theme))
    if len(selection.animations) > MAX_ANIMATIONS:
        warnings.append(CompatibilityIssue(
            severity="low",
            message="Many animations selected may impact performance",
            affected=["animations"],
            suggestion="Consider limiting to 3-5 key animations for better performance",
        ))

    score = calculate_score(issues, warnings)
    harmony = harmony_level(score)
    found = len(issues) + len(warnings)
    reasoning = (
        f"Rule-based check found {len(issues)} issue(s) and {len(warnings)} "
        f"warning(s); overall harmony is {harmony}."
        if found
        else "All selected options work well together."
    )
    logger.debug("Compatibility score %d (%s)", score, harmony)
    return CompatibilityResult(
        score=score,
        issues=issues,
        warnings=warnings,
        harmony=harmony,
        confidence=RULES_CONFIDENCE,
        reasoning=reasoning,
    )


def _append(bucket: list[CompatibilityIssue], finding: CompatibilityIssue | None) -> None:
    if finding is not None:
        bucket.append(finding)


def _style_color(style: str, theme: ColorThemeRef) -> CompatibilityIssue | None:
    affected = ["design-style", "color-theme"]
    if style == "minimalist" and len(theme.colors) > 3:
        return CompatibilityIssue(
            severity="medium",
            message="Minimalist designs typically use 2-3 colors for maximum impact",
            affected=affected,
            suggestion="Consider a simpler color palette like Monochrome Modern or Professional Blue",
            auto_fixable=True,
        )
    if style == "digital-brutalism" and "contrast" not in theme.id and "bold" not in theme.id:
        return CompatibilityIssue(
            severity="low",
            message="Brutalist designs benefit from high contrast colors",
            affected=affected,
            suggestion="Consider using a high-contrast or bold color theme for stronger visual impact",
        )
    if style == "glassmorphism" and "monochrome" in theme.id:
        return CompatibilityIssue(
            severity="low",
            message="Glassmorphism effects are more visible with colorful backgrounds",
            affected=affected,
            suggestion="Consider a more vibrant color theme like Tech Neon or Ocean Breeze",
        )
    return None


def _component_count(style: str, components: list[ComponentRef]) -> CompatibilityIssue | None:
    affected = ["design-style", "components"]
    if style == "minimalist" and len(components) > 7:
        return CompatibilityIssue(
            severity="medium",
            message="Minimalist designs work best with fewer components",
            affected=affected,
            suggestion="Consider reducing to 5-7 key components to maintain clean aesthetic",
        )
    if style == "digital-brutalism" and len(components) < 3:
        return CompatibilityIssue(
            severity="low",
            message="Brutalist designs benefit from bold, prominent components",
            affected=affected,
            suggestion="Add more visual components for stronger impact",
        )
    return None


def _has_feature(functionality: list[FunctionalityRef], needles: tuple[str, ...]) -> bool:
    return any(
        any(n in feature.lower() for n in needles)
        for f in functionality
        for feature in f.features
    )


def _has_component(
    components: list[ComponentRef], id_needles: tuple[str, ...], title_needles: tuple[str, ...],
) -> bool:
    return any(
        any(n in c.id for n in id_needles) or any(n in c.title.lower() for n in title_needles)
        for c in components
    )


def _functionality_components(
    functionality: list[FunctionalityRef], components: list[ComponentRef],
) -> CompatibilityIssue | None:
    affected = ["functionality", "components"]
    if _has_feature(functionality, ("authentication", "login", "user management")) and not _has_component(
        components, ("login", "auth", "sign-in"), ("login", "auth"),
    ):
        return CompatibilityIssue(
            severity="high",
            message="Authentication functionality selected but no login components",
            affected=affected,
            suggestion="Add login form, authentication modal, or sign-in components",
            auto_fixable=True,
        )
    if _has_feature(functionality, ("shopping", "cart", "checkout", "payment")) and not _has_component(
        components, ("cart", "product", "checkout"), ("cart", "product"),
    ):
        return CompatibilityIssue(
            severity="high",
            message="E-commerce functionality selected but no shopping components",
            affected=affected,
            suggestion="Add shopping cart, product card, or checkout components",
            auto_fixable=True,
        )
    return None


def _background_color(background: str, theme: ColorThemeRef) -> CompatibilityIssue | None:
    affected = ["background", "color-theme"]
    if ("neon" in background or "vibrant" in background) and "monochrome" in theme.id:
        return CompatibilityIssue(
            severity="medium",
            message="Vibrant backgrounds may clash with monochrome color themes",
            affected=affected,
            suggestion="Consider a gradient or subtle background, or switch to a more colorful theme",
        )
    if ("subtle" in background or "minimal" in background) and (
        "neon" in theme.id or "vibrant" in theme.id
    ):
        return CompatibilityIssue(
            severity="low",
            message="Subtle backgrounds may not showcase vibrant color themes effectively",
            affected=affected,
            suggestion="Consider a more dynamic background to complement your bold colors",
        )
    return None


def to_suggestions(result: CompatibilityResult) -> SuggestionsResult:
    """Project a scorer result onto the ``suggestions`` operation payload."""
    suggestions = [
        DesignSuggestion(
            type="warning",
            severity=i.severity,
            message=i.message,
            reasoning=i.suggestion or i.message,
            auto_fixable=i.auto_fixable,
            affected=list(i.affected),
        )
        for i in result.issues
    ] + [
        DesignSuggestion(
            type="improvement" if w.auto_fixable else "tip",
            severity=w.severity,
            message=w.message,
            reasoning=w.suggestion or w.message,
            auto_fixable=w.auto_fixable,
            affected=list(w.affected),
        )
        for w in result.warnings
    ]
    return SuggestionsResult(
        suggestions=suggestions,
        score=result.score,
        harmony=result.harmony,
        confidence=result.confidence,
        reasoning=result.reasoning,
    )


# Neutral "good" verdict when a rule blows up.
safe_check_compatibility = safe(
    check_compatibility,
    CompatibilityResult(
        score=80,
        harmony="good",
        confidence=0.0,
        reasoning="Compatibility check unavailable, assuming a reasonable selection",
    ),
)
