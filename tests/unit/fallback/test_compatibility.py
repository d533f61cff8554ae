# tests/unit/fallback/test_compatibility.py — v1
"""Tests for fallback/compatibility.py — rule checks, score and harmony."""

from __future__ import annotations

import pytest

from aigate.core.selection import (
    ColorThemeRef,
    ComponentRef,
    FunctionalityRef,
    ProjectSelection,
)
from aigate.fallback.compatibility import (
    calculate_score,
    check_compatibility,
    harmony_level,
    safe_check_compatibility,
    to_suggestions,
)
from aigate.fallback.models import CompatibilityIssue


def _issue(severity: str) -> CompatibilityIssue:
    return CompatibilityIssue(severity=severity, message="m", affected=["x"])


class TestScore:
    def test_no_findings(self):
        assert calculate_score([], []) == 100

    def test_penalties(self):
        assert calculate_score([_issue("high")], []) == 80
        assert calculate_score([_issue("medium")], []) == 85
        assert calculate_score([_issue("low")], []) == 90
        assert calculate_score([], [_issue("medium")]) == 90
        assert calculate_score([], [_issue("low")]) == 95

    def test_clamped_at_zero(self):
        assert calculate_score([_issue("high")] * 10, []) == 0

    def test_monotonic_in_findings(self):
        issues: list[CompatibilityIssue] = []
        previous = calculate_score(issues, [])
        for severity in ("low", "high", "medium", "high", "low", "high"):
            issues.append(_issue(severity))
            current = calculate_score(issues, [])
            assert current <= previous
            previous = current

    @pytest.mark.parametrize(
        "score, band",
        [(100, "excellent"), (90, "excellent"), (89, "good"), (75, "good"),
         (74, "fair"), (60, "fair"), (59, "poor"), (0, "poor")],
    )
    def test_bands(self, score, band):
        assert harmony_level(score) == band


class TestCheckCompatibility:
    def test_harmonious_selection(self, harmonious_selection):
        result = check_compatibility(harmonious_selection)
        assert result.score == 100
        assert result.harmony == "excellent"
        assert result.issues == []
        assert result.warnings == []
        assert result.reasoning

    def test_conflicting_selection(self, conflicting_selection):
        result = check_compatibility(conflicting_selection)
        messages = [f.message for f in result.issues + result.warnings]
        assert "Authentication functionality selected but no login components" in messages
        assert "Minimalist designs typically use 2-3 colors for maximum impact" in messages
        assert "Vibrant backgrounds may clash with monochrome color themes" in messages
        assert "Many animations selected may impact performance" in messages
        assert result.score == 55
        assert result.harmony == "poor"
        assert result.confidence == 0.75

    def test_pending_below_two_selections(self):
        # Deliberate exception to "no issues scores 100": a single choice
        # has nothing to be compatible with, so it stays pending at 0.
        result = check_compatibility(ProjectSelection(design_style="minimalist"))
        assert result.harmony == "pending"
        assert result.score == 0
        assert result.issues == [] and result.warnings == []

    def test_none_selection(self):
        assert check_compatibility(None).harmony == "pending"

    def test_functionality_without_components(self):
        selection = ProjectSelection(
            design_style="modern",
            functionality=[FunctionalityRef(id="shop", features=["Shopping cart"])],
        )
        result = check_compatibility(selection)
        assert result.issues[0].message == (
            "E-commerce functionality selected but no shopping components"
        )

    def test_login_component_satisfies_auth(self):
        selection = ProjectSelection(
            design_style="modern",
            functionality=[FunctionalityRef(id="auth", features=["Login"])],
            components=[ComponentRef(id="login-form", title="Login form")],
        )
        assert check_compatibility(selection).issues == []

    def test_glassmorphism_monochrome(self):
        selection = ProjectSelection(
            design_style="glassmorphism", color_theme=ColorThemeRef(id="monochrome-modern"),
        )
        result = check_compatibility(selection)
        assert result.warnings[0].severity == "low"
        assert result.score == 95

    def test_brutalism_needs_components(self):
        selection = ProjectSelection(
            design_style="digital-brutalism",
            color_theme=ColorThemeRef(id="brutal-contrast"),
            components=[ComponentRef(id="card")],
        )
        result = check_compatibility(selection)
        assert [w.message for w in result.warnings] == [
            "Brutalist designs benefit from bold, prominent components",
        ]


class TestSafeAndSuggestions:
    def test_safe_default_on_malformed(self):
        result = safe_check_compatibility("not a selection")
        assert result.score == 80
        assert result.harmony == "good"
        assert result.confidence == 0.0

    def test_to_suggestions(self, conflicting_selection):
        suggestions = to_suggestions(check_compatibility(conflicting_selection))
        types = [s.type for s in suggestions.suggestions]
        assert types[0] == "warning"
        assert "improvement" in types
        assert "tip" in types
        assert suggestions.score == 55
        assert all(s.reasoning for s in suggestions.suggestions)
