# src/fallback/prompt_analyzer.py — v1
"""Keyword checks over a generated prompt plus an auto-fix rewriter.

analyze_prompt runs independent checks (responsive design, accessibility,
performance, SEO, security, error handling, testing, style/component
conflict). Each check contributes a strength, or a suggestion and maybe a
weakness. apply_auto_fixes is a pure function that writes the fixable
suggestions back into the text.
"""

from __future__ import annotations

import logging
import re

from aigate.core.models import PromptEnhancement
from aigate.core.selection import ProjectSelection
from aigate.fallback.models import PromptAnalysisResult, PromptSuggestion
from aigate.fallback.safe import safe

logger = logging.getLogger(__name__)

ANALYZER_CONFIDENCE = 0.7
NEUTRAL_SCORE = 75
STRENGTH_BONUS_CAP = 20

_SEVERITY_PENALTY = {"high": 15, "medium": 10, "low": 5}
_TECHNICAL_SECTION = re.compile(r"## \d+\. Technical Implementation", re.IGNORECASE)
_APPENDED_SECTION = "Technical Requirements"


def _mentions(text: str, *words: str) -> bool:
    return any(w in text for w in words)


def analyze_prompt(
    prompt: str, selection: ProjectSelection | None = None,
) -> PromptAnalysisResult:
    """Score a prompt and list what it is missing."""
    prompt = prompt or ""
    selection = selection or ProjectSelection()
    lower = prompt.lower()
    suggestions: list[PromptSuggestion] = []
    strengths: list[str] = []
    weaknesses: list[str] = []

    if not _mentions(lower, "responsive", "mobile"):
        suggestions.append(PromptSuggestion(
            type="warning",
            message="Consider adding responsive design requirements",
            fix='Add "Mobile-first responsive design" to technical requirements',
            auto_fixable=True,
            severity="high",
        ))
        weaknesses.append("Missing responsive design specification")
    else:
        strengths.append("Includes responsive design requirements")

    if not _mentions(lower, "accessibility", "wcag", "aria"):
        suggestions.append(PromptSuggestion(
            type="recommendation",
            message="Accessibility features not specified",
            fix="Add WCAG 2.1 AA compliance for better user experience",
            auto_fixable=True,
            severity="medium",
        ))
        weaknesses.append("No accessibility requirements")
    else:
        strengths.append("Includes accessibility considerations")

    if selection.design_style == "minimalist" and len(selection.components) > 10:
        suggestions.append(PromptSuggestion(
            type="tip",
            message="Minimalist designs work best with fewer components",
            fix="Consider reducing to 5-7 key components",
            auto_fixable=False,
            severity="low",
        ))
        weaknesses.append("Component count may conflict with minimalist style")

    if not _mentions(lower, "performance", "optimized", "fast"):
        suggestions.append(PromptSuggestion(
            type="tip",
            message="Consider adding performance requirements",
            fix='Add "Optimized loading and smooth interactions" to technical requirements',
            auto_fixable=True,
            severity="medium",
        ))
    else:
        strengths.append("Includes performance considerations")

    if selection.project_type == "Website" and not _mentions(lower, "seo", "search engine"):
        suggestions.append(PromptSuggestion(
            type="recommendation",
            message="SEO not mentioned for website project",
            fix='Add "SEO: Semantic HTML structure and meta tags"',
            auto_fixable=True,
            severity="medium",
        ))
    elif "seo" in lower:
        strengths.append("Includes SEO considerations")

    if "authentication" in lower and not _mentions(lower, "security", "secure"):
        suggestions.append(PromptSuggestion(
            type="warning",
            message="Authentication mentioned but security not addressed",
            fix='Add "Security: Secure authentication and data protection"',
            auto_fixable=True,
            severity="high",
        ))
        weaknesses.append("Security considerations missing for authentication")
    elif "security" in lower:
        strengths.append("Includes security considerations")

    if not _mentions(lower, "error", "validation"):
        suggestions.append(PromptSuggestion(
            type="tip",
            message="Error handling and validation not specified",
            fix='Add "Error Handling: User-friendly error messages and input validation"',
            auto_fixable=True,
            severity="low",
        ))
    else:
        strengths.append("Includes error handling")

    if not _mentions(lower, "test", "quality"):
        suggestions.append(PromptSuggestion(
            type="tip",
            message="Testing strategy not mentioned",
            fix='Add "Testing: Unit tests for critical functionality"',
            auto_fixable=True,
            severity="low",
        ))
    else:
        strengths.append("Includes testing considerations")

    score = calculate_prompt_score(strengths, weaknesses, suggestions)
    optimized = apply_auto_fixes(prompt, suggestions)
    return PromptAnalysisResult(
        score=score,
        suggestions=suggestions,
        optimized_prompt=optimized if optimized != prompt else None,
        strengths=strengths,
        weaknesses=weaknesses,
        confidence=ANALYZER_CONFIDENCE,
        reasoning=(
            f"Keyword analysis found {len(strengths)} strength(s) and "
            f"{len(suggestions)} suggestion(s)."
        ),
    )


def calculate_prompt_score(
    strengths: list[str],
    weaknesses: list[str],
    suggestions: list[PromptSuggestion],
) -> int:
    score = 100
    score -= 5 * len(weaknesses)
    score -= sum(_SEVERITY_PENALTY[s.severity] for s in suggestions)
    score += min(3 * len(strengths), STRENGTH_BONUS_CAP)
    # Floor only: unlike the compatibility score there is no ceiling, so the
    # strength bonus can push a flawless prompt past 100.
    return max(0, score)


def _fix_line(fix: str) -> str:
    head, _, tail = fix.partition(":")
    tail = tail.split(":")[0].strip()
    return f"- **{head}:** {tail or fix}"


def apply_auto_fixes(prompt: str, suggestions: list[PromptSuggestion]) -> str:
    """Insert fixable suggestions under the technical section, or append one."""
    fixes = [_fix_line(s.fix) for s in suggestions if s.auto_fixable and s.fix]
    if not fixes:
        return prompt
    block = "\n".join(fixes)

    if _TECHNICAL_SECTION.search(prompt):
        return _TECHNICAL_SECTION.sub(
            lambda m: f"{m.group(0)}\n{block}", prompt, count=1,
        )
    return f"{prompt}\n\n## {_APPENDED_SECTION}\n{block}"


def enhance_offline(
    prompt: str, selection: ProjectSelection | None = None,
) -> PromptEnhancement:
    """Offline stand-in for the ``enhancement`` operation."""
    analysis = safe_analyze_prompt(prompt, selection)
    enhanced = analysis.optimized_prompt or prompt
    added = (
        [_APPENDED_SECTION]
        if enhanced != prompt and not _TECHNICAL_SECTION.search(prompt)
        else []
    )
    return PromptEnhancement(
        original_prompt=prompt,
        enhanced_prompt=enhanced,
        improvements=[s.fix for s in analysis.suggestions if s.auto_fixable and s.fix],
        added_sections=added,
        score=analysis.score,
        confidence=analysis.confidence,
        reasoning=analysis.reasoning,
    )


safe_analyze_prompt = safe(
    analyze_prompt,
    PromptAnalysisResult(
        score=NEUTRAL_SCORE,
        confidence=0.0,
        reasoning="Prompt analysis unavailable",
    ),
)
