# src/fallback/classifier.py — v1
"""Offline project classifier: description + category -> smart defaults.

The declared category wins when it is a known project type. Otherwise the
keyword parser infers one from the description. The recommended bundle comes
from SMART_DEFAULTS and never overrides fields the caller has already set.
"""

from __future__ import annotations

import logging

from aigate.core.models import ProjectAnalysis
from aigate.core.selection import PROJECT_TYPES, ProjectSelection
from aigate.fallback.catalog import KEYWORD_MAPPINGS, SMART_DEFAULTS
from aigate.fallback.models import KeywordParseResult, SmartDefaults, SmartDefaultsResult
from aigate.fallback.safe import safe

logger = logging.getLogger(__name__)

KNOWN_TYPE_CONFIDENCE = 0.85
# Inferred values below this confidence are ignored.
MIN_PARSE_CONFIDENCE = 0.5


def get_smart_defaults(project_type: str | None) -> SmartDefaultsResult:
    """Look up the recommended bundle for a project type."""
    defaults = SMART_DEFAULTS.get(project_type or "")
    if defaults is None:
        return SmartDefaultsResult(
            applied=False,
            confidence=0.0,
            reasoning=f"No smart defaults available for project type: {project_type}",
        )
    return SmartDefaultsResult(
        applied=True,
        defaults=defaults.model_copy(deep=True),
        confidence=KNOWN_TYPE_CONFIDENCE,
        reasoning=_reasoning(project_type, defaults),
    )


def _reasoning(project_type: str, defaults: SmartDefaults) -> str:
    parts = []
    if defaults.design_style:
        parts.append(f"{defaults.design_style} design")
    if defaults.color_theme:
        parts.append(f"{defaults.color_theme} colors")
    if defaults.layout:
        parts.append(f"{defaults.layout} layout")
    return (
        f"Based on {project_type} projects, we recommend {' with '.join(parts)}. "
        "These selections work well together and are commonly used for this "
        "type of project."
    )


def apply_smart_defaults(
    project_type: str | None, selection: ProjectSelection | None = None,
) -> SmartDefaults:
    """Return only the defaults for fields ``selection`` leaves unset.

    Empty lists count as unset.
    """
    defaults = get_smart_defaults(project_type).defaults
    current = selection or ProjectSelection()
    return SmartDefaults(
        layout=None if current.layout else defaults.layout,
        design_style=None if current.design_style else defaults.design_style,
        color_theme=None if current.color_theme else defaults.color_theme,
        typography=None if current.typography else defaults.typography,
        functionality=[] if current.functionality else defaults.functionality,
        background=None if current.background else defaults.background,
        components=[] if current.components else defaults.components,
        animations=[] if current.animations else defaults.animations,
    )


def parse_project_description(description: str) -> KeywordParseResult:
    """Infer project type, design style and colour theme from keywords.

    Confidence is the top match count normalised to [0, 1]: three matches
    saturate project type, two saturate style and theme.
    """
    text = (description or "").lower()
    result = KeywordParseResult()

    for category, field, saturation in (
        ("project_types", "project_type", 3),
        ("design_styles", "design_style", 2),
        ("color_themes", "color_theme", 2),
    ):
        best: str | None = None
        best_count = 0
        for option, keywords in KEYWORD_MAPPINGS[category].items():
            matches = [k for k in keywords if k in text]
            result.detected_keywords.extend(matches)
            if len(matches) > best_count:
                best, best_count = option, len(matches)
        if best is not None:
            setattr(result, field, best)
            result.confidence[field] = min(best_count / saturation, 1.0)

    return result


def classify(
    description: str,
    category: str | None = None,
    selection: ProjectSelection | None = None,
) -> ProjectAnalysis:
    """Offline stand-in for the ``analysis`` operation."""
    project_type = category if category in PROJECT_TYPES else None
    confidence_cap = 1.0

    if project_type is None:
        parsed = parse_project_description(description)
        inferred_confidence = parsed.confidence.get("project_type", 0.0)
        if parsed.project_type and inferred_confidence > MIN_PARSE_CONFIDENCE:
            project_type = parsed.project_type
            confidence_cap = inferred_confidence
            logger.debug(
                "Inferred project type %s from keywords %s",
                project_type, parsed.detected_keywords,
            )

    lookup = get_smart_defaults(project_type or category)
    if not lookup.applied:
        return ProjectAnalysis(
            project_type=category or "Unknown",
            confidence=0.0,
            reasoning=lookup.reasoning,
        )

    bundle = lookup.defaults
    unset = apply_smart_defaults(project_type, selection)
    return ProjectAnalysis(
        project_type=project_type,
        design_style=bundle.design_style,
        color_theme=bundle.color_theme,
        layout=bundle.layout,
        defaults=unset.model_dump(exclude_defaults=True),
        suggested_components=list(bundle.components),
        suggested_animations=list(bundle.animations),
        confidence=min(lookup.confidence, confidence_cap),
        reasoning=lookup.reasoning,
    )


safe_get_smart_defaults = safe(
    get_smart_defaults,
    SmartDefaultsResult(
        applied=False,
        confidence=0.0,
        reasoning="Unable to load smart defaults at this time",
    ),
)
safe_parse_project_description = safe(parse_project_description, KeywordParseResult())
