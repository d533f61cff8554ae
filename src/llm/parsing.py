# src/llm/parsing.py — v1
"""Turn raw model output into validated operation payloads.

Every structural problem raises AIServiceError(INVALID_RESPONSE), which the
orchestrator treats as recoverable.
"""

from __future__ import annotations

import json
import re
from typing import Any

from aigate.core.errors import AIServiceError, ErrorKind
from aigate.core.models import (
    ChatReply,
    DesignSuggestion,
    ProjectAnalysis,
    PromptEnhancement,
    SuggestionsResult,
)
from aigate.core.selection import PROJECT_TYPES

# Confidence attached to free-form live answers that carry none of their own.
LIVE_CONFIDENCE = 0.9

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_SECTION = re.compile(r"^##\s+(.+)$")

_SUGGESTION_TYPES = ("improvement", "warning", "tip")
_SEVERITIES = ("low", "medium", "high")

# (section keyword, improvement text), checked in this order.
_IMPROVEMENTS: list[tuple[str, str]] = [
    ("accessibility", "Added comprehensive accessibility requirements (WCAG 2.1 AA)"),
    ("performance", "Added performance optimization guidelines"),
    ("seo", "Added SEO best practices"),
    ("security", "Added security considerations"),
    ("testing", "Added testing recommendations"),
    ("code quality", "Added code quality standards"),
]


def _invalid(message: str) -> AIServiceError:
    return AIServiceError(ErrorKind.INVALID_RESPONSE, message)


def extract_json(text: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating markdown fences and surrounding prose."""
    body = _FENCE.sub("", (text or "").strip())
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        start, end = body.find("{"), body.rfind("}")
        if start == -1 or end <= start:
            raise _invalid("Response does not contain a JSON object") from None
        try:
            data = json.loads(body[start : end + 1])
        except json.JSONDecodeError as e:
            raise _invalid(f"Failed to parse AI response: {e.msg}") from e
    if not isinstance(data, dict):
        raise _invalid("Response is not a valid object")
    return data


def _pick(data: dict[str, Any], camel: str, snake: str) -> Any:
    return data[camel] if camel in data else data.get(snake)


def _required_str(data: dict[str, Any], camel: str, snake: str) -> str:
    value = _pick(data, camel, snake)
    if not isinstance(value, str) or not value.strip():
        raise _invalid(f"Missing or invalid {camel}")
    return value


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def parse_analysis(text: str) -> ProjectAnalysis:
    data = extract_json(text)

    project_type = _pick(data, "projectType", "project_type")
    if project_type not in PROJECT_TYPES:
        raise _invalid(
            f"Invalid project type: {project_type}. "
            f"Must be one of: {', '.join(PROJECT_TYPES)}"
        )

    confidence = data.get("confidence")
    if (
        isinstance(confidence, bool)
        or not isinstance(confidence, (int, float))
        or not 0 <= confidence <= 1
    ):
        raise _invalid("Invalid confidence score. Must be a number between 0 and 1")

    return ProjectAnalysis(
        project_type=project_type,
        design_style=_required_str(data, "designStyle", "design_style"),
        color_theme=_required_str(data, "colorTheme", "color_theme"),
        suggested_components=_str_list(
            _pick(data, "suggestedComponents", "suggested_components")
        ),
        suggested_animations=_str_list(
            _pick(data, "suggestedAnimations", "suggested_animations")
        ),
        confidence=float(confidence),
        reasoning=_required_str(data, "reasoning", "reasoning"),
    )


def parse_suggestions(text: str, model: str) -> SuggestionsResult:
    data = extract_json(text)
    raw = data.get("suggestions")
    if not isinstance(raw, list):
        raise _invalid("Response must contain a suggestions array")

    suggestions: list[DesignSuggestion] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise _invalid(f"Suggestion at index {i} is not a valid object")
        if item.get("type") not in _SUGGESTION_TYPES:
            raise _invalid(
                f"Invalid suggestion type at index {i}. "
                f"Must be one of: {', '.join(_SUGGESTION_TYPES)}"
            )
        if item.get("severity") not in _SEVERITIES:
            raise _invalid(
                f"Invalid severity at index {i}. Must be one of: {', '.join(_SEVERITIES)}"
            )
        auto_fixable = _pick(item, "autoFixable", "auto_fixable")
        if not isinstance(auto_fixable, bool):
            raise _invalid(f"Invalid autoFixable value at index {i}. Must be boolean")
        suggestions.append(DesignSuggestion(
            type=item["type"],
            severity=item["severity"],
            message=_required_str(item, "message", "message"),
            reasoning=_required_str(item, "reasoning", "reasoning"),
            auto_fixable=auto_fixable,
        ))

    return SuggestionsResult(
        suggestions=suggestions,
        confidence=LIVE_CONFIDENCE,
        reasoning=f"Generated by {model}",
    )


def extract_sections(text: str) -> list[str]:
    """Titles of ``## `` headers, in order."""
    sections = []
    for line in text.split("\n"):
        match = _SECTION.match(line)
        if match:
            sections.append(match.group(1).strip())
    return sections


def parse_enhancement(text: str, original: str, model: str) -> PromptEnhancement:
    enhanced = (text or "").strip()
    if not enhanced:
        raise _invalid("Empty enhancement response")

    before = set(extract_sections(original))
    added = [s for s in extract_sections(enhanced) if s not in before]
    lowered = [s.lower() for s in added]
    improvements = [
        text_ for keyword, text_ in _IMPROVEMENTS if any(keyword in s for s in lowered)
    ]
    return PromptEnhancement(
        original_prompt=original,
        enhanced_prompt=enhanced,
        improvements=improvements,
        added_sections=added,
        confidence=LIVE_CONFIDENCE,
        reasoning=f"Generated by {model}",
    )


def parse_chat(text: str, model: str) -> ChatReply:
    message = (text or "").strip()
    if not message:
        raise _invalid("Empty chat response")
    return ChatReply(
        message=message, confidence=LIVE_CONFIDENCE, reasoning=f"Generated by {model}",
    )
