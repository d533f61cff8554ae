# src/fallback/chat_reply.py — v1
"""Canned assistant reply used when the AI service cannot answer a chat turn.

The question is routed by keyword (design, technical, comparison,
recommendation, project-specific, general) and answered from the
selection context plus the compatibility and smart-default tables.
"""

from __future__ import annotations

from enum import Enum

from aigate.core.models import ChatReply
from aigate.core.selection import ProjectSelection
from aigate.fallback.catalog import (
    compatible_animations,
    compatible_backgrounds,
    compatible_themes,
)
from aigate.fallback.classifier import safe_get_smart_defaults
from aigate.fallback.compatibility import safe_check_compatibility

OFFLINE_CONFIDENCE = 0.3

_OFFLINE_NOTE = (
    "The AI assistant is temporarily unavailable, so this is an offline answer."
)


class QuestionType(str, Enum):
    DESIGN = "design"
    TECHNICAL = "technical"
    GENERAL = "general"
    PROJECT_SPECIFIC = "project"
    COMPARISON = "comparison"
    RECOMMENDATION = "recommendation"


_DESIGN_WORDS = (
    "color", "colors", "theme", "style", "design", "look", "aesthetic",
    "visual", "layout", "typography", "font", "background", "animation",
    "component", "ui", "ux", "interface", "appearance", "beautiful",
    "modern", "minimalist", "glassmorphism",
)
_PERSONAL_WORDS = ("my", "this", "current", "chosen", "selected")
_TECHNICAL_WORDS = (
    "code", "implement", "build", "create", "develop", "install", "setup",
    "configure", "integrate", "api", "library", "framework", "react",
    "typescript", "javascript", "css", "html", "npm", "package", "function",
    "class", "hook", "state", "props",
)
_COMPARISON_WORDS = (
    " vs ", "versus", " or ", "better", "difference", "compare", "which",
    "should i choose",
)
_RECOMMENDATION_WORDS = (
    "recommend", "suggest", "should i", "what do you think", "advice", "best",
    "good choice", "right choice", "help me choose",
)
_PROJECT_WORDS = (
    "my project", "my design", "my selection", "this project", "what i chose",
    "what i selected", "my choices",
)


def detect_question_type(message: str) -> QuestionType:
    lower = f" {message.lower()} "
    if any(w in lower for w in _DESIGN_WORDS):
        if any(f" {w} " in lower for w in _PERSONAL_WORDS):
            return QuestionType.PROJECT_SPECIFIC
        return QuestionType.DESIGN
    if any(w in lower for w in _TECHNICAL_WORDS):
        return QuestionType.TECHNICAL
    if any(w in lower for w in _COMPARISON_WORDS):
        return QuestionType.COMPARISON
    if any(w in lower for w in _RECOMMENDATION_WORDS):
        return QuestionType.RECOMMENDATION
    if any(w in lower for w in _PROJECT_WORDS):
        return QuestionType.PROJECT_SPECIFIC
    return QuestionType.GENERAL


def offline_chat_reply(message: str, selection: ProjectSelection | None = None) -> ChatReply:
    """Best-effort answer built from local knowledge only."""
    selection = selection or ProjectSelection()
    kind = detect_question_type(message or "")
    body: list[str] = []

    if kind in (QuestionType.PROJECT_SPECIFIC, QuestionType.RECOMMENDATION, QuestionType.COMPARISON):
        lines = selection.summary_lines()
        if lines:
            body.append("Here is what you have selected so far:")
            body.extend(f"- {line}" for line in lines)
            verdict = safe_check_compatibility(selection)
            if verdict.harmony != "pending":
                body.append(
                    f"Compatibility score: {verdict.score}/100 ({verdict.harmony})."
                )
                body.extend(f"- {w.message}" for w in verdict.issues + verdict.warnings)
        else:
            body.append("No selections made yet.")

    if kind in (QuestionType.DESIGN, QuestionType.RECOMMENDATION):
        if selection.design_style:
            themes = compatible_themes(selection.design_style)
            if themes:
                body.append(
                    f"Colour themes that suit {selection.design_style}: "
                    + ", ".join(themes) + "."
                )
            animations = compatible_animations(selection.design_style)
            if animations:
                body.append(
                    f"Animations that suit {selection.design_style}: "
                    + ", ".join(animations) + "."
                )
        theme_id = selection.color_theme.id if selection.color_theme else None
        backgrounds = compatible_backgrounds(theme_id)
        if backgrounds:
            body.append(f"Backgrounds that pair with {theme_id}: " + ", ".join(backgrounds) + ".")
        defaults = safe_get_smart_defaults(selection.project_type)
        if defaults.applied:
            body.append(defaults.reasoning)

    if kind == QuestionType.TECHNICAL:
        body.append(
            "For implementation details, the generated prompt lists the "
            "components and technical requirements to build from."
        )

    if not body:
        body.append("Please try your question again in a few minutes.")

    return ChatReply(
        message="\n".join([_OFFLINE_NOTE, *body]),
        confidence=OFFLINE_CONFIDENCE,
        reasoning=f"Offline reply for a {kind.value} question",
    )
