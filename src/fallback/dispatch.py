# src/fallback/dispatch.py — v1
"""Route a request to its offline engine. Never raises."""

from __future__ import annotations

import logging

from aigate.core.models import (
    AIRequest,
    ChatReply,
    OperationValue,
    ProjectAnalysis,
    PromptEnhancement,
)
from aigate.core.selection import ProjectSelection
from aigate.fallback.chat_reply import offline_chat_reply
from aigate.fallback.classifier import classify
from aigate.fallback.compatibility import safe_check_compatibility, to_suggestions
from aigate.fallback.prompt_analyzer import NEUTRAL_SCORE, enhance_offline
from aigate.fallback.safe import safe

logger = logging.getLogger(__name__)


def _neutral_analysis(
    description: str, category: str | None = None, selection: ProjectSelection | None = None,
) -> ProjectAnalysis:
    return ProjectAnalysis(
        project_type=category or "Unknown",
        confidence=0.0,
        reasoning="Unable to load smart defaults at this time",
    )


def _neutral_enhancement(
    prompt: str, selection: ProjectSelection | None = None,
) -> PromptEnhancement:
    return PromptEnhancement(
        original_prompt=prompt,
        enhanced_prompt=prompt,
        score=NEUTRAL_SCORE,
        confidence=0.0,
        reasoning="Prompt analysis unavailable",
    )


safe_classify = safe(classify, default_factory=_neutral_analysis)
safe_enhance = safe(enhance_offline, default_factory=_neutral_enhancement)
safe_chat_reply = safe(
    offline_chat_reply,
    ChatReply(
        message="The AI assistant is temporarily unavailable. Please try again in a few minutes.",
        confidence=0.0,
        reasoning="Offline reply unavailable",
    ),
)


def run_fallback(request: AIRequest) -> OperationValue:
    """Deterministic stand-in for a live answer to ``request``."""
    op = request.operation
    if op == "analysis":
        value: OperationValue = safe_classify(request.text, request.category, request.selection)
    elif op == "suggestions":
        value = to_suggestions(safe_check_compatibility(request.selection))
    elif op == "enhancement":
        value = safe_enhance(request.text, request.selection)
    else:
        value = safe_chat_reply(request.text, request.selection)
    logger.debug("Fallback produced %s (confidence=%.2f)", op, value.confidence)
    return value
