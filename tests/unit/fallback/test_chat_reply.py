# tests/unit/fallback/test_chat_reply.py — v1
"""Tests for fallback/chat_reply.py — question routing and offline replies."""

from __future__ import annotations

import pytest

from aigate.core.selection import ProjectSelection
from aigate.fallback.chat_reply import (
    OFFLINE_CONFIDENCE,
    QuestionType,
    detect_question_type,
    offline_chat_reply,
)


class TestDetectQuestionType:
    @pytest.mark.parametrize(
        "message, expected",
        [
            ("What colors go well together?", QuestionType.DESIGN),
            ("Is my design good?", QuestionType.PROJECT_SPECIFIC),
            ("How do I install the package?", QuestionType.TECHNICAL),
            ("Option A versus option B?", QuestionType.COMPARISON),
            ("What do you recommend?", QuestionType.RECOMMENDATION),
            ("hello there", QuestionType.GENERAL),
        ],
    )
    def test_routing(self, message, expected):
        assert detect_question_type(message) == expected


class TestOfflineChatReply:
    def test_flags_offline(self):
        reply = offline_chat_reply("hello there")
        assert reply.confidence == OFFLINE_CONFIDENCE
        assert "temporarily unavailable" in reply.message
        assert reply.reasoning == "Offline reply for a general question"

    def test_project_question_summarises_selection(self, harmonious_selection):
        reply = offline_chat_reply("Is my design good?", harmonious_selection)
        assert "Design Style: minimalist" in reply.message
        assert "Compatibility score: 100/100 (excellent)." in reply.message

    def test_project_question_without_selection(self):
        reply = offline_chat_reply("Is my design good?", ProjectSelection())
        assert "No selections made yet." in reply.message

    def test_design_question_lists_themes(self, harmonious_selection):
        reply = offline_chat_reply("Which colors fit?", harmonious_selection)
        assert "Colour themes that suit minimalist:" in reply.message
        assert "Based on Portfolio projects" in reply.message

    def test_technical_question(self):
        reply = offline_chat_reply("How do I install the package?")
        assert "generated prompt" in reply.message

    def test_design_question_lists_animations_and_backgrounds(self, harmonious_selection):
        reply = offline_chat_reply("Which animation fits?", harmonious_selection)
        assert (
            "Animations that suit minimalist: fade-in-text, text-reveal, "
            "word-fade-in, blur-in, fade-in."
        ) in reply.message
        assert (
            "Backgrounds that pair with monochrome-modern: dot-pattern, grid-pattern"
        ) in reply.message

    def test_unknown_style_and_theme_add_nothing(self):
        selection = ProjectSelection(design_style="baroque")
        reply = offline_chat_reply("Which colors fit?", selection)
        assert "Animations that suit" not in reply.message
        assert "Backgrounds that pair with" not in reply.message
