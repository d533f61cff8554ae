# tests/unit/llm/test_prompts.py — v1
"""Tests for llm/prompts.py — prompt rendering per operation."""

from __future__ import annotations

from aigate.core.models import AIRequest, ChatTurn
from aigate.llm.prompts import HISTORY_TURNS, build_prompt, context_summary


class TestBuildPrompt:
    def test_analysis_sanitized(self):
        prompt = build_prompt(AIRequest(
            operation="analysis", text="Portfolio for jane@example.com", category="Portfolio",
        ))
        assert "[email]" in prompt
        assert "jane@example.com" not in prompt
        assert "Declared project type: Portfolio" in prompt
        assert '"projectType"' in prompt

    def test_analysis_without_category(self):
        prompt = build_prompt(AIRequest(operation="analysis", text="A shop"))
        assert "Declared project type" not in prompt

    def test_suggestions_lists_selection(self, harmonious_selection):
        prompt = build_prompt(AIRequest(operation="suggestions", selection=harmonious_selection))
        assert "Project: Portfolio" in prompt
        assert "Colors: Monochrome Modern" in prompt
        assert "Components: Carousel" in prompt
        assert "Background: None" in prompt

    def test_enhancement(self):
        prompt = build_prompt(AIRequest(operation="enhancement", text="Build a site"))
        assert prompt.rstrip().endswith("Return complete enhanced prompt with ## headers for new sections.")
        assert "Original:\nBuild a site" in prompt

    def test_chat_keeps_recent_history(self):
        history = [
            ChatTurn(role="user" if i % 2 == 0 else "assistant", content=f"turn-{i}")
            for i in range(HISTORY_TURNS + 2)
        ]
        prompt = build_prompt(AIRequest(operation="chat", text="Which font?", history=history))
        assert "turn-0" not in prompt
        assert "turn-1" not in prompt
        assert f"turn-{HISTORY_TURNS + 1}" in prompt
        assert "No selections made yet" in prompt
        assert "User Question: Which font?" in prompt

    def test_chat_without_history(self):
        prompt = build_prompt(AIRequest(operation="chat", text="Hi"))
        assert "No previous conversation" in prompt


class TestContextSummary:
    def test_selection(self, harmonious_selection):
        summary = context_summary(harmonious_selection)
        assert "Project: Studio (Portfolio)" in summary
        assert "Design Style: minimalist" in summary

    def test_none(self):
        assert context_summary(None) == "No selections made yet"
