# src/llm/prompts.py — v1
"""Prompt templates for the four operations.

analysis and suggestions ask for JSON; enhancement and chat are free text.
Every user-supplied string is passed through the PII sanitizer first.
"""

from __future__ import annotations

from aigate.core.models import AIRequest, ChatTurn
from aigate.core.selection import ProjectSelection
from aigate.llm.sanitize import sanitize_text

HISTORY_TURNS = 6

JSON_OPERATIONS = frozenset({"analysis", "suggestions"})

ANALYSIS_TEMPLATE = """Analyze project and recommend design choices.

"{description}"{category_line}

JSON format:
{{
  "projectType": "Portfolio|E-commerce|Dashboard|Web App|Mobile App|Website",
  "designStyle": "minimalist|glassmorphism|material-design|neumorphism|brutalism|modern",
  "colorTheme": "ocean-breeze|sunset-warmth|monochrome-modern|forest-green|tech-neon|purple-haze",
  "reasoning": "1-2 sentence explanation",
  "confidence": 0.85,
  "suggestedComponents": ["id1", "id2"],
  "suggestedAnimations": ["id1"]
}}"""

SUGGESTIONS_TEMPLATE = """Analyze design compatibility. Provide 3-5 suggestions.

Project: {project}
Style: {style}
Colors: {colors}
Components: {components}
Background: {background}
Animations: {animations}

JSON format:
{{
  "suggestions": [{{
    "type": "improvement|warning|tip",
    "message": "actionable text",
    "reasoning": "why it matters",
    "autoFixable": boolean,
    "severity": "low|medium|high"
  }}]
}}"""

ENHANCEMENT_TEMPLATE = """Enhance this prompt with professional details. Add sections for:
1. Accessibility (WCAG 2.1 AA, keyboard nav, ARIA, contrast 4.5:1)
2. Performance (code splitting, image optimization, <200KB bundle, Lighthouse 90+)
3. SEO (meta tags, semantic HTML, mobile-first)
4. Security (validation, HTTPS, CSP, XSS/CSRF protection)
5. Testing (unit, integration, E2E, accessibility)
6. Code Quality (TypeScript strict, ESLint, error boundaries)

Original:
{prompt}

Return complete enhanced prompt with ## headers for new sections."""

CHAT_TEMPLATE = """You are a helpful AI assistant for a web design wizard. Answer the user's question based on their current project context.

Current Project Context:
{context}

Conversation History:
{history}

User Question: {message}

Provide a helpful, concise response (2-3 sentences). Focus on practical advice related to their design choices."""


def build_prompt(request: AIRequest) -> str:
    """Render the prompt for ``request``."""
    op = request.operation
    if op == "analysis":
        return ANALYSIS_TEMPLATE.format(
            description=sanitize_text(request.text),
            category_line=(
                f"\nDeclared project type: {request.category}" if request.category else ""
            ),
        )
    if op == "suggestions":
        return _suggestions_prompt(request.selection or ProjectSelection())
    if op == "enhancement":
        return ENHANCEMENT_TEMPLATE.format(prompt=sanitize_text(request.text))
    return CHAT_TEMPLATE.format(
        context=context_summary(request.selection),
        history=_history_text(request.history),
        message=sanitize_text(request.text),
    )


def _suggestions_prompt(selection: ProjectSelection) -> str:
    theme = selection.color_theme
    return SUGGESTIONS_TEMPLATE.format(
        project=selection.project_type or "Website",
        style=selection.design_style or "None",
        colors=(theme.title or theme.id) if theme else "None",
        components=", ".join(c.title or c.id for c in selection.components) or "None",
        background=selection.background or "None",
        animations=", ".join(selection.animations) or "None",
    )


def context_summary(selection: ProjectSelection | None) -> str:
    lines = selection.summary_lines() if selection else []
    return sanitize_text("\n".join(lines)) if lines else "No selections made yet"


def _history_text(history: list[ChatTurn]) -> str:
    recent = history[-HISTORY_TURNS:]
    if not recent:
        return "No previous conversation"
    return "\n".join(
        f"{'User' if turn.role == 'user' else 'Assistant'}: {sanitize_text(turn.content)}"
        for turn in recent
    )
