# src/fallback/models.py — v1
"""Result models of the deterministic fallback engines.

Every engine result carries ``confidence`` in [0, 1] and a non-empty
``reasoning`` so that it can stand in for a live AI answer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from aigate.core.models import Severity
from aigate.core.selection import Typography

Harmony = Literal["excellent", "good", "fair", "poor", "pending"]


class SmartDefaults(BaseModel):
    """Bundle of recommended design attributes for one project type."""

    layout: str | None = None
    design_style: str | None = None
    color_theme: str | None = None
    typography: Typography | None = None
    functionality: list[str] = Field(default_factory=list)
    background: str | None = None
    components: list[str] = Field(default_factory=list)
    animations: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_defaults=True)


class SmartDefaultsResult(BaseModel):
    applied: bool
    defaults: SmartDefaults = Field(default_factory=SmartDefaults)
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


class KeywordParseResult(BaseModel):
    """Attributes inferred from a free-text description."""

    project_type: str | None = None
    design_style: str | None = None
    color_theme: str | None = None
    confidence: dict[str, float] = Field(default_factory=dict)
    detected_keywords: list[str] = Field(default_factory=list)


class CompatibilityIssue(BaseModel):
    severity: Severity
    message: str
    affected: list[str] = Field(default_factory=list)
    suggestion: str = ""
    auto_fixable: bool = False


class CompatibilityResult(BaseModel):
    """Outcome of the compatibility scorer."""

    score: int = Field(ge=0, le=100)
    issues: list[CompatibilityIssue] = Field(default_factory=list)
    warnings: list[CompatibilityIssue] = Field(default_factory=list)
    harmony: Harmony
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str


class PromptSuggestion(BaseModel):
    type: Literal["warning", "tip", "recommendation"]
    message: str
    fix: str | None = None
    auto_fixable: bool = False
    severity: Severity


class PromptAnalysisResult(BaseModel):
    """Outcome of the prompt analyzer."""

    score: int = Field(ge=0)
    suggestions: list[PromptSuggestion] = Field(default_factory=list)
    optimized_prompt: str | None = None
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str
