# src/core/selection.py — v1
"""Design selection snapshot: the structured payload of a request.

Mirrors the choices a user has made so far (style, colours, components...).
Every field is optional; an empty list counts as "not set".
"""

from __future__ import annotations

from pydantic import BaseModel, Field

PROJECT_TYPES: tuple[str, ...] = (
    "Portfolio",
    "E-commerce",
    "Dashboard",
    "Web App",
    "Mobile App",
    "Website",
)


class ColorThemeRef(BaseModel):
    """Selected colour theme."""

    id: str
    title: str = ""
    colors: list[str] = Field(default_factory=list)


class ComponentRef(BaseModel):
    """Selected UI component."""

    id: str
    title: str = ""


class FunctionalityRef(BaseModel):
    """Selected functionality package and the features it brings."""

    id: str
    title: str = ""
    features: list[str] = Field(default_factory=list)


class Typography(BaseModel):
    font_family: str | None = None
    heading_weight: str | None = None
    body_weight: str | None = None
    text_alignment: str | None = None
    heading_size: str | None = None
    body_size: str | None = None
    line_height: str | None = None


class ProjectSelection(BaseModel):
    """Current state of a user's design choices."""

    project_name: str | None = None
    project_type: str | None = None
    layout: str | None = None
    design_style: str | None = None
    color_theme: ColorThemeRef | None = None
    typography: Typography | None = None
    functionality: list[FunctionalityRef] = Field(default_factory=list)
    background: str | None = None
    components: list[ComponentRef] = Field(default_factory=list)
    animations: list[str] = Field(default_factory=list)

    def summary_lines(self) -> list[str]:
        """Human-readable context lines (used in chat prompts and replies)."""
        lines: list[str] = []
        if self.project_name:
            lines.append(f"Project: {self.project_name} ({self.project_type or 'Website'})")
        elif self.project_type:
            lines.append(f"Project type: {self.project_type}")
        if self.design_style:
            lines.append(f"Design Style: {self.design_style}")
        if self.color_theme:
            lines.append(f"Color Theme: {self.color_theme.title or self.color_theme.id}")
        if self.layout:
            lines.append(f"Layout: {self.layout}")
        if self.background:
            lines.append(f"Background: {self.background}")
        if self.components:
            lines.append(
                "Components: " + ", ".join(c.title or c.id for c in self.components)
            )
        if self.animations:
            lines.append("Animations: " + ", ".join(self.animations))
        return lines
