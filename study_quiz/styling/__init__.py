"""Styling module for the StudyQuiz window."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
