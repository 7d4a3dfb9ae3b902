"""Color palette for StudyQuiz supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#000000",      # Black
        dark="#F5F5F5"        # WhiteSmoke
    )

    TEXT_SECONDARY = ThemeColors(
        light="#666666",      # Dark Gray
        dark="#AAAAAA"        # Light Gray
    )

    TEXT_ON_ACCENT = ThemeColors(
        light="#FFFFFF",
        dark="#FFFFFF"
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",      # White
        dark="#1E1E1E"        # Dark Gray
    )

    BACKGROUND_SECONDARY = ThemeColors(
        light="#F5F5F5",      # WhiteSmoke
        dark="#2D2D2D"        # Slightly lighter dark
    )

    # Answer states
    ANSWER_NEUTRAL = ThemeColors(
        light="#E8E8E8",      # Light Gray
        dark="#3A3A3A"        # Medium Dark Gray
    )

    ANSWER_HOVER = ThemeColors(
        light="#D1D1D1",
        dark="#505050"
    )

    ANSWER_SELECTED = ThemeColors(
        light="#0078D4",      # Blue
        dark="#4A9EFF"        # Lighter Blue
    )

    ANSWER_CORRECT = ThemeColors(
        light="#107C10",      # Green
        dark="#3FA33F"
    )

    ANSWER_WRONG = ThemeColors(
        light="#D13438",      # Red
        dark="#E05555"
    )

    # Border colors
    BORDER_PRIMARY = ThemeColors(
        light="#D1D1D1",      # Gray
        dark="#555555"        # Dark Gray
    )
