"""Centralized styles and font definitions for the application."""

from study_quiz.core.services.quiz_session import AnswerHighlight

from .color_palette import ColorPalette, Theme

_HIGHLIGHT_COLORS = {
    AnswerHighlight.NEUTRAL: ColorPalette.ANSWER_NEUTRAL,
    AnswerHighlight.SELECTED: ColorPalette.ANSWER_SELECTED,
    AnswerHighlight.CORRECT: ColorPalette.ANSWER_CORRECT,
    AnswerHighlight.WRONG: ColorPalette.ANSWER_WRONG,
}


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QPushButton {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
        """

    @staticmethod
    def get_answer_button_style(highlight: AnswerHighlight, theme: Theme = Theme.LIGHT) -> str:
        background = _HIGHLIGHT_COLORS[highlight].get(theme)
        if highlight == AnswerHighlight.NEUTRAL:
            text = ColorPalette.TEXT_PRIMARY.get(theme)
            hover = ColorPalette.ANSWER_HOVER.get(theme)
        else:
            text = ColorPalette.TEXT_ON_ACCENT.get(theme)
            hover = background
        return (
            f"QPushButton {{ background-color: {background}; color: {text}; "
            f"border: none; border-radius: 4px; padding: 10px; text-align: left; }}\n"
            f"QPushButton:hover {{ background-color: {hover}; }}"
        )

    @staticmethod
    def get_progress_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_SECONDARY.get(theme)}; font-size: 10pt;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
