"""Qt UI components for taking a quiz."""

from .dialog_helpers import confirm_restart_quiz, show_error, show_info
from .quiz_window import QuizWindow

__all__ = [
    "QuizWindow",
    "confirm_restart_quiz",
    "show_error",
    "show_info",
]
