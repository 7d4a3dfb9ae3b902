"""Exceptions raised by the quiz core."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz errors."""


class InvalidArgument(QuizError, ValueError):
    """Raised when an answer index does not exist for the current question."""


class IllegalStateTransition(QuizError, RuntimeError):
    """Raised when an operation is not allowed in the current session phase."""


class QuizNotFoundError(QuizError, KeyError):
    """Raised when no quiz is registered under the requested id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Quiz not found"


class AttemptNotFoundError(QuizError, KeyError):
    """Raised when no attempt exists for the requested id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Attempt not found"


class QuizImportError(QuizError):
    """Raised when a quiz definition cannot be parsed."""
