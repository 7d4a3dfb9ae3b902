"""Domain models for the study quiz application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from study_quiz.core.errors import IllegalStateTransition, InvalidArgument


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question; answer order is the displayed order."""

    question: str
    answers: tuple[str, ...]
    correct_answer: str
    source: str = ""

    @property
    def correct_index(self) -> int | None:
        try:
            return self.answers.index(self.correct_answer)
        except ValueError:
            return None

    def is_correct(self, answer_index: int) -> bool:
        return self.answers[answer_index] == self.correct_answer


QuestionSet = tuple[Question, ...]


@dataclass(frozen=True, slots=True)
class QuizDefinition:
    """A question set registered under an id."""

    quiz_id: str
    title: str
    questions: QuestionSet


class SessionPhase(Enum):
    """Where a quiz attempt currently is."""

    ANSWERING = auto()
    GRADED = auto()
    COMPLETE = auto()


@dataclass(frozen=True, slots=True)
class Score:
    correct: int
    total: int

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.correct / self.total) * 100


class RejectionReason(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    ILLEGAL_STATE_TRANSITION = "illegal_state_transition"


_REJECTION_ERRORS = {
    RejectionReason.INVALID_ARGUMENT: InvalidArgument,
    RejectionReason.ILLEGAL_STATE_TRANSITION: IllegalStateTransition,
}


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Outcome of a session operation: accepted, or rejected with a reason."""

    accepted: bool
    phase: SessionPhase
    reason: RejectionReason | None = None
    message: str | None = None

    @classmethod
    def ok(cls, phase: SessionPhase) -> TransitionResult:
        return cls(accepted=True, phase=phase)

    @classmethod
    def rejected(
        cls, phase: SessionPhase, reason: RejectionReason, message: str
    ) -> TransitionResult:
        return cls(accepted=False, phase=phase, reason=reason, message=message)

    def raise_for_rejection(self) -> TransitionResult:
        """Raise the matching error if rejected, otherwise return self."""
        if self.accepted or self.reason is None:
            return self
        raise _REJECTION_ERRORS[self.reason](self.message or self.reason.value)
