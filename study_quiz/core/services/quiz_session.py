"""State machine for a single attempt at a question set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from study_quiz.core.models import (
    Question,
    QuestionSet,
    RejectionReason,
    Score,
    SessionPhase,
    TransitionResult,
)

SessionObserver = Callable[["QuizSession"], None]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Immutable copy of session state handed to consumers."""

    current_index: int
    question_count: int
    selected_answers: Mapping[int, int]
    outcomes: Mapping[int, bool]
    is_submitted: bool
    is_complete: bool
    phase: SessionPhase
    score: Score


class QuizSession:
    """Owns the progress of one quiz attempt.

    Transitions::

        ANSWERING(i) --select--> ANSWERING(i)
        ANSWERING(i) --submit [answer selected]--> GRADED(i)
        GRADED(i) --advance [i < last]--> ANSWERING(i + 1)
        GRADED(last) --advance--> COMPLETE

    Operations never raise on a precondition failure; they return a rejected
    ``TransitionResult`` and leave state untouched.
    """

    def __init__(self, questions: Iterable[Question] = ()) -> None:
        self._observers: list[SessionObserver] = []
        self._load(tuple(questions))

    def _load(self, questions: QuestionSet) -> None:
        self._questions: QuestionSet = questions
        self._current_index: int = 0
        self._selected_answers: dict[int, int] = {}
        self._outcomes: dict[int, bool] = {}
        self._is_submitted: bool = False
        self._is_complete: bool = not questions

    # --- Queries ---

    @property
    def questions(self) -> QuestionSet:
        return self._questions

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def is_submitted(self) -> bool:
        return self._is_submitted

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    @property
    def phase(self) -> SessionPhase:
        if self._is_complete:
            return SessionPhase.COMPLETE
        if self._is_submitted:
            return SessionPhase.GRADED
        return SessionPhase.ANSWERING

    @property
    def current_question(self) -> Question | None:
        if self._is_complete:
            return None
        return self._questions[self._current_index]

    @property
    def selected_answers(self) -> dict[int, int]:
        return dict(self._selected_answers)

    @property
    def outcomes(self) -> dict[int, bool]:
        return dict(self._outcomes)

    def selected_answer(self, question_index: int | None = None) -> int | None:
        """Selected answer for a question, defaulting to the current one."""
        index = self._current_index if question_index is None else question_index
        return self._selected_answers.get(index)

    def outcome(self, question_index: int | None = None) -> bool | None:
        index = self._current_index if question_index is None else question_index
        return self._outcomes.get(index)

    def score(self) -> Score:
        correct = sum(1 for is_correct in self._outcomes.values() if is_correct)
        return Score(correct=correct, total=len(self._questions))

    # --- Transitions ---

    def select_answer(self, answer_index: int) -> TransitionResult:
        if self._is_complete:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION, "The quiz is already complete."
            )
        if self._is_submitted:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION,
                "The answer for this question has already been submitted.",
            )
        answer_count = len(self._questions[self._current_index].answers)
        # bool is an int subclass but never a meaningful answer id
        if (
            not isinstance(answer_index, int)
            or isinstance(answer_index, bool)
            or not 0 <= answer_index < answer_count
        ):
            return self._reject(
                RejectionReason.INVALID_ARGUMENT,
                f"Answer index {answer_index!r} is out of range (0-{answer_count - 1}).",
            )

        self._selected_answers[self._current_index] = answer_index
        return self._accept()

    def submit_current_answer(self) -> TransitionResult:
        if self._is_complete:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION, "The quiz is already complete."
            )
        if self._is_submitted:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION,
                "The answer for this question has already been submitted.",
            )
        selected = self._selected_answers.get(self._current_index)
        if selected is None:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION,
                "Select an answer before submitting.",
            )

        question = self._questions[self._current_index]
        self._outcomes[self._current_index] = question.is_correct(selected)
        self._is_submitted = True
        return self._accept()

    def advance(self) -> TransitionResult:
        if self._is_complete:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION, "The quiz is already complete."
            )
        if not self._is_submitted:
            return self._reject(
                RejectionReason.ILLEGAL_STATE_TRANSITION,
                "Submit the current answer before moving on.",
            )

        if self._current_index < len(self._questions) - 1:
            self._current_index += 1
            self._is_submitted = False
        else:
            self._is_complete = True
        return self._accept()

    def reset(self, questions: Iterable[Question] | None = None) -> None:
        """Discard all progress, optionally switching to a new question set."""
        self._load(self._questions if questions is None else tuple(questions))
        self._notify()

    # --- Observation ---

    def subscribe(self, callback: SessionObserver) -> Callable[[], None]:
        """Call ``callback`` after every accepted transition.

        Returns a function that removes the subscription.
        """
        if callback not in self._observers:
            self._observers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: SessionObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self)

    def _accept(self) -> TransitionResult:
        self._notify()
        return TransitionResult.ok(self.phase)

    def _reject(self, reason: RejectionReason, message: str) -> TransitionResult:
        return TransitionResult.rejected(self.phase, reason, message)

    # --- Serialization ---

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            current_index=self._current_index,
            question_count=len(self._questions),
            selected_answers=MappingProxyType(dict(self._selected_answers)),
            outcomes=MappingProxyType(dict(self._outcomes)),
            is_submitted=self._is_submitted,
            is_complete=self._is_complete,
            phase=self.phase,
            score=self.score(),
        )

    def to_dict(self) -> dict[str, object]:
        """JSON-ready view of the session state and score."""
        score = self.score()
        return {
            "phase": self.phase.name.lower(),
            "current_index": self._current_index,
            "question_count": len(self._questions),
            # JSON object keys are strings
            "selected_answers": {str(k): v for k, v in sorted(self._selected_answers.items())},
            "outcomes": {str(k): v for k, v in sorted(self._outcomes.items())},
            "is_submitted": self._is_submitted,
            "is_complete": self._is_complete,
            "score": {
                "correct": score.correct,
                "total": score.total,
                "percentage": score.percentage,
            },
        }


class AnswerHighlight(Enum):
    """How an answer option should be drawn."""

    NEUTRAL = "neutral"
    SELECTED = "selected"
    CORRECT = "correct"
    WRONG = "wrong"


def answer_highlights(session: QuizSession) -> list[AnswerHighlight]:
    question = session.current_question
    if question is None:
        return []

    selected = session.selected_answer()
    highlights: list[AnswerHighlight] = []
    for index, answer in enumerate(question.answers):
        is_right_answer = answer == question.correct_answer
        if session.is_submitted:
            if index == selected:
                highlight = AnswerHighlight.CORRECT if is_right_answer else AnswerHighlight.WRONG
            elif is_right_answer:
                highlight = AnswerHighlight.CORRECT
            else:
                highlight = AnswerHighlight.NEUTRAL
        elif index == selected:
            highlight = AnswerHighlight.SELECTED
        else:
            highlight = AnswerHighlight.NEUTRAL
        highlights.append(highlight)
    return highlights


def feedback_message(session: QuizSession) -> str | None:
    question = session.current_question
    if question is None or not session.is_submitted:
        return None
    if session.outcome():
        return "Correct!"
    return f"Wrong. The correct answer is: {question.correct_answer}"


def progress_label(session: QuizSession) -> str | None:
    if session.is_complete:
        return None
    return f"Question {session.current_index + 1} of {len(session.questions)}"


def advance_label(session: QuizSession) -> str:
    if session.current_index < len(session.questions) - 1:
        return "Next Question"
    return "Finish Quiz"


def completion_message(session: QuizSession) -> str:
    score = session.score()
    return f"You scored {score.correct} out of {score.total}."
