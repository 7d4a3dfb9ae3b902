"""Service for storing the question sets that attempts are started from."""

from __future__ import annotations

from typing import Iterable

from study_quiz.constants.quiz_constants import (
    MAX_ANSWER_COUNT,
    MIN_ANSWER_COUNT,
    SAMPLE_QUIZ_ID,
    SAMPLE_QUIZ_TITLE,
)
from study_quiz.core.errors import QuizNotFoundError
from study_quiz.core.models import Question, QuestionSet, QuizDefinition


class QuizRepository:
    """Keeps validated question sets keyed by quiz id."""

    def __init__(self) -> None:
        self._quizzes: dict[str, QuizDefinition] = {}

    def add_quiz(
        self,
        quiz_id: str,
        questions: Iterable[Question],
        title: str | None = None,
    ) -> QuizDefinition:
        """Register (or replace) the question set stored under ``quiz_id``."""
        cleaned_id = quiz_id.strip()
        if not cleaned_id:
            raise ValueError("Quiz id must not be empty.")

        prepared = tuple(self._prepare_question(q) for q in questions)
        quiz = QuizDefinition(
            quiz_id=cleaned_id,
            title=(title or cleaned_id).strip(),
            questions=prepared,
        )
        self._quizzes[cleaned_id] = quiz
        return quiz

    def fetch_quiz(self, quiz_id: str) -> QuestionSet:
        return self.get_quiz(quiz_id).questions

    def get_quiz(self, quiz_id: str) -> QuizDefinition:
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(f"No quiz with id '{quiz_id}'.")
        return quiz

    def has_quiz(self, quiz_id: str) -> bool:
        return quiz_id in self._quizzes

    def list_quizzes(self) -> list[QuizDefinition]:
        return sorted(self._quizzes.values(), key=lambda q: q.quiz_id)

    def remove_quiz(self, quiz_id: str) -> None:
        if self._quizzes.pop(quiz_id, None) is None:
            raise QuizNotFoundError(f"No quiz with id '{quiz_id}'.")

    def clear(self) -> None:
        self._quizzes.clear()

    def add_sample_quiz(self) -> QuizDefinition:
        return self.add_quiz(SAMPLE_QUIZ_ID, SAMPLE_QUESTIONS, title=SAMPLE_QUIZ_TITLE)

    def _prepare_question(self, question: Question) -> Question:
        """Validate and normalize a question before storage."""
        cleaned_text = question.question.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")

        answers = self._validate_answers(question.answers)
        correct_answer = question.correct_answer.strip()
        if answers.count(correct_answer) != 1:
            raise ValueError(
                f"Correct answer '{correct_answer}' must match exactly one answer for '{cleaned_text}'."
            )

        return Question(
            question=cleaned_text,
            answers=answers,
            correct_answer=correct_answer,
            source=question.source.strip(),
        )

    @staticmethod
    def _validate_answers(answers: Iterable[str]) -> tuple[str, ...]:
        cleaned = tuple(answer.strip() for answer in answers)
        if len(cleaned) < MIN_ANSWER_COUNT:
            raise ValueError(f"Each question must have at least {MIN_ANSWER_COUNT} answers.")
        if len(cleaned) > MAX_ANSWER_COUNT:
            raise ValueError(f"Each question can have at most {MAX_ANSWER_COUNT} answers.")
        if any(not answer for answer in cleaned):
            raise ValueError("Answer text cannot be empty.")
        return cleaned


SAMPLE_QUESTIONS: QuestionSet = (
    Question(
        question="What is the capital of France?",
        answers=("Paris", "Blah", "Bleh", "Blue"),
        correct_answer="Paris",
        source="slides-week-1.pdf",
    ),
    Question(
        question="What is the capital of Germany?",
        answers=("Blah", "Berlin", "Bleh", "Blue"),
        correct_answer="Berlin",
        source="slides-week-1.pdf",
    ),
)
