from __future__ import annotations

import pytest

from study_quiz.core.models import Question


@pytest.fixture
def addition_question() -> Question:
    return Question(question="2+2?", answers=("3", "4"), correct_answer="4", source="arithmetic.txt")


@pytest.fixture
def two_questions(addition_question: Question) -> tuple[Question, ...]:
    capital = Question(
        question="What is the capital of France?",
        answers=("Paris", "Lyon", "Nice"),
        correct_answer="Paris",
        source="slides-week-1.pdf",
    )
    return (addition_question, capital)
