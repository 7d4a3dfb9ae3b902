from __future__ import annotations

import pytest

from study_quiz.constants.quiz_constants import SAMPLE_QUIZ_ID
from study_quiz.core.errors import QuizNotFoundError
from study_quiz.core.models import Question
from study_quiz.core.services.quiz_repository import QuizRepository


def test_add_and_fetch_quiz(two_questions):
    repository = QuizRepository()
    quiz = repository.add_quiz("week-1", two_questions, title="Week 1")

    assert quiz.title == "Week 1"
    assert repository.fetch_quiz("week-1") == two_questions
    assert repository.has_quiz("week-1")
    assert [q.quiz_id for q in repository.list_quizzes()] == ["week-1"]


def test_title_defaults_to_id(two_questions):
    repository = QuizRepository()
    assert repository.add_quiz("week-2", two_questions).title == "week-2"


def test_questions_are_normalized():
    repository = QuizRepository()
    repository.add_quiz(
        "padded",
        [Question(question="  2+2?  ", answers=(" 3", "4 "), correct_answer=" 4", source=" notes ")],
    )
    (question,) = repository.fetch_quiz("padded")
    assert question == Question(question="2+2?", answers=("3", "4"), correct_answer="4", source="notes")


def test_empty_question_set_is_accepted():
    repository = QuizRepository()
    repository.add_quiz("empty", [])
    assert repository.fetch_quiz("empty") == ()


def test_unknown_quiz_raises():
    repository = QuizRepository()
    with pytest.raises(QuizNotFoundError):
        repository.fetch_quiz("missing")
    with pytest.raises(KeyError):
        repository.remove_quiz("missing")


def test_remove_and_clear(two_questions):
    repository = QuizRepository()
    repository.add_quiz("a", two_questions)
    repository.add_quiz("b", two_questions)
    repository.remove_quiz("a")
    assert not repository.has_quiz("a")
    repository.clear()
    assert repository.list_quizzes() == []


@pytest.mark.parametrize(
    "question",
    [
        Question(question=" ", answers=("a", "b"), correct_answer="a"),
        Question(question="Only one answer", answers=("a",), correct_answer="a"),
        Question(question="Blank answer", answers=("a", " "), correct_answer="a"),
        Question(question="No match", answers=("a", "b"), correct_answer="c"),
        Question(question="Duplicate match", answers=("a", "a", "b"), correct_answer="a"),
        Question(question="Too many", answers=tuple("abcdefghi"), correct_answer="a"),
    ],
)
def test_ill_formed_questions_are_rejected(question):
    repository = QuizRepository()
    with pytest.raises(ValueError):
        repository.add_quiz("bad", [question])
    assert not repository.has_quiz("bad")


def test_blank_quiz_id_is_rejected(two_questions):
    with pytest.raises(ValueError):
        QuizRepository().add_quiz("  ", two_questions)


def test_sample_quiz():
    repository = QuizRepository()
    repository.add_sample_quiz()
    questions = repository.fetch_quiz(SAMPLE_QUIZ_ID)
    assert [q.correct_answer for q in questions] == ["Paris", "Berlin"]
    assert all(q.source == "slides-week-1.pdf" for q in questions)
