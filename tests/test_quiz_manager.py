from __future__ import annotations

from pathlib import Path
from threading import Thread

import pytest

from study_quiz.constants.quiz_constants import SAMPLE_QUIZ_ID
from study_quiz.core.errors import AttemptNotFoundError, QuizNotFoundError
from study_quiz.core.models import RejectionReason, Score
from study_quiz.core.quiz_manager import QuizManager


@pytest.fixture
def manager(two_questions) -> QuizManager:
    quiz_manager = QuizManager()
    quiz_manager.load_quiz_from_questions("review", two_questions, title="Review")
    return quiz_manager


def test_full_attempt(manager: QuizManager):
    attempt_id = manager.start_attempt("review")

    assert manager.select_answer(attempt_id, 1).accepted
    assert manager.submit_current_answer(attempt_id).accepted
    assert manager.advance(attempt_id).accepted
    assert manager.select_answer(attempt_id, 2).accepted
    assert manager.submit_current_answer(attempt_id).accepted
    assert manager.advance(attempt_id).accepted

    state = manager.get_attempt_state(attempt_id)
    assert state["phase"] == "complete"
    assert manager.get_score(attempt_id) == Score(correct=1, total=2)


def test_rejections_are_returned(manager: QuizManager):
    attempt_id = manager.start_attempt("review")
    result = manager.select_answer(attempt_id, 9)
    assert not result.accepted
    assert result.reason == RejectionReason.INVALID_ARGUMENT
    assert manager.advance(attempt_id).reason == RejectionReason.ILLEGAL_STATE_TRANSITION


def test_attempts_are_independent(manager: QuizManager):
    first = manager.start_attempt("review")
    second = manager.start_attempt("review")
    manager.select_answer(first, 1)

    assert first != second
    assert manager.get_attempt_state(second)["selected_answers"] == {}
    assert manager.get_attempt_count() == 2
    assert manager.get_attempt_quiz_id(first) == "review"


def test_unknown_ids(manager: QuizManager):
    with pytest.raises(QuizNotFoundError):
        manager.start_attempt("missing")
    with pytest.raises(AttemptNotFoundError):
        manager.select_answer("missing", 0)
    with pytest.raises(AttemptNotFoundError):
        manager.discard_attempt("missing")


def test_discard_attempt(manager: QuizManager):
    attempt_id = manager.start_attempt("review")
    manager.discard_attempt(attempt_id)
    assert manager.get_attempt_count() == 0
    with pytest.raises(AttemptNotFoundError):
        manager.get_score(attempt_id)


def test_replacing_quiz_discards_its_attempts(manager: QuizManager, two_questions):
    manager.load_sample_quiz()
    stale = manager.start_attempt("review")
    kept = manager.start_attempt(SAMPLE_QUIZ_ID)

    manager.load_quiz_from_questions("review", two_questions[:1])

    with pytest.raises(AttemptNotFoundError):
        manager.get_attempt_state(stale)
    assert manager.get_attempt_state(kept)["question_count"] == 2
    assert len(manager.fetch_quiz("review")) == 1


def test_empty_quiz_attempt_is_complete():
    manager = QuizManager()
    manager.load_quiz_from_questions("empty", [])
    attempt_id = manager.start_attempt("empty")
    assert manager.get_attempt_state(attempt_id)["phase"] == "complete"
    assert manager.get_score(attempt_id) == Score(correct=0, total=0)


def test_load_quiz_from_file(tmp_path: Path):
    quiz_path = tmp_path / "chapter2.txt"
    quiz_path.write_text("Q: 2+2?\nA: 3\nB: 4\nCORRECT: B\n", encoding="utf-8")

    manager = QuizManager()
    quiz = manager.load_quiz_from_file(quiz_path)

    assert quiz.quiz_id == "chapter2"
    assert [q.quiz_id for q in manager.list_quizzes()] == ["chapter2"]
    assert manager.has_quiz("chapter2")


def test_concurrent_attempts(manager: QuizManager):
    attempt_ids = [manager.start_attempt("review") for _ in range(20)]

    def run(attempt_id: str) -> None:
        manager.select_answer(attempt_id, 1)
        manager.submit_current_answer(attempt_id)
        manager.advance(attempt_id)
        manager.select_answer(attempt_id, 0)
        manager.submit_current_answer(attempt_id)
        manager.advance(attempt_id)

    threads = [Thread(target=run, args=(attempt_id,)) for attempt_id in attempt_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(manager.get_score(a) == Score(correct=2, total=2) for a in attempt_ids)


def test_oldest_attempts_are_evicted_at_the_limit(two_questions):
    quiz_manager = QuizManager(max_attempts=2)
    quiz_manager.load_quiz_from_questions("review", two_questions)

    first = quiz_manager.start_attempt("review")
    second = quiz_manager.start_attempt("review")
    third = quiz_manager.start_attempt("review")

    assert quiz_manager.get_attempt_count() == 2
    with pytest.raises(AttemptNotFoundError):
        quiz_manager.get_attempt_state(first)
    assert quiz_manager.get_attempt_state(second)["phase"] == "answering"
    assert quiz_manager.get_attempt_state(third)["phase"] == "answering"


def test_attempt_limit_must_be_positive():
    with pytest.raises(ValueError):
        QuizManager(max_attempts=0)


def test_export_quiz_writes_importable_file(manager: QuizManager, tmp_path: Path):
    quiz_path = tmp_path / "exports" / "review.txt"

    manager.export_quiz("review", quiz_path)

    reloaded = QuizManager().load_quiz_from_file(quiz_path)
    assert reloaded.quiz_id == "review"
    assert reloaded.questions == manager.fetch_quiz("review")


def test_export_unknown_quiz_raises(manager: QuizManager, tmp_path: Path):
    with pytest.raises(QuizNotFoundError):
        manager.export_quiz("missing", tmp_path / "missing.txt")
    assert not (tmp_path / "missing.txt").exists()
