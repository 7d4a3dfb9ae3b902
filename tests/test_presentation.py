from __future__ import annotations

from study_quiz.core.services.quiz_session import (
    AnswerHighlight,
    QuizSession,
    advance_label,
    answer_highlights,
    completion_message,
    feedback_message,
    progress_label,
)


def test_highlights_before_submission(two_questions):
    session = QuizSession(two_questions)
    assert answer_highlights(session) == [AnswerHighlight.NEUTRAL, AnswerHighlight.NEUTRAL]
    session.select_answer(0)
    assert answer_highlights(session) == [AnswerHighlight.SELECTED, AnswerHighlight.NEUTRAL]


def test_highlights_after_correct_submission(two_questions):
    session = QuizSession(two_questions)
    session.select_answer(1)
    session.submit_current_answer()
    assert answer_highlights(session) == [AnswerHighlight.NEUTRAL, AnswerHighlight.CORRECT]


def test_highlights_after_wrong_submission_reveal_correct_answer(two_questions):
    session = QuizSession(two_questions)
    session.select_answer(0)
    session.submit_current_answer()
    assert answer_highlights(session) == [AnswerHighlight.WRONG, AnswerHighlight.CORRECT]


def test_feedback_messages(two_questions):
    session = QuizSession(two_questions)
    assert feedback_message(session) is None
    session.select_answer(0)
    session.submit_current_answer()
    assert feedback_message(session) == "Wrong. The correct answer is: 4"

    session.advance()
    assert feedback_message(session) is None
    session.select_answer(0)
    session.submit_current_answer()
    assert feedback_message(session) == "Correct!"


def test_progress_and_advance_labels(two_questions):
    session = QuizSession(two_questions)
    assert progress_label(session) == "Question 1 of 2"
    assert advance_label(session) == "Next Question"

    session.select_answer(1)
    session.submit_current_answer()
    session.advance()
    assert progress_label(session) == "Question 2 of 2"
    assert advance_label(session) == "Finish Quiz"

    session.select_answer(0)
    session.submit_current_answer()
    session.advance()
    assert progress_label(session) is None
    assert answer_highlights(session) == []
    assert completion_message(session) == "You scored 2 out of 2."


def test_completion_message_for_empty_quiz():
    assert completion_message(QuizSession()) == "You scored 0 out of 0."
