from __future__ import annotations

from pathlib import Path

import pytest

from study_quiz.core.errors import QuizImportError
from study_quiz.core.models import Question
from study_quiz.core.quiz_exporter import save_quiz_to_file, serialize_questions
from study_quiz.core.quiz_importer import load_quiz_from_file, parse_quiz_text

QUIZ_TEXT = """\
Q: What is the capital of France?
A: Paris
B: Lyon
C: Nice
CORRECT: A
SOURCE: slides-week-1.pdf

---

Q: What is $2 + 2$?
Write the number.
A: 3
B: 4
CORRECT: b
"""


def test_parse_quiz_text():
    questions = parse_quiz_text(QUIZ_TEXT, default_source="review.txt")

    assert questions == [
        Question(
            question="What is the capital of France?",
            answers=("Paris", "Lyon", "Nice"),
            correct_answer="Paris",
            source="slides-week-1.pdf",
        ),
        Question(
            question="What is $2 + 2$?\nWrite the number.",
            answers=("3", "4"),
            correct_answer="4",
            source="review.txt",
        ),
    ]


def test_load_quiz_from_file(tmp_path: Path):
    quiz_path = tmp_path / "week1.txt"
    quiz_path.write_text(QUIZ_TEXT, encoding="utf-8")

    imported = load_quiz_from_file(quiz_path)

    assert imported.source_path == quiz_path
    assert imported.title == "week1"
    assert len(imported.questions) == 2
    assert imported.questions[1].source == "week1.txt"


def test_empty_file_is_rejected(tmp_path: Path):
    quiz_path = tmp_path / "empty.txt"
    quiz_path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(QuizImportError):
        load_quiz_from_file(quiz_path)


@pytest.mark.parametrize(
    "block",
    [
        "A: 1\nB: 2\nCORRECT: A",
        "Q: Only one\nA: 1\nCORRECT: A",
        "Q: Gap\nA: 1\nC: 3\nCORRECT: A",
        "Q: Missing correct\nA: 1\nB: 2",
        "Q: Wrong letter\nA: 1\nB: 2\nCORRECT: C",
        "Q: Repeated\nA: 1\nA: 2\nCORRECT: A",
        "Q: Duplicate answer\nA: 1\nB: 1\nCORRECT: A",
        "stray text\nQ: Fine\nA: 1\nB: 2\nCORRECT: A",
    ],
)
def test_malformed_blocks_are_rejected(block: str):
    with pytest.raises(QuizImportError):
        parse_quiz_text(block)


def test_exported_file_imports_back(tmp_path: Path):
    questions = parse_quiz_text(QUIZ_TEXT, default_source="review.txt")
    quiz_path = tmp_path / "nested" / "export.txt"

    save_quiz_to_file(quiz_path, questions)

    assert load_quiz_from_file(quiz_path).questions == questions


def test_serialize_questions_format():
    question = Question(question="2+2?", answers=("3", "4"), correct_answer="4")
    assert serialize_questions([question]) == "Q: 2+2?\nA: 3\nB: 4\nCORRECT: B\n"


def test_export_rejects_empty_quiz(tmp_path: Path):
    with pytest.raises(ValueError):
        save_quiz_to_file(tmp_path / "empty.txt", [])


def test_empty_answer_line_reports_empty_answer():
    with pytest.raises(QuizImportError, match="Answer text cannot be empty"):
        parse_quiz_text("Q: Empty\nA:\nB: 2\nCORRECT: B")


def test_answer_text_may_start_on_the_next_line():
    (question,) = parse_quiz_text("Q: Capital?\nA:\nParis\nB: Lyon\nCORRECT: A")
    assert question.answers == ("Paris", "Lyon")
    assert question.correct_answer == "Paris"
