"""Utilities for exporting quizzes to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path
import string
from typing import Sequence

from study_quiz.core.models import Question


def save_quiz_to_file(file_path: Path, questions: Sequence[Question]) -> None:
    """Persist the provided questions to disk in the text import format."""

    if not questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    document = serialize_questions(questions)
    file_path.write_text(document, encoding="utf-8")


def serialize_questions(questions: Sequence[Question]) -> str:
    blocks = [_serialize_question(question) for question in questions]
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    lines: list[str] = []

    question_lines = question.question.splitlines() or [question.question]
    lines.append(f"Q: {question_lines[0]}")
    lines.extend(question_lines[1:])

    for letter, answer in zip(string.ascii_uppercase, question.answers):
        answer_lines = answer.splitlines() or [answer]
        lines.append(f"{letter}: {answer_lines[0]}")
        lines.extend(answer_lines[1:])

    correct_index = question.correct_index
    if correct_index is None:
        raise ValueError(f"Question '{question.question}' has no matching correct answer.")
    lines.append(f"CORRECT: {string.ascii_uppercase[correct_index]}")

    if question.source:
        lines.append(f"SOURCE: {question.source}")

    return "\n".join(lines)
