"""Utilities for importing quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First answer
    B: Second answer
    ...  (up to H; letters must be contiguous starting at A)
    CORRECT: letter of the correct answer
    SOURCE: where the question came from (optional)

Example:

    Q: What is the capital of France?
    A: Paris
    B: Lyon
    C: Nice
    CORRECT: A
    SOURCE: slides-week-1.pdf
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import string

from study_quiz.constants.quiz_constants import MAX_ANSWER_COUNT, MIN_ANSWER_COUNT
from study_quiz.core.errors import QuizImportError
from study_quiz.core.models import Question


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[Question]

    @property
    def title(self) -> str:
        return self.source_path.stem


_ANSWER_LETTERS = string.ascii_uppercase[:MAX_ANSWER_COUNT]


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_quiz_text(text, default_source=file_path.name)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=questions)


def parse_quiz_text(text: str, default_source: str = "") -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block, default_source) for block in blocks if block]


def _parse_block(block: str, default_source: str) -> Question:
    question_lines: list[str] = []
    answers: dict[str, str] = {}
    correct_letter: str | None = None
    source: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("SOURCE:"):
            source = line.split(":", 1)[1].strip()
            current_section = None
            continue

        if len(line) >= 2 and line[0].upper() in _ANSWER_LETTERS and line[1] == ":":
            letter = line[0].upper()
            if letter in answers:
                raise QuizImportError(f"Answer {letter} is defined more than once.")
            answers[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in answers:
            answers[current_section] = answers[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    expected_letters = _ANSWER_LETTERS[: len(answers)]
    if sorted(answers) != list(expected_letters):
        raise QuizImportError(
            f"Answers must use contiguous letters starting at A (found {', '.join(sorted(answers))})."
        )
    if len(answers) < MIN_ANSWER_COUNT:
        raise QuizImportError(f"Each question must define at least {MIN_ANSWER_COUNT} answers.")

    answer_list = [answers[letter].strip() for letter in expected_letters]
    if any(not answer for answer in answer_list):
        raise QuizImportError("Answer text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError(f"CORRECT is missing for question '{question_text}'.")
    if correct_letter not in expected_letters:
        raise QuizImportError(
            f"CORRECT must be one of {', '.join(expected_letters)} (got '{correct_letter}')."
        )
    correct_answer = answer_list[expected_letters.index(correct_letter)]
    if answer_list.count(correct_answer) != 1:
        raise QuizImportError(f"The correct answer '{correct_answer}' appears more than once.")

    return Question(
        question=question_text,
        answers=tuple(answer_list),
        correct_answer=correct_answer,
        source=source if source else default_source,
    )
