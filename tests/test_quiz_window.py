from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtWidgets")

from study_quiz.ui.quiz_window import answer_button_text  # noqa: E402


@pytest.mark.parametrize(
    ("answer", "label"),
    [
        ("Paris", "Paris"),
        ("A & B", "A && B"),
        ("R&D && QA", "R&&D &&&& QA"),
    ],
)
def test_answer_button_text_escapes_ampersands(answer: str, label: str):
    assert answer_button_text(answer) == label
