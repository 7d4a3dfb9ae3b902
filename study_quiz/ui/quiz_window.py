"""Qt main window that lets a student work through one quiz attempt."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from study_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from study_quiz.constants.ui_constants import (
    ABOUT_BUTTON_TEXT,
    DEFAULT_FONT_SIZE,
    EMPTY_QUIZ_MESSAGE,
    EXPORT_BUTTON_TEXT,
    EXPORT_DEFAULT_FILE_NAME,
    EXPORT_DIALOG_TITLE,
    HELP_BUTTON_TEXT,
    IMPORT_BUTTON_TEXT,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    INSTRUCTION_TEXT,
    QUIZ_COMPLETE_MESSAGE,
    RESTART_BUTTON_TEXT,
    SUBMIT_BUTTON_TEXT,
    WINDOW_MIN_WIDTH,
    WINDOW_TITLE,
)
from study_quiz.core.errors import QuizImportError, QuizNotFoundError
from study_quiz.core.markdown_math_renderer import renderer
from study_quiz.core.quiz_exporter import save_quiz_to_file
from study_quiz.core.quiz_importer import load_quiz_from_file
from study_quiz.core.quiz_manager import QuizManager
from study_quiz.core.services.quiz_session import (
    QuizSession,
    SessionPhase,
    advance_label,
    answer_highlights,
    completion_message,
    feedback_message,
    progress_label,
)
from study_quiz.styling.styles import Styles
from study_quiz.ui.dialog_helpers import confirm_restart_quiz, show_error, show_info

logger = logging.getLogger(__name__)


def answer_button_text(answer: str) -> str:
    """Escape '&' so Qt shows it instead of treating it as a shortcut marker."""
    return answer.replace("&", "&&")


class QuizWindow(QMainWindow):
    """Renders a ``QuizSession`` and forwards clicks to it.

    The window owns no quiz state of its own: it subscribes to the session and
    redraws everything whenever a transition is accepted.
    """

    def __init__(
        self,
        session: QuizSession,
        quiz_manager: QuizManager | None = None,
        quiz_url: str | None = None,
        quiz_id: str | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumWidth(WINDOW_MIN_WIDTH)

        self.session = session
        self.quiz_manager = quiz_manager
        self.quiz_url = quiz_url
        self.quiz_id = quiz_id
        self.answer_buttons: list[QPushButton] = []

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self._unsubscribe = self.session.subscribe(self._on_session_changed)
        self.refresh()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_toolbar(root_layout)

        if self.quiz_url:
            self.url_label = QLabel(f"Also available in the browser at {self.quiz_url}", self)
            self.url_label.setStyleSheet(Styles.get_progress_label_style())
            root_layout.addWidget(self.url_label)

        self.progress_label = QLabel("", self)
        self.progress_label.setStyleSheet(Styles.get_progress_label_style())
        root_layout.addWidget(self.progress_label)

        self.question_label = QLabel("", self)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setWordWrap(True)
        self.question_label.setStyleSheet(f"font-size: {DEFAULT_FONT_SIZE}pt;")
        root_layout.addWidget(self.question_label)

        self.instruction_label = QLabel(INSTRUCTION_TEXT, self)
        root_layout.addWidget(self.instruction_label)

        self.answer_grid = QGridLayout()
        root_layout.addLayout(self.answer_grid)

        self.submit_button = QPushButton(SUBMIT_BUTTON_TEXT, self)
        self.submit_button.clicked.connect(self._handle_submit)
        root_layout.addWidget(self.submit_button)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setWordWrap(True)
        root_layout.addWidget(self.feedback_label)

        self.source_label = QLabel("", self)
        self.source_label.setStyleSheet(Styles.get_progress_label_style())
        root_layout.addWidget(self.source_label)

        self.advance_button = QPushButton("", self)
        self.advance_button.clicked.connect(self._handle_advance)
        root_layout.addWidget(self.advance_button)

        self.completion_label = QLabel("", self)
        self.completion_label.setAlignment(Qt.AlignCenter)
        self.completion_label.setWordWrap(True)
        self.completion_label.setStyleSheet(Styles.get_large_label_style())
        root_layout.addWidget(self.completion_label)

        root_layout.addStretch()

    def _build_toolbar(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.import_button = QPushButton(IMPORT_BUTTON_TEXT, self)
        self.import_button.clicked.connect(self._handle_import_quiz)
        button_row.addWidget(self.import_button)

        self.export_button = QPushButton(EXPORT_BUTTON_TEXT, self)
        self.export_button.clicked.connect(self._handle_export_quiz)
        button_row.addWidget(self.export_button)

        self.restart_button = QPushButton(RESTART_BUTTON_TEXT, self)
        self.restart_button.clicked.connect(self._handle_restart)
        button_row.addWidget(self.restart_button)

        button_row.addStretch()

        self.about_button = QPushButton(ABOUT_BUTTON_TEXT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton(HELP_BUTTON_TEXT, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    # --- Rendering ---

    def _on_session_changed(self, _session: QuizSession) -> None:
        self.refresh()

    def refresh(self) -> None:
        """Redraw every widget from the current session state."""
        phase = self.session.phase
        complete = phase == SessionPhase.COMPLETE
        question = self.session.current_question

        for widget in (
            self.progress_label,
            self.question_label,
            self.instruction_label,
            self.submit_button,
            self.feedback_label,
            self.source_label,
        ):
            widget.setVisible(not complete)
        self.advance_button.setVisible(phase == SessionPhase.GRADED)
        self.completion_label.setVisible(complete)

        if question is None:
            self._rebuild_answer_buttons([])
            if self.session.questions:
                self.completion_label.setText(
                    f"{QUIZ_COMPLETE_MESSAGE}\n{completion_message(self.session)}"
                )
            else:
                self.completion_label.setText(EMPTY_QUIZ_MESSAGE)
            return

        self.progress_label.setText(progress_label(self.session) or "")
        self.question_label.setText(renderer.render_fragment(question.question))
        self._rebuild_answer_buttons(list(question.answers))
        for button, highlight in zip(self.answer_buttons, answer_highlights(self.session)):
            button.setStyleSheet(Styles.get_answer_button_style(highlight))
            button.setEnabled(phase == SessionPhase.ANSWERING)

        self.submit_button.setEnabled(
            phase == SessionPhase.ANSWERING and self.session.selected_answer() is not None
        )
        self.feedback_label.setText(feedback_message(self.session) or "")
        self.source_label.setText(f"Source: {question.source}" if question.source else "")
        self.advance_button.setText(advance_label(self.session))

    def _rebuild_answer_buttons(self, answers: list[str]) -> None:
        labels = [answer_button_text(answer) for answer in answers]
        if [button.text() for button in self.answer_buttons] == labels:
            return
        for button in self.answer_buttons:
            self.answer_grid.removeWidget(button)
            button.deleteLater()
        self.answer_buttons = []
        for index, label in enumerate(labels):
            button = QPushButton(label, self)
            button.clicked.connect(lambda _checked=False, i=index: self._handle_answer_click(i))
            self.answer_grid.addWidget(button, index // 2, index % 2)
            self.answer_buttons.append(button)

    # --- Event handlers ---

    def _handle_answer_click(self, answer_index: int) -> None:
        self.session.select_answer(answer_index)

    def _handle_submit(self) -> None:
        self.session.submit_current_answer()

    def _handle_advance(self) -> None:
        result = self.session.advance()
        if result.accepted and self.session.is_complete:
            score = self.session.score()
            logger.info("Quiz finished with %d/%d correct", score.correct, score.total)

    def _handle_restart(self) -> None:
        if self.session.selected_answers and not self.session.is_complete:
            if not confirm_restart_quiz(self):
                return
        self.session.reset()

    def _handle_import_quiz(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            imported = load_quiz_from_file(Path(file_path))
        except (OSError, QuizImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return

        questions = imported.questions
        if self.quiz_manager is not None:
            try:
                quiz = self.quiz_manager.load_quiz_from_questions(
                    imported.title, questions, title=imported.title
                )
            except ValueError as exc:
                show_error(self, "Quiz rejected", str(exc))
                return
            questions = list(quiz.questions)
            self.quiz_id = quiz.quiz_id

        self.session.reset(questions)
        logger.info("Imported %d questions from %s", len(questions), file_path)

    def _handle_export_quiz(self) -> None:
        if not self.session.questions:
            show_error(self, "Export failed", EMPTY_QUIZ_MESSAGE)
            return

        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(Path.home() / EXPORT_DEFAULT_FILE_NAME),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            if self.quiz_manager is not None and self.quiz_id is not None:
                self.quiz_manager.export_quiz(self.quiz_id, Path(file_path))
            else:
                save_quiz_to_file(Path(file_path), self.session.questions)
        except (OSError, ValueError, QuizNotFoundError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        count = len(self.session.questions)
        show_info(self, "Quiz exported", f"Saved {count} questions to {file_path}")
        logger.info("Exported %d questions to %s", count, file_path)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self._unsubscribe()
        super().closeEvent(event)
