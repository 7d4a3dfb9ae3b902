"""Application entry point for StudyQuiz."""

from __future__ import annotations

from pathlib import Path
import socket
import sys

from PySide6.QtWidgets import QApplication

from study_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from study_quiz.constants.quiz_constants import DEFAULT_QUIZ_FILE, SAMPLE_QUIZ_ID
from study_quiz.core.errors import QuizImportError
from study_quiz.core.quiz_manager import QuizManager
from study_quiz.core.services.quiz_session import QuizSession
from study_quiz.server.api_server import start_api_server
from study_quiz.ui.quiz_window import QuizWindow
from study_quiz.utils.logging_config import configure_logging


def _determine_quiz_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser quiz page."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def _load_default_quizzes(quiz_manager: QuizManager, logger) -> str:
    """Load the sample quiz plus the working-directory quiz file if present.

    Returns the id of the quiz the desktop window should open.
    """
    quiz_manager.load_sample_quiz()
    default_quiz_path = Path(DEFAULT_QUIZ_FILE)
    if not default_quiz_path.exists():
        return SAMPLE_QUIZ_ID

    try:
        quiz = quiz_manager.load_quiz_from_file(default_quiz_path)
    except (OSError, QuizImportError, ValueError) as exc:
        logger.warning("Could not load %s: %s", default_quiz_path, exc)
        return SAMPLE_QUIZ_ID
    logger.info("Auto-loaded %s (%d questions)", default_quiz_path, len(quiz.questions))
    return quiz.quiz_id


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting StudyQuiz…")

    quiz_manager = QuizManager()
    quiz_id = _load_default_quizzes(quiz_manager, logger)
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    quiz_url = _determine_quiz_url(DEFAULT_PORT)
    logger.info("Quiz page available at %s", quiz_url)

    app = QApplication(sys.argv)
    session = QuizSession(quiz_manager.fetch_quiz(quiz_id))
    window = QuizWindow(
        session=session,
        quiz_manager=quiz_manager,
        quiz_url=quiz_url,
        quiz_id=quiz_id,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
