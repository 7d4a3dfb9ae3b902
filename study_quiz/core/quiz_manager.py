"""Business logic for managing quizzes and attempts shared between UI and API."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from threading import Lock
from typing import Iterable
from uuid import uuid4

from study_quiz.constants.quiz_constants import MAX_ACTIVE_ATTEMPTS
from study_quiz.core.errors import AttemptNotFoundError
from study_quiz.core.models import Question, QuestionSet, QuizDefinition, Score, TransitionResult
from study_quiz.core.quiz_exporter import save_quiz_to_file
from study_quiz.core.quiz_importer import load_quiz_from_file
from study_quiz.core.services.quiz_repository import QuizRepository
from study_quiz.core.services.quiz_session import QuizSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Attempt:
    quiz_id: str
    session: QuizSession


class QuizManager:
    """Facade over the quiz repository and the running attempts."""

    def __init__(
        self,
        repository: QuizRepository | None = None,
        max_attempts: int = MAX_ACTIVE_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self._lock = Lock()
        self._repository = repository or QuizRepository()
        self._max_attempts = max_attempts
        # Insertion ordered, so the first key is the oldest attempt.
        self._attempts: dict[str, _Attempt] = {}

    # --- Quiz Repository Delegation ---

    def load_quiz_from_questions(
        self,
        quiz_id: str,
        questions: Iterable[Question],
        title: str | None = None,
    ) -> QuizDefinition:
        with self._lock:
            quiz = self._repository.add_quiz(quiz_id, questions, title=title)
            self._discard_attempts_for(quiz.quiz_id)
        logger.info("Loaded quiz '%s' with %d questions", quiz.quiz_id, len(quiz.questions))
        return quiz

    def load_quiz_from_file(self, file_path: Path, quiz_id: str | None = None) -> QuizDefinition:
        imported = load_quiz_from_file(file_path)
        return self.load_quiz_from_questions(
            quiz_id or imported.title,
            imported.questions,
            title=imported.title,
        )

    def load_sample_quiz(self) -> QuizDefinition:
        with self._lock:
            quiz = self._repository.add_sample_quiz()
            self._discard_attempts_for(quiz.quiz_id)
        return quiz

    def list_quizzes(self) -> list[QuizDefinition]:
        with self._lock:
            return self._repository.list_quizzes()

    def get_quiz(self, quiz_id: str) -> QuizDefinition:
        with self._lock:
            return self._repository.get_quiz(quiz_id)

    def fetch_quiz(self, quiz_id: str) -> QuestionSet:
        with self._lock:
            return self._repository.fetch_quiz(quiz_id)

    def has_quiz(self, quiz_id: str) -> bool:
        with self._lock:
            return self._repository.has_quiz(quiz_id)

    def export_quiz(self, quiz_id: str, file_path: Path) -> None:
        """Write a loaded quiz to ``file_path`` in the importer's text format."""
        questions = self.fetch_quiz(quiz_id)
        save_quiz_to_file(file_path, questions)
        logger.info("Exported quiz '%s' to %s", quiz_id, file_path)

    # --- Attempts ---

    def start_attempt(self, quiz_id: str) -> str:
        with self._lock:
            questions = self._repository.fetch_quiz(quiz_id)
            self._evict_oldest_attempts()
            attempt_id = uuid4().hex
            self._attempts[attempt_id] = _Attempt(quiz_id=quiz_id, session=QuizSession(questions))
        logger.info("Started attempt %s on quiz '%s'", attempt_id, quiz_id)
        return attempt_id

    def discard_attempt(self, attempt_id: str) -> None:
        with self._lock:
            if self._attempts.pop(attempt_id, None) is None:
                raise AttemptNotFoundError(f"No attempt with id '{attempt_id}'.")
        logger.info("Discarded attempt %s", attempt_id)

    def get_attempt_count(self) -> int:
        with self._lock:
            return len(self._attempts)

    def get_attempt_quiz_id(self, attempt_id: str) -> str:
        with self._lock:
            return self._require_attempt(attempt_id).quiz_id

    def select_answer(self, attempt_id: str, answer_index: int) -> TransitionResult:
        with self._lock:
            result = self._require_attempt(attempt_id).session.select_answer(answer_index)
        return self._log_result(attempt_id, "select", result)

    def submit_current_answer(self, attempt_id: str) -> TransitionResult:
        with self._lock:
            result = self._require_attempt(attempt_id).session.submit_current_answer()
        return self._log_result(attempt_id, "submit", result)

    def advance(self, attempt_id: str) -> TransitionResult:
        with self._lock:
            session = self._require_attempt(attempt_id).session
            result = session.advance()
            if result.accepted and session.is_complete:
                score = session.score()
                logger.info(
                    "Attempt %s complete: %d/%d correct", attempt_id, score.correct, score.total
                )
        return self._log_result(attempt_id, "advance", result)

    def get_score(self, attempt_id: str) -> Score:
        with self._lock:
            return self._require_attempt(attempt_id).session.score()

    def get_attempt_state(self, attempt_id: str) -> dict[str, object]:
        with self._lock:
            return self._require_attempt(attempt_id).session.to_dict()

    def with_session(self, attempt_id: str, reader):
        """Run ``reader(session)`` under the manager lock and return its result."""
        with self._lock:
            return reader(self._require_attempt(attempt_id).session)

    # --- internals ---

    def _require_attempt(self, attempt_id: str) -> _Attempt:
        attempt = self._attempts.get(attempt_id)
        if attempt is None:
            raise AttemptNotFoundError(f"No attempt with id '{attempt_id}'.")
        return attempt

    def _evict_oldest_attempts(self) -> None:
        while len(self._attempts) >= self._max_attempts:
            oldest = next(iter(self._attempts))
            del self._attempts[oldest]
            logger.info("Evicted attempt %s (limit %d reached)", oldest, self._max_attempts)

    def _discard_attempts_for(self, quiz_id: str) -> None:
        stale = [key for key, attempt in self._attempts.items() if attempt.quiz_id == quiz_id]
        for key in stale:
            del self._attempts[key]
        if stale:
            logger.info("Discarded %d attempt(s) on replaced quiz '%s'", len(stale), quiz_id)

    @staticmethod
    def _log_result(attempt_id: str, operation: str, result: TransitionResult) -> TransitionResult:
        if not result.accepted:
            logger.debug("Attempt %s rejected %s: %s", attempt_id, operation, result.message)
        return result
