"""FastAPI server that exposes quiz attempts to the browser quiz page."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, StrictInt
import uvicorn

from study_quiz.constants.about import APP_NAME, APP_VERSION
from study_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from study_quiz.core.errors import (
    AttemptNotFoundError,
    IllegalStateTransition,
    InvalidArgument,
    QuizNotFoundError,
)
from study_quiz.core.markdown_math_renderer import renderer
from study_quiz.core.models import TransitionResult
from study_quiz.core.quiz_manager import QuizManager
from study_quiz.core.services.quiz_session import (
    QuizSession,
    advance_label,
    answer_highlights,
    completion_message,
    feedback_message,
    progress_label,
)

logger = logging.getLogger(__name__)

_QUIZ_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>StudyQuiz</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #f5f5f5; color: #1e1e1e; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; align-items: center; gap: 1.5rem; }
      .card { background: #fff; border: 2px solid #d1d1d1; border-radius: 0.75rem; padding: 1.5rem; width: 100%; max-width: 32rem; }
      .hidden { display: none; }
      #progress { margin-bottom: 1rem; font-size: 0.9rem; color: #666; }
      #question { margin-bottom: 1rem; font-size: 1.1rem; line-height: 1.6; }
      .answers { list-style: none; padding: 0; display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 0.5rem; }
      .answer { cursor: pointer; padding: 0.6rem; border-radius: 0.4rem; background: #e8e8e8; }
      .answer:hover { background: #d1d1d1; }
      .answer.selected { background: #0078d4; color: #fff; }
      .answer.correct { background: #107c10; color: #fff; }
      .answer.wrong { background: #d13438; color: #fff; }
      button { border: none; border-radius: 0.4rem; padding: 0.6rem 1.2rem; font-size: 1rem; color: #fff; cursor: pointer; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      #submit-button { margin-top: 1rem; background: #107c10; }
      #advance-button { background: #0078d4; }
      #feedback { margin-top: 0.75rem; min-height: 1.25rem; }
      #source { margin-top: 0.5rem; font-size: 0.8rem; color: #666; }
      #completion { text-align: center; }
      #error { color: #d13438; min-height: 1.25rem; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src=\"https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js\"></script>
  </head>
  <body>
    <section class=\"card\" id=\"question-card\">
      <div id=\"progress\"></div>
      <div id=\"question\">Loading quiz…</div>
      <p>Choose the correct answer:</p>
      <ul id=\"answers\" class=\"answers\"></ul>
      <button id=\"submit-button\" disabled>Submit Answer</button>
      <p id=\"feedback\"></p>
      <p id=\"source\"></p>
    </section>
    <button id=\"advance-button\" class=\"hidden\"></button>
    <section class=\"card hidden\" id=\"completion\">
      <h2>Quiz Complete!</h2>
      <p id=\"completion-message\"></p>
    </section>
    <p id=\"error\"></p>
    <script>
      const questionCard = document.getElementById('question-card');
      const progressEl = document.getElementById('progress');
      const questionEl = document.getElementById('question');
      const answersEl = document.getElementById('answers');
      const submitButton = document.getElementById('submit-button');
      const feedbackEl = document.getElementById('feedback');
      const sourceEl = document.getElementById('source');
      const advanceButton = document.getElementById('advance-button');
      const completionCard = document.getElementById('completion');
      const completionMessage = document.getElementById('completion-message');
      const errorEl = document.getElementById('error');

      let attemptId = null;

      function setVisibility(element, isVisible) {
        if (isVisible) {
          element.classList.remove('hidden');
        } else {
          element.classList.add('hidden');
        }
      }

      function typeset() {
        if (window.MathJax && window.MathJax.typesetPromise) {
          window.MathJax.typesetPromise();
        }
      }

      function render(state) {
        errorEl.textContent = '';
        const complete = state.phase === 'complete';
        setVisibility(questionCard, !complete);
        setVisibility(completionCard, complete);
        setVisibility(advanceButton, state.phase === 'graded');
        if (complete) {
          completionMessage.textContent = state.completion_message;
          return;
        }
        const question = state.question;
        progressEl.textContent = state.progress_label;
        questionEl.innerHTML = question.question_html;
        answersEl.innerHTML = '';
        question.answers.forEach((answerHtml, index) => {
          const item = document.createElement('li');
          item.className = 'answer ' + question.highlights[index];
          item.innerHTML = answerHtml;
          item.addEventListener('click', () => send('select', { answer_index: index }));
          answersEl.appendChild(item);
        });
        submitButton.disabled = state.phase !== 'answering' || question.selected_answer === null;
        feedbackEl.textContent = state.feedback || '';
        sourceEl.textContent = question.source ? 'Source: ' + question.source : '';
        advanceButton.textContent = state.advance_label || '';
        typeset();
      }

      async function send(action, body) {
        if (!attemptId) return;
        const response = await fetch('/attempts/' + attemptId + '/' + action, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body ? JSON.stringify(body) : null
        });
        const payload = await response.json();
        if (response.ok) {
          render(payload);
        } else if (response.status !== 409) {
          errorEl.textContent = payload.detail ?? 'Request failed.';
        }
      }

      async function startAttempt() {
        try {
          const params = new URLSearchParams(window.location.search);
          let quizId = params.get('quiz');
          if (!quizId) {
            const quizzes = await (await fetch('/quizzes')).json();
            if (!quizzes.length) {
              questionEl.textContent = 'No quizzes are available.';
              return;
            }
            quizId = quizzes[0].quiz_id;
          }
          const response = await fetch('/attempts', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ quiz_id: quizId })
          });
          const payload = await response.json();
          if (!response.ok) {
            questionEl.textContent = payload.detail ?? 'Unable to start the quiz.';
            return;
          }
          attemptId = payload.attempt_id;
          render(payload);
        } catch (error) {
          console.error('Error starting quiz:', error);
          questionEl.textContent = 'Unable to reach the quiz server.';
        }
      }

      submitButton.addEventListener('click', () => send('submit'));
      window.addEventListener('pagehide', () => {
        if (attemptId) {
          fetch('/attempts/' + attemptId, { method: 'DELETE', keepalive: true });
        }
      });
      advanceButton.addEventListener('click', () => send('advance'));
      startAttempt();
    </script>
  </body>
</html>
"""


class StartAttemptPayload(BaseModel):
    """Payload schema for starting an attempt."""

    quiz_id: str


class SelectAnswerPayload(BaseModel):
    """Payload schema for choosing an answer."""

    answer_index: StrictInt


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _describe_session(session: QuizSession) -> dict[str, object]:
    """Session state plus everything the quiz page needs to draw it."""
    state = session.to_dict()
    question = session.current_question
    state["progress_label"] = progress_label(session)
    state["feedback"] = feedback_message(session)
    state["advance_label"] = None if session.is_complete else advance_label(session)
    state["completion_message"] = completion_message(session) if session.is_complete else None
    if question is None:
        state["question"] = None
        return state

    state["question"] = {
        "question_html": renderer.render_fragment(question.question),
        "answers": [renderer.render_inline(answer) for answer in question.answers],
        "source": question.source,
        "selected_answer": session.selected_answer(),
        "highlights": [highlight.value for highlight in answer_highlights(session)],
        # Only revealed once the answer is locked in.
        "correct_answer": question.correct_answer if session.is_submitted else None,
    }
    return state


def _raise_for_rejection(result: TransitionResult) -> None:
    try:
        result.raise_for_rejection()
    except InvalidArgument as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except IllegalStateTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    def attempt_state(manager: QuizManager, attempt_id: str) -> dict[str, object]:
        try:
            state = manager.with_session(attempt_id, _describe_session)
            quiz_id = manager.get_attempt_quiz_id(attempt_id)
        except AttemptNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"attempt_id": attempt_id, "quiz_id": quiz_id, **state}

    def apply(manager: QuizManager, attempt_id: str, operation) -> dict[str, object]:
        try:
            result = operation()
        except AttemptNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        _raise_for_rejection(result)
        return attempt_state(manager, attempt_id)

    @app.get("/", response_class=HTMLResponse)
    def serve_quiz_page() -> str:
        return _QUIZ_PAGE_HTML

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/quizzes")
    def list_quizzes(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [
            {
                "quiz_id": quiz.quiz_id,
                "title": quiz.title,
                "question_count": len(quiz.questions),
            }
            for quiz in manager.list_quizzes()
        ]

    @app.get("/quizzes/{quiz_id}")
    def get_quiz(quiz_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            quiz = manager.get_quiz(quiz_id)
        except QuizNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {
            "quiz_id": quiz.quiz_id,
            "title": quiz.title,
            "questions": [
                {
                    "question_html": renderer.render_fragment(question.question),
                    "answers": [renderer.render_inline(answer) for answer in question.answers],
                    "source": question.source,
                }
                for question in quiz.questions
            ],
        }

    @app.post("/attempts", status_code=201)
    def start_attempt(
        payload: StartAttemptPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            attempt_id = manager.start_attempt(payload.quiz_id)
        except QuizNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return attempt_state(manager, attempt_id)

    @app.get("/attempts/{attempt_id}")
    def get_attempt(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return attempt_state(manager, attempt_id)

    @app.post("/attempts/{attempt_id}/select")
    def select_answer(
        attempt_id: str,
        payload: SelectAnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        return apply(
            manager,
            attempt_id,
            lambda: manager.select_answer(attempt_id, payload.answer_index),
        )

    @app.post("/attempts/{attempt_id}/submit")
    def submit_answer(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, attempt_id, lambda: manager.submit_current_answer(attempt_id))

    @app.post("/attempts/{attempt_id}/advance")
    def advance(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return apply(manager, attempt_id, lambda: manager.advance(attempt_id))

    @app.get("/attempts/{attempt_id}/score")
    def get_score(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            score = manager.get_score(attempt_id)
        except AttemptNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"correct": score.correct, "total": score.total, "percentage": score.percentage}

    @app.delete("/attempts/{attempt_id}", status_code=204)
    def discard_attempt(attempt_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> Response:
        try:
            manager.discard_attempt(attempt_id)
        except AttemptNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(status_code=204)

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    logger.info("API server listening on %s:%d", host, port)
    return thread
