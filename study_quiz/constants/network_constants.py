"""Network configuration constants for the quiz application."""

import os

DEFAULT_HOST: str = os.environ.get("STUDY_QUIZ_HOST", "0.0.0.0")
DEFAULT_PORT: int = int(os.environ.get("STUDY_QUIZ_PORT", "8000"))
