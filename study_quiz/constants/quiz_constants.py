"""Quiz-related constants shared across UI and core layers."""

SAMPLE_QUIZ_ID: str = "sample"
SAMPLE_QUIZ_TITLE: str = "Week 1 review"
DEFAULT_QUIZ_FILE: str = "quiz_questions.txt"

MIN_ANSWER_COUNT: int = 2
MAX_ANSWER_COUNT: int = 8

# Oldest attempts are dropped once this many are held in memory.
MAX_ACTIVE_ATTEMPTS: int = 500
