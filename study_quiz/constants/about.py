"""Static metadata describing StudyQuiz."""

APP_NAME = "StudyQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "StudyQuiz runs short multiple-choice review quizzes built from course material. "
    "Answer each question, submit it to see whether you were right, then move on to the next one."
)

HELP_TEXT = (
    "Quizzes are plain .txt files. Separate questions with a blank line or '---':\n\n"
    "Q: What is the capital of France?\n"
    "A: Paris\nB: Lyon\nC: Nice\n"
    "CORRECT: A\nSOURCE: slides-week-1.pdf\n\n"
    "Q: What is $2 + 2$?\n"
    "A: 3\nB: 4\n"
    "CORRECT: B"
)
