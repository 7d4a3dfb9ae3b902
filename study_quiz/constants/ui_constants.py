"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "StudyQuiz"
WINDOW_MIN_WIDTH: int = 640
DEFAULT_FONT_SIZE: int = 14

INSTRUCTION_TEXT: str = "Choose the correct answer:"
SUBMIT_BUTTON_TEXT: str = "Submit Answer"
RESTART_BUTTON_TEXT: str = "Restart Quiz"
IMPORT_BUTTON_TEXT: str = "Import Quiz"
ABOUT_BUTTON_TEXT: str = "About"
HELP_BUTTON_TEXT: str = "Help"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"

QUIZ_COMPLETE_MESSAGE: str = "Quiz Complete!"
EMPTY_QUIZ_MESSAGE: str = "This quiz has no questions."

EXPORT_BUTTON_TEXT: str = "Export Quiz"
EXPORT_DIALOG_TITLE: str = "Save quiz file"
EXPORT_DEFAULT_FILE_NAME: str = "quiz_export.txt"
