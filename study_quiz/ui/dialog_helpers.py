"""Helper functions for common dialog patterns in the quiz window."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_restart_quiz(parent: QWidget) -> bool:
    """Ask before throwing away the progress of the current attempt.

    Args:
        parent: Parent widget for the dialog

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Restart Quiz",
        "Your answers so far will be discarded. Continue?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    QMessageBox.information(parent, title, message)
