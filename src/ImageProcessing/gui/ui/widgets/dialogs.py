"""Reusable dialog helpers for the desktop UI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtGui import QCursor, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QInputDialog,
    QLineEdit,
    QMenu,
    QMessageBox,
    QWidget,
)

from ..alert_option import AlertOption, Titles

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tif *.tiff *.webp)"


def _apply_theme(box: QMessageBox, parent: Optional[QWidget]) -> None:
    """Apply the active theme colors to the message box."""
    if parent:
        palette = parent.palette()
    else:
        palette = QApplication.palette()

    bg_color = palette.color(QPalette.ColorRole.Window).name()
    text_color = palette.color(QPalette.ColorRole.WindowText).name()

    stylesheet = (
        f"QMessageBox {{ background-color: {bg_color}; color: {text_color}; }}"
        f"QLabel {{ color: {text_color}; }}"
    )
    box.setStyleSheet(stylesheet)


def show_error(parent: QWidget, message: str, *, title: str = Titles.ERROR) -> None:
    """Display a blocking error message."""

    box = QMessageBox(QMessageBox.Icon.Critical, title, message, QMessageBox.StandardButton.Ok, parent)
    _apply_theme(box, parent)
    box.exec()


def show_information(parent: QWidget, message: str, *, title: str) -> None:
    """Display an informational message box."""

    box = QMessageBox(QMessageBox.Icon.Information, title, message, QMessageBox.StandardButton.Ok, parent)
    _apply_theme(box, parent)
    box.exec()


def ask_download_url(parent: QWidget, initial: str = "") -> Optional[str]:
    """Prompt for a download link; ``None`` when the user cancels."""

    dialog = QInputDialog(parent)
    dialog.setWindowTitle(Titles.DOWNLOAD_PROMPT)
    dialog.setLabelText(Titles.DOWNLOAD_PROMPT)
    dialog.setTextEchoMode(QLineEdit.EchoMode.Normal)
    dialog.setTextValue(initial)
    dialog.setOkButtonText(AlertOption.DOWNLOAD.value)
    dialog.setCancelButtonText(AlertOption.CANCEL.value)
    line_edit = dialog.findChild(QLineEdit)
    if line_edit is not None:
        line_edit.setPlaceholderText(Titles.DOWNLOAD_PLACEHOLDER)
    if not dialog.exec():
        return None
    return dialog.textValue()


def choose_image_file(parent: QWidget, start: Optional[Path] = None) -> Optional[Path]:
    """Return an image file selected by the user or ``None`` when cancelled."""

    directory = str(start) if start is not None else ""
    path, _ = QFileDialog.getOpenFileName(parent, Titles.CHOOSE_IMAGE, directory, IMAGE_FILE_FILTER)
    if not path:
        return None
    return Path(path)


def choose_option(
    parent: QWidget,
    options: Sequence[AlertOption],
    *,
    title: Optional[str] = None,
) -> AlertOption:
    """Pop up a menu listing *options* at the cursor and return the choice.

    Dismissing the menu counts as :attr:`AlertOption.CANCEL`.
    """

    menu = QMenu(parent)
    if title:
        menu.setTitle(title)
        header = menu.addAction(title)
        header.setEnabled(False)
        menu.addSeparator()
    actions = {}
    for option in options:
        if option is AlertOption.CANCEL:
            menu.addSeparator()
        action = menu.addAction(option.value)
        actions[action] = option
    chosen = menu.exec(QCursor.pos())
    return actions.get(chosen, AlertOption.CANCEL)


__all__ = [
    "ask_download_url",
    "choose_image_file",
    "choose_option",
    "show_error",
    "show_information",
]
