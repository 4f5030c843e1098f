"""Choices offered by the option menus of the main window."""

from __future__ import annotations

from enum import Enum


class AlertOption(str, Enum):
    CANCEL = "Cancel"
    PHOTO_LIBRARY = "Photo Library"
    CAMERA = "Camera"
    DOWNLOAD = "Download"
    SAVE = "Save"
    USE_AS_PRIMARY = "Use as primary"
    DELETE = "Delete"


class Titles:
    """User facing strings shared by dialogs and menus."""

    CHOOSE_IMAGE = "Choose image"
    DOWNLOAD_PROMPT = "Type download link"
    DOWNLOAD_PLACEHOLDER = "Enter link here"
    ERROR = "Error"
    WRONG_URL = "Wrong url"
    DOWNLOAD_FAILED = "Download failed"
    SAVE_ERROR = "Save error"
    SAVED = "Saved"
    IMAGE_SAVED = "Image saved"
    OPEN_FAILED = "Unable to open image"
    TAP_TO_CHOOSE = "Click to choose an image"


__all__ = ["AlertOption", "Titles"]
