"""Minimal dialog capturing a single still frame from the default camera."""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image
from PySide6.QtGui import QImage
from PySide6.QtMultimedia import QCamera, QImageCapture, QMediaCaptureSession, QMediaDevices
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QVBoxLayout, QWidget

from ..alert_option import AlertOption
from ..image_convert import qimage_to_pil

_LOGGER = logging.getLogger(__name__)


def camera_available() -> bool:
    """Return ``True`` when at least one video input device is present."""

    try:
        return len(QMediaDevices.videoInputs()) > 0
    except (RuntimeError, TypeError):
        return False


class CameraCaptureDialog(QDialog):
    """Preview the default camera and return the frame taken on "Capture"."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(AlertOption.CAMERA.value)
        self._captured: Optional[Image.Image] = None

        self._camera = QCamera(QMediaDevices.defaultVideoInput(), self)
        self._capture = QImageCapture(self)
        self._session = QMediaCaptureSession(self)
        self._preview = QVideoWidget(self)
        self._session.setCamera(self._camera)
        self._session.setImageCapture(self._capture)
        self._session.setVideoOutput(self._preview)

        buttons = QDialogButtonBox(self)
        self._capture_button = buttons.addButton("Capture", QDialogButtonBox.ButtonRole.AcceptRole)
        buttons.addButton(AlertOption.CANCEL.value, QDialogButtonBox.ButtonRole.RejectRole)
        self._capture_button.clicked.connect(self._handle_capture_clicked)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(self._preview)
        layout.addWidget(buttons)

        self._capture.imageCaptured.connect(self._handle_image_captured)
        self._capture.errorOccurred.connect(self._handle_capture_error)

    def captured_image(self) -> Optional[Image.Image]:
        return self._captured

    def exec(self) -> int:  # type: ignore[override]
        self._camera.start()
        try:
            return super().exec()
        finally:
            self._camera.stop()

    # ------------------------------------------------------------------
    def _handle_capture_clicked(self) -> None:
        if not self._capture.isReadyForCapture():
            return
        self._capture_button.setEnabled(False)
        self._capture.capture()

    def _handle_image_captured(self, _request_id: int, frame: QImage) -> None:
        self._captured = qimage_to_pil(frame)
        self.accept()

    def _handle_capture_error(self, _request_id: int, _error: object, message: str) -> None:
        _LOGGER.warning("Camera capture failed: %s", message)
        self._capture_button.setEnabled(True)


def capture_from_camera(parent: QWidget) -> Optional[Image.Image]:
    """Run :class:`CameraCaptureDialog` and return the captured frame, if any."""

    dialog = CameraCaptureDialog(parent)
    if not dialog.exec():
        return None
    return dialog.captured_image()


__all__ = ["CameraCaptureDialog", "camera_available", "capture_from_camera"]
