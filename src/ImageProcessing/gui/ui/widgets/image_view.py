"""Primary image view that doubles as the "choose image" tap target."""

from __future__ import annotations

from typing import Optional

from PIL import Image
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent, QPixmap, QResizeEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from .... import config
from ..image_convert import pil_to_pixmap


class ClickableImageLabel(QLabel):
    """Display the primary image scaled to fit and emit ``clicked`` on release."""

    clicked = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._image: Optional[Image.Image] = None
        self._pixmap: Optional[QPixmap] = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumHeight(config.PRIMARY_VIEW_MIN_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def image(self) -> Optional[Image.Image]:
        return self._image

    def set_image(self, image: Optional[Image.Image]) -> None:
        """Show *image*, or clear the view when ``None`` is given."""

        self._image = image
        self._pixmap = pil_to_pixmap(image) if image is not None else None
        self._refresh()

    def _refresh(self) -> None:
        if self._pixmap is None or self._pixmap.isNull():
            self.clear()
            return
        scaled = self._pixmap.scaled(
            self.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.setPixmap(scaled)

    # ------------------------------------------------------------------
    # QWidget overrides
    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mouseReleaseEvent(event)

    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._refresh()


__all__ = ["ClickableImageLabel"]
