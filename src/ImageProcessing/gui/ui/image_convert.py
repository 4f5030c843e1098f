"""Conversions between Pillow images and Qt image types."""

from __future__ import annotations

from PIL import Image, ImageQt
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap

from ...core.filters.io import normalise_mode


def pil_to_qimage(image: Image.Image) -> QImage:
    """Return a detached ``ARGB32`` :class:`QImage` copy of *image*."""

    # ``ImageQt`` borrows Pillow's buffer; ``convertToFormat`` makes Qt own a copy.
    wrapped = QImage(ImageQt.ImageQt(normalise_mode(image).convert("RGBA")))
    return wrapped.convertToFormat(QImage.Format.Format_ARGB32)


def qimage_to_pil(image: QImage) -> Image.Image:
    """Return a Pillow copy of *image*."""

    return normalise_mode(ImageQt.fromqimage(image))


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    return QPixmap.fromImage(pil_to_qimage(image))


def make_thumbnail(image: Image.Image, size: int) -> QPixmap:
    """Return a square-bounded pixmap of *image* no larger than *size* pixels."""

    qimage = pil_to_qimage(image)
    scaled = qimage.scaled(
        size,
        size,
        Qt.AspectRatioMode.KeepAspectRatio,
        Qt.TransformationMode.SmoothTransformation,
    )
    if scaled.isNull():
        scaled = qimage
    return QPixmap.fromImage(scaled)


__all__ = ["make_thumbnail", "pil_to_pixmap", "pil_to_qimage", "qimage_to_pil"]
