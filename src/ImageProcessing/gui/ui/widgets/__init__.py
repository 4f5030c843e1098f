"""Reusable Qt widgets for the ImageProcessing GUI."""

from .image_view import ClickableImageLabel
from .processed_image_delegate import ProcessedImageDelegate
from .processing_button import ProcessingButton

__all__ = [
    "ClickableImageLabel",
    "ProcessedImageDelegate",
    "ProcessingButton",
]
