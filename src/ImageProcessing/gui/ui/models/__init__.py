"""Expose Qt models used by the GUI."""

from .processed_image_model import ProcessedImageListModel, Roles

__all__ = ["ProcessedImageListModel", "Roles"]
