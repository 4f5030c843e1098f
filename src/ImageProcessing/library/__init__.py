"""Persistence of processed images."""

from .photo_library import PhotoLibrary, SaveOutcome

__all__ = ["PhotoLibrary", "SaveOutcome"]
