"""Exception hierarchy shared by the ImageProcessing modules."""

from __future__ import annotations


class ImageProcessingError(Exception):
    """Base class for all application specific failures."""


class UnknownModificationError(ImageProcessingError, ValueError):
    """Raised when a value does not name a supported modification."""


class InvalidURLError(ImageProcessingError, ValueError):
    """Raised when the text typed by the user is not a downloadable URL."""


class DownloadError(ImageProcessingError):
    """Raised when an image download fails mid-transfer."""


class DownloadCancelledError(DownloadError):
    """Raised when an in-flight download has been cancelled."""


class ImageDecodeError(ImageProcessingError):
    """Raised when image data cannot be decoded by Pillow."""


class SaveError(ImageProcessingError):
    """Raised when writing an image into the photo library fails."""


class SettingsInvalidError(ImageProcessingError):
    """Raised when the persisted settings file cannot be parsed."""
