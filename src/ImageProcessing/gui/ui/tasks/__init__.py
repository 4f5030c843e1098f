"""Background worker helpers for GUI tasks."""

from .image_download_worker import ImageDownloadSignals, ImageDownloadWorker
from .modification_worker import ModificationSignals, ModificationWorker

__all__ = [
    "ImageDownloadSignals",
    "ImageDownloadWorker",
    "ModificationSignals",
    "ModificationWorker",
]
