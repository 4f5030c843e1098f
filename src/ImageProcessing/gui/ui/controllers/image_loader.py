"""Controller managing the single active image download."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from PIL import Image
from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from ..tasks.image_download_worker import ImageDownloadWorker

LOGGER = logging.getLogger(__name__)


class ImageLoader(QObject):
    """Start, cancel and supersede image downloads.

    Each download gets a new generation number.  Signals from workers of an
    older generation are dropped, so a cancelled transfer that still manages
    to finish never replaces the image of a newer request.
    """

    progressChanged = Signal(float)
    imageLoaded = Signal(object)
    downloadFailed = Signal(str)
    downloadCancelled = Signal()
    activeChanged = Signal(bool)

    def __init__(
        self,
        *,
        thread_pool: Optional[QThreadPool] = None,
        session: Optional[requests.Session] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()
        self._session = session
        self._generation = 0
        self._active: Optional[ImageDownloadWorker] = None
        # Superseded workers stay referenced until they report ``finished``.
        self._retired: dict[int, ImageDownloadWorker] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def active_worker(self) -> Optional[ImageDownloadWorker]:
        return self._active

    def is_active(self) -> bool:
        return self._active is not None

    def download_image(self, url: str) -> int:
        """Cancel any running transfer and start downloading *url*."""

        self.cancel()
        self._generation += 1
        worker = ImageDownloadWorker(url, generation=self._generation, session=self._session)
        worker.signals.progress.connect(self._handle_progress)
        worker.signals.ready.connect(self._handle_ready)
        worker.signals.error.connect(self._handle_error)
        worker.signals.cancelled.connect(self._handle_cancelled)
        worker.signals.finished.connect(self._handle_finished)
        self._active = worker
        LOGGER.info("Downloading image from %s", url)
        self.activeChanged.emit(True)
        self._pool.start(worker)
        return self._generation

    def cancel(self) -> bool:
        """Cancel the active download; returns ``True`` when one was running."""

        worker = self._active
        if worker is None:
            return False
        worker.cancel()
        self._retired[worker.generation] = worker
        self._active = None
        LOGGER.info("Cancelled download of %s", worker.url)
        self.activeChanged.emit(False)
        return True

    # ------------------------------------------------------------------
    # Worker callbacks
    # ------------------------------------------------------------------
    def _is_current(self, generation: int) -> bool:
        return self._active is not None and generation == self._active.generation

    @Slot(int, float)
    def _handle_progress(self, generation: int, progress: float) -> None:
        if self._is_current(generation):
            self.progressChanged.emit(max(0.0, min(1.0, progress)))

    @Slot(int, object)
    def _handle_ready(self, generation: int, image: object) -> None:
        if not self._is_current(generation) or not isinstance(image, Image.Image):
            return
        self._finish_active()
        self.imageLoaded.emit(image)

    @Slot(int, str)
    def _handle_error(self, generation: int, message: str) -> None:
        if not self._is_current(generation):
            return
        self._finish_active()
        self.downloadFailed.emit(message)

    @Slot(int)
    def _handle_cancelled(self, generation: int) -> None:
        if not self._is_current(generation):
            return
        self._finish_active()
        self.downloadCancelled.emit()

    @Slot(int)
    def _handle_finished(self, generation: int) -> None:
        self._retired.pop(generation, None)
        if self._is_current(generation):
            self._finish_active()

    def _finish_active(self) -> None:
        if self._active is None:
            return
        self._active = None
        self.activeChanged.emit(False)


__all__ = ["ImageLoader"]
