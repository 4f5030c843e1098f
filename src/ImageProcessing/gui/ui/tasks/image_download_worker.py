"""Background worker downloading an image with progress updates."""

from __future__ import annotations

import logging
import threading
from typing import Optional

import requests
from PySide6.QtCore import QObject, QRunnable, Signal

from ....errors import DownloadCancelledError, ImageProcessingError
from ....net.downloader import download_image

LOGGER = logging.getLogger(__name__)


class ImageDownloadSignals(QObject):
    """Signals emitted by :class:`ImageDownloadWorker`."""

    progress = Signal(int, float)
    """Emitted with the generation and the fraction of bytes received."""

    ready = Signal(int, object)
    """Emitted with the generation and the decoded Pillow image."""

    cancelled = Signal(int)
    error = Signal(int, str)

    finished = Signal(int)
    """Emitted after every terminal event."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class ImageDownloadWorker(QRunnable):
    """Fetch *url* on a pool thread; :meth:`cancel` may be called from any thread."""

    def __init__(
        self,
        url: str,
        *,
        generation: int,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__()
        # The loader keeps a reference to cancel the job, so Qt must not delete it.
        self.setAutoDelete(False)
        self._url = url
        self._generation = int(generation)
        self._session = session
        self._cancel_event = threading.Event()
        self.signals = ImageDownloadSignals()

    @property
    def url(self) -> str:
        return self._url

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        self._cancel_event.set()

    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    # ------------------------------------------------------------------
    def run(self) -> None:  # type: ignore[override]
        try:
            image = download_image(
                self._url,
                on_progress=self._emit_progress,
                cancel_event=self._cancel_event,
                session=self._session,
            )
        except DownloadCancelledError:
            LOGGER.info("Download cancelled: %s", self._url)
            self.signals.cancelled.emit(self._generation)
        except ImageProcessingError as exc:
            LOGGER.warning("Download of %s failed: %s", self._url, exc)
            self.signals.error.emit(self._generation, str(exc))
        except Exception as exc:  # pragma: no cover - defensive logging path
            LOGGER.exception("Unexpected failure while downloading %s", self._url)
            self.signals.error.emit(self._generation, str(exc))
        else:
            self.signals.ready.emit(self._generation, image)
        finally:
            self.signals.finished.emit(self._generation)

    def _emit_progress(self, value: float) -> None:
        self.signals.progress.emit(self._generation, float(value))


__all__ = ["ImageDownloadSignals", "ImageDownloadWorker"]
