"""Background worker that applies a modification off the GUI thread."""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image
from PySide6.QtCore import QObject, QRunnable, Signal

from ....core.filters import apply_modification
from ....core.modification import Modification

LOGGER = logging.getLogger(__name__)


class ModificationSignals(QObject):
    """Signals emitted by :class:`ModificationWorker`."""

    progress = Signal(int, float)
    """Emitted with the job identifier and the normalised progress."""

    ready = Signal(int, object)
    """Emitted with the job identifier and the processed Pillow image."""

    error = Signal(int, str)
    """Emitted if the modification raised."""

    finished = Signal(int)
    """Emitted once the worker has completed, even on failure."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class ModificationWorker(QRunnable):
    """Run :func:`apply_modification` inside a :class:`QThreadPool`."""

    def __init__(
        self,
        source_image: Image.Image,
        modification: Modification,
        *,
        job_id: int,
        band_height: Optional[int] = None,
        backend: Optional[str] = None,
    ) -> None:
        super().__init__()
        # The controller keeps the worker until ``finished``; Qt must not delete it.
        self.setAutoDelete(False)

        # Work on a private copy so the GUI thread can keep displaying or
        # replacing the primary image while the job runs.
        self._source_image = source_image.copy()
        self._modification = modification
        self._job_id = int(job_id)
        self._band_height = band_height
        self._backend = backend
        self.signals = ModificationSignals()

    @property
    def job_id(self) -> int:
        return self._job_id

    # ------------------------------------------------------------------
    def run(self) -> None:  # type: ignore[override]
        """Apply the modification and report the outcome."""

        try:
            result = apply_modification(
                self._source_image,
                self._modification,
                progress=self._emit_progress,
                band_height=self._band_height,
                backend=self._backend,
            )
            self.signals.ready.emit(self._job_id, result)
        except Exception as exc:  # pragma: no cover - defensive logging path
            LOGGER.exception("Applying %s failed", self._modification.value)
            self.signals.error.emit(self._job_id, str(exc) or exc.__class__.__name__)
        finally:
            self.signals.finished.emit(self._job_id)

    def _emit_progress(self, value: float) -> None:
        self.signals.progress.emit(self._job_id, float(value))


__all__ = ["ModificationSignals", "ModificationWorker"]
