"""Controller owning the processed image list and the modification jobs."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from PIL import Image
from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from ....core.modification import Modification
from ....core.processed_image import ProcessedImage, RowUpdateMode
from ..models.processed_image_model import ProcessedImageListModel
from ..tasks.modification_worker import ModificationWorker

LOGGER = logging.getLogger(__name__)

CompletionCallback = Callable[[Optional[int], RowUpdateMode], None]


class ProcessingController(QObject):
    """Apply modifications in the background and keep the result list in sync.

    Workers only ever see a job identifier.  Every mutation of the list model
    happens in the slots below, which Qt runs on the thread that owns this
    controller, so concurrent jobs cannot interleave writes to the list.
    """

    rowProgress = Signal(int, float)
    """Emitted with the current row and progress of a running job."""

    jobFailed = Signal(int, str)
    """Emitted with the row and message of a job that raised."""

    def __init__(
        self,
        model: Optional[ProcessedImageListModel] = None,
        *,
        thread_pool: Optional[QThreadPool] = None,
        backend: Optional[str] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._model = model if model is not None else ProcessedImageListModel(self)
        self._pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()
        self._backend = backend
        self._completions: Dict[int, CompletionCallback] = {}
        self._workers: Dict[int, ModificationWorker] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def model(self) -> ProcessedImageListModel:
        return self._model

    @property
    def images(self) -> Tuple[ProcessedImage, ...]:
        return self._model.entries

    def pending_jobs(self) -> int:
        return len(self._completions)

    def modify_image(
        self,
        modification: Modification,
        image: Image.Image,
        completion: CompletionCallback,
    ) -> int:
        """Queue *modification* of *image* and return the job identifier.

        *completion* is called once with ``RowUpdateMode.INSERT`` for the new
        pending row, then exactly once more with ``RowUpdateMode.UPDATE`` when
        the job finishes or fails.  The index passed to that second call is
        ``None`` when the row was deleted while the job was running.
        """

        modification = Modification.from_value(modification)
        row, job_id = self._model.insert_pending(modification)
        self._completions[job_id] = completion
        completion(row, RowUpdateMode.INSERT)

        worker = ModificationWorker(
            image,
            modification,
            job_id=job_id,
            backend=self._backend,
        )
        worker.signals.progress.connect(self._handle_progress)
        worker.signals.ready.connect(self._handle_ready)
        worker.signals.error.connect(self._handle_error)
        worker.signals.finished.connect(self._handle_finished)
        self._workers[job_id] = worker
        LOGGER.debug("Queued %s as job %d", modification.value, job_id)
        self._pool.start(worker)
        return job_id

    def image_at(self, row: int) -> Optional[Image.Image]:
        return self._model.image_at(row)

    def remove(self, row: int) -> ProcessedImage:
        """Remove the result at *row*; a running job for it completes silently."""

        return self._model.remove_row(row)

    # ------------------------------------------------------------------
    # Worker callbacks
    # ------------------------------------------------------------------
    @Slot(int, float)
    def _handle_progress(self, job_id: int, progress: float) -> None:
        row = self._model.update_progress(job_id, progress)
        if row is not None:
            self.rowProgress.emit(row, self._model.entry_at(row).progress)

    @Slot(int, object)
    def _handle_ready(self, job_id: int, image: object) -> None:
        if not isinstance(image, Image.Image):
            self._handle_error(job_id, "Worker returned no image")
            return
        row = self._model.complete(job_id, image)
        self._notify(job_id, row)

    @Slot(int, str)
    def _handle_error(self, job_id: int, message: str) -> None:
        LOGGER.warning("Modification job %d failed: %s", job_id, message)
        row = self._model.fail(job_id, message)
        if row is not None:
            self.jobFailed.emit(row, message)
        self._notify(job_id, row)

    @Slot(int)
    def _handle_finished(self, job_id: int) -> None:
        self._workers.pop(job_id, None)
        # A worker that died without ``ready`` or ``error`` still releases its row.
        if job_id in self._completions:
            self._handle_error(job_id, "Processing stopped unexpectedly")

    def _notify(self, job_id: int, row: Optional[int]) -> None:
        completion = self._completions.pop(job_id, None)
        if completion is None:
            return
        try:
            completion(row, RowUpdateMode.UPDATE)
        except Exception:  # pragma: no cover - keep other jobs flowing
            LOGGER.exception("Completion callback for job %d raised", job_id)


__all__ = ["CompletionCallback", "ProcessingController"]
