"""List model exposing the processed image results to Qt views."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image
from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, Qt
from PySide6.QtGui import QPixmap

from .... import config
from ....core.modification import Modification
from ....core.processed_image import ProcessedImage, ProcessingState
from ..image_convert import make_thumbnail

logger = logging.getLogger(__name__)


class Roles(IntEnum):
    PROGRESS = int(Qt.ItemDataRole.UserRole) + 1
    STATE = int(Qt.ItemDataRole.UserRole) + 2
    MODIFICATION = int(Qt.ItemDataRole.UserRole) + 3
    JOB_ID = int(Qt.ItemDataRole.UserRole) + 4
    ERROR = int(Qt.ItemDataRole.UserRole) + 5


def row_label(entry: ProcessedImage) -> str:
    """Return the text displayed for *entry*."""

    label = entry.modification.label
    if entry.state is ProcessingState.PENDING:
        return f"{label} {int(entry.progress * 100)}%"
    if entry.state is ProcessingState.FAILED:
        return f"{label} failed"
    return label


class ProcessedImageListModel(QAbstractListModel):
    """Ordered, index-addressable list of :class:`ProcessedImage` rows.

    Rows are addressed by position for the view and by ``job_id`` for the
    workers, so a result arriving after earlier rows were deleted still lands
    on the right entry.  All mutations must happen on the GUI thread.
    """

    def __init__(self, parent=None, *, thumbnail_size: Optional[int] = None) -> None:  # type: ignore[override]
        super().__init__(parent)
        self._rows: List[ProcessedImage] = []
        self._thumbnails: Dict[int, QPixmap] = {}
        self._thumbnail_size = thumbnail_size or config.THUMBNAIL_SIZE
        self._next_job_id = 1

    # ------------------------------------------------------------------
    # Qt model API
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._rows)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid() or not 0 <= index.row() < len(self._rows):
            return None
        entry = self._rows[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            return row_label(entry)
        if role == Qt.ItemDataRole.DecorationRole:
            return self._thumbnails.get(entry.job_id)
        if role == Qt.ItemDataRole.ToolTipRole:
            return entry.error
        if role == Roles.PROGRESS:
            return entry.progress
        if role == Roles.STATE:
            return entry.state.value
        if role == Roles.MODIFICATION:
            return entry.modification.value
        if role == Roles.JOB_ID:
            return entry.job_id
        if role == Roles.ERROR:
            return entry.error
        return None

    def roleNames(self) -> Dict[int, QByteArray]:  # type: ignore[override]
        names = dict(super().roleNames())
        names[Roles.PROGRESS] = QByteArray(b"progress")
        names[Roles.STATE] = QByteArray(b"state")
        names[Roles.MODIFICATION] = QByteArray(b"modification")
        names[Roles.JOB_ID] = QByteArray(b"jobId")
        names[Roles.ERROR] = QByteArray(b"error")
        return names

    # ------------------------------------------------------------------
    # Row access
    # ------------------------------------------------------------------
    @property
    def entries(self) -> Tuple[ProcessedImage, ...]:
        return tuple(self._rows)

    def entry_at(self, row: int) -> ProcessedImage:
        if not 0 <= row < len(self._rows):
            raise IndexError(f"Row {row} out of range")
        return self._rows[row]

    def image_at(self, row: int) -> Optional[Image.Image]:
        return self.entry_at(row).image

    def index_for_job(self, job_id: int) -> Optional[int]:
        for row, entry in enumerate(self._rows):
            if entry.job_id == job_id:
                return row
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert_pending(self, modification: Modification) -> Tuple[int, int]:
        """Append a pending row and return ``(row, job_id)``."""

        job_id = self._next_job_id
        self._next_job_id += 1
        row = len(self._rows)
        self.beginInsertRows(QModelIndex(), row, row)
        self._rows.append(ProcessedImage(job_id=job_id, modification=modification))
        self.endInsertRows()
        return row, job_id

    def update_progress(self, job_id: int, progress: float) -> Optional[int]:
        row = self.index_for_job(job_id)
        if row is None:
            return None
        entry = self._rows[row]
        before = entry.progress
        entry.set_progress(progress)
        if entry.progress != before:
            self._emit_row_changed(row, [int(Roles.PROGRESS), int(Qt.ItemDataRole.DisplayRole)])
        return row

    def complete(self, job_id: int, image: Image.Image) -> Optional[int]:
        row = self.index_for_job(job_id)
        if row is None:
            return None
        entry = self._rows[row]
        entry.mark_done(image)
        try:
            self._thumbnails[job_id] = make_thumbnail(image, self._thumbnail_size)
        except Exception:  # pragma: no cover - thumbnail is cosmetic
            logger.exception("Failed to build thumbnail for job %s", job_id)
        self._emit_row_changed(row)
        return row

    def fail(self, job_id: int, message: str) -> Optional[int]:
        row = self.index_for_job(job_id)
        if row is None:
            return None
        self._rows[row].mark_failed(message)
        self._emit_row_changed(row)
        return row

    def remove_row(self, row: int) -> ProcessedImage:
        """Remove exactly the entry at *row* and return it."""

        if not 0 <= row < len(self._rows):
            raise IndexError(f"Row {row} out of range")
        self.beginRemoveRows(QModelIndex(), row, row)
        entry = self._rows.pop(row)
        self._thumbnails.pop(entry.job_id, None)
        self.endRemoveRows()
        return entry

    def _emit_row_changed(self, row: int, roles: Optional[List[int]] = None) -> None:
        model_index = self.index(row, 0)
        self.dataChanged.emit(model_index, model_index, roles or [])


__all__ = ["ProcessedImageListModel", "Roles", "row_label"]
