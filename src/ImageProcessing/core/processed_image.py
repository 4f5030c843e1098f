"""Entries of the processed image result list."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from PIL import Image

from .modification import Modification


class ProcessingState(str, Enum):
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


class RowUpdateMode(str, Enum):
    """How a completed job should be reflected in the result list view."""

    INSERT = "insert"
    UPDATE = "update"


def clamp_progress(value: float) -> float:
    """Clamp *value* into the normalised ``[0, 1]`` range."""

    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    if numeric != numeric:  # NaN
        return 0.0
    return max(0.0, min(1.0, numeric))


@dataclass
class ProcessedImage:
    """A single row of the result list.

    ``image`` stays ``None`` until the worker delivers the processed frame.
    """

    job_id: int
    modification: Modification
    image: Optional[Image.Image] = None
    progress: float = 0.0
    state: ProcessingState = ProcessingState.PENDING
    error: Optional[str] = field(default=None)

    @property
    def is_pending(self) -> bool:
        return self.state is ProcessingState.PENDING

    def set_progress(self, value: float) -> None:
        # Progress only moves forward; late events from a finished job are ignored.
        if not self.is_pending:
            return
        self.progress = max(self.progress, clamp_progress(value))

    def mark_done(self, image: Image.Image) -> None:
        self.image = image
        self.progress = 1.0
        self.state = ProcessingState.DONE
        self.error = None

    def mark_failed(self, message: str) -> None:
        self.progress = 1.0
        self.state = ProcessingState.FAILED
        self.error = message or "Unknown error"


__all__ = [
    "ProcessedImage",
    "ProcessingState",
    "RowUpdateMode",
    "clamp_progress",
]
