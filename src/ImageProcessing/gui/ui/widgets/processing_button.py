"""Push button bound to a single image modification."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QPushButton, QWidget

from ....core.modification import Modification


class ProcessingButton(QPushButton):
    """Button that requests its :class:`Modification` when clicked."""

    modificationRequested = Signal(object)

    def __init__(
        self,
        modification: Optional[Modification] = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._modification: Optional[Modification] = None
        if modification is not None:
            self.set_modification(modification)
        self.clicked.connect(self._handle_clicked)

    @property
    def modification(self) -> Optional[Modification]:
        return self._modification

    def set_modification(self, modification: Modification) -> None:
        """Assign the modification once; the binding never changes afterwards."""

        if self._modification is not None and self._modification is not modification:
            raise RuntimeError("ProcessingButton modification is already assigned")
        self._modification = modification
        self.setText(modification.label)
        self.setObjectName(f"{modification.value}Button")
        self.setToolTip(f"Apply {modification.label.lower()} to the current image")

    def _handle_clicked(self) -> None:
        if self._modification is not None:
            self.modificationRequested.emit(self._modification)


__all__ = ["ProcessingButton"]
