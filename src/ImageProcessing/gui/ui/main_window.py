"""Main window assembling the primary view, filter buttons and result list."""

from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QListView,
    QMainWindow,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from ...config import APP_NAME, THUMBNAIL_SIZE
from ...core.modification import Modification
from .alert_option import Titles
from .widgets.image_view import ClickableImageLabel
from .widgets.processed_image_delegate import ProcessedImageDelegate
from .widgets.processing_button import ProcessingButton

BUTTON_ORDER = (
    Modification.ROTATE,
    Modification.GRAYSCALE,
    Modification.MIRROR,
    Modification.INVERT,
    Modification.LEFT_SIDE_MIRROR,
)


class MainWindow(QMainWindow):
    """Widget tree of the single application screen.

    The window only lays widgets out; :class:`MainController` owns behaviour.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("mainWindow")
        self.setWindowTitle(APP_NAME)
        self.resize(720, 900)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.image_view = ClickableImageLabel(central)
        self.image_view.setObjectName("primaryImageView")

        # The prompt sits on top of the image view and doubles as the
        # percentage readout while a download is running.
        self.choose_image_label = QLabel(Titles.TAP_TO_CHOOSE, self.image_view)
        self.choose_image_label.setObjectName("chooseImageLabel")
        self.choose_image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.choose_image_label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        overlay = QVBoxLayout(self.image_view)
        overlay.addWidget(self.choose_image_label)

        self.progress_bar = QProgressBar(central)
        self.progress_bar.setObjectName("downloadProgress")
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setVisible(False)

        button_row = QHBoxLayout()
        button_row.setSpacing(6)
        self.processing_buttons: Dict[Modification, ProcessingButton] = {}
        for modification in BUTTON_ORDER:
            button = ProcessingButton(parent=central)
            button.set_modification(modification)
            self.processing_buttons[modification] = button
            button_row.addWidget(button)

        self.result_list = QListView(central)
        self.result_list.setObjectName("resultList")
        self.result_list.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.result_list.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.result_list.setUniformItemSizes(True)
        self.result_list.setItemDelegate(ProcessedImageDelegate(self.result_list))
        self.result_list.setMinimumHeight(THUMBNAIL_SIZE * 2)

        layout.addWidget(self.image_view, 3)
        layout.addWidget(self.progress_bar)
        layout.addLayout(button_row)
        layout.addWidget(self.result_list, 2)
        self.setCentralWidget(central)

    def buttons(self) -> List[ProcessingButton]:
        return list(self.processing_buttons.values())


__all__ = ["BUTTON_ORDER", "MainWindow"]
