"""Coordinator wiring the main window widgets to processing and downloads."""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image
from PySide6.QtCore import QModelIndex, QObject

from ....core.filters import load_image
from ....core.modification import Modification
from ....core.processed_image import ProcessingState, RowUpdateMode
from ....errors import ImageDecodeError, InvalidURLError
from ....library.photo_library import PhotoLibrary
from ....net.downloader import parse_download_url
from ....settings import SettingsManager
from ..alert_option import AlertOption, Titles
from ..main_window import MainWindow
from ..widgets import camera_dialog, dialogs
from .image_loader import ImageLoader
from .processing_controller import ProcessingController

LOGGER = logging.getLogger(__name__)


class MainController(QObject):
    """Own the behaviour of :class:`MainWindow`.

    The controller is the only object mutating the on-screen state.  Worker
    results reach it through queued Qt signals, so every mutation runs on the
    GUI thread.
    """

    def __init__(
        self,
        window: MainWindow,
        *,
        processing: ProcessingController,
        loader: ImageLoader,
        library: PhotoLibrary,
        settings: Optional[SettingsManager] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._window = window
        self._processing = processing
        self._loader = loader
        self._library = library
        self._settings = settings

        window.result_list.setModel(processing.model)

        window.image_view.clicked.connect(self.choose_image)
        for button in window.buttons():
            button.modificationRequested.connect(self.process)
        window.result_list.clicked.connect(self._handle_row_clicked)

        loader.progressChanged.connect(self._handle_download_progress)
        loader.imageLoaded.connect(self._handle_image_loaded)
        loader.downloadFailed.connect(self._handle_download_failed)
        loader.downloadCancelled.connect(self._handle_download_cancelled)

        self.change_buttons_enabled(False)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    @property
    def window(self) -> MainWindow:
        return self._window

    def current_image(self) -> Optional[Image.Image]:
        return self._window.image_view.image()

    def change_buttons_enabled(self, enabled: bool) -> None:
        for button in self._window.buttons():
            button.setEnabled(enabled)

    def set_new_image(self, image: Image.Image) -> None:
        """Make *image* the primary image and unlock the modification buttons."""

        self._window.image_view.set_image(image)
        self._window.choose_image_label.setVisible(False)
        self._window.progress_bar.setVisible(False)
        self._loader.cancel()
        self.change_buttons_enabled(True)

    # ------------------------------------------------------------------
    # Choosing an image
    # ------------------------------------------------------------------
    def choose_image(self) -> None:
        options = [AlertOption.PHOTO_LIBRARY]
        if camera_dialog.camera_available():
            options.append(AlertOption.CAMERA)
        options.extend([AlertOption.DOWNLOAD, AlertOption.CANCEL])
        option = dialogs.choose_option(self._window, options, title=Titles.CHOOSE_IMAGE)
        if option is AlertOption.PHOTO_LIBRARY:
            self.open_photo_library()
        elif option is AlertOption.CAMERA:
            self.open_camera()
        elif option is AlertOption.DOWNLOAD:
            self.show_download_prompt()

    def open_photo_library(self) -> None:
        path = dialogs.choose_image_file(self._window, self._library.root if self._library.root.exists() else None)
        if path is None:
            return
        try:
            image = load_image(path)
        except ImageDecodeError as exc:
            LOGGER.warning("Failed to open %s: %s", path, exc)
            dialogs.show_error(self._window, str(exc), title=Titles.OPEN_FAILED)
            return
        self.set_new_image(image)

    def open_camera(self) -> None:
        image = camera_dialog.capture_from_camera(self._window)
        if image is not None:
            self.set_new_image(image)

    def show_download_prompt(self) -> None:
        initial = self._settings.get("download.last_url", "") if self._settings else ""
        text = dialogs.ask_download_url(self._window, initial or "")
        if text is None:
            return
        self.download_from_text(text)

    def download_from_text(self, text: Optional[str]) -> bool:
        """Start downloading the URL in *text*; invalid input only shows a notice."""

        try:
            url = parse_download_url(text)
        except InvalidURLError as exc:
            LOGGER.info("Rejected download link: %s", exc)
            dialogs.show_error(self._window, Titles.WRONG_URL, title=Titles.ERROR)
            return False

        if self._settings is not None:
            self._settings.set("download.last_url", url)
        window = self._window
        window.progress_bar.setValue(0)
        window.progress_bar.setVisible(True)
        window.choose_image_label.setText("0%")
        window.choose_image_label.setVisible(True)
        window.image_view.set_image(None)
        self.change_buttons_enabled(False)
        self._loader.download_image(url)
        return True

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------
    def process(self, modification: Modification) -> Optional[int]:
        image = self.current_image()
        if image is None:
            return None
        return self._processing.modify_image(modification, image, self.apply_row_update)

    def apply_row_update(self, row: Optional[int], mode: RowUpdateMode) -> None:
        """Reflect a finished step of a modification job in the result list."""

        if row is None:
            return
        view = self._window.result_list
        model_index = self._processing.model.index(row, 0)
        if not model_index.isValid():
            return
        if mode is RowUpdateMode.INSERT:
            view.scrollTo(model_index)
        elif mode is RowUpdateMode.UPDATE:
            view.update(model_index)

    # ------------------------------------------------------------------
    # Row actions
    # ------------------------------------------------------------------
    def _handle_row_clicked(self, index: QModelIndex) -> None:
        if not index.isValid():
            return
        self._window.result_list.clearSelection()
        self.show_row_actions(index.row())

    def row_options(self, row: int) -> list[AlertOption]:
        entry = self._processing.model.entry_at(row)
        if entry.state is ProcessingState.DONE:
            return [AlertOption.SAVE, AlertOption.USE_AS_PRIMARY, AlertOption.DELETE, AlertOption.CANCEL]
        return [AlertOption.DELETE, AlertOption.CANCEL]

    def show_row_actions(self, row: int) -> None:
        option = dialogs.choose_option(self._window, self.row_options(row))
        self.perform_row_action(row, option)

    def perform_row_action(self, row: int, option: AlertOption) -> None:
        if option is AlertOption.SAVE:
            self.save_row(row)
        elif option is AlertOption.USE_AS_PRIMARY:
            self.use_as_primary(row)
        elif option is AlertOption.DELETE:
            self.delete_row(row)

    def save_row(self, row: int) -> None:
        entry = self._processing.model.entry_at(row)
        if entry.image is None:
            return
        outcome = self._library.save_outcome(entry.image, entry.modification)
        if outcome.ok:
            dialogs.show_information(self._window, Titles.IMAGE_SAVED, title=Titles.SAVED)
        else:
            dialogs.show_error(self._window, outcome.error or "", title=Titles.SAVE_ERROR)

    def use_as_primary(self, row: int) -> None:
        image = self._processing.image_at(row)
        if image is not None:
            self.set_new_image(image)

    def delete_row(self, row: int) -> None:
        self._processing.remove(row)

    # ------------------------------------------------------------------
    # Loader callbacks
    # ------------------------------------------------------------------
    def _handle_download_progress(self, progress: float) -> None:
        self._window.choose_image_label.setText(f"{int(progress * 100)}%")
        self._window.progress_bar.setValue(int(progress * 100))

    def _handle_image_loaded(self, image: object) -> None:
        if isinstance(image, Image.Image):
            self.set_new_image(image)

    def _handle_download_failed(self, message: str) -> None:
        self._finish_download()
        dialogs.show_error(self._window, message, title=Titles.DOWNLOAD_FAILED)

    def _handle_download_cancelled(self) -> None:
        self._finish_download()

    def _finish_download(self) -> None:
        window = self._window
        window.progress_bar.setVisible(False)
        has_image = self.current_image() is not None
        window.choose_image_label.setText(Titles.TAP_TO_CHOOSE)
        window.choose_image_label.setVisible(not has_image)
        self.change_buttons_enabled(has_image)


__all__ = ["MainController"]
