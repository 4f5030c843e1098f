from __future__ import annotations

from unittest.mock import MagicMock

import numpy as np
import pytest

from ImageProcessing.core.modification import Modification
from ImageProcessing.core.processed_image import ProcessingState, RowUpdateMode
from ImageProcessing.gui.ui.alert_option import AlertOption, Titles
from ImageProcessing.gui.ui.controllers.image_loader import ImageLoader
from ImageProcessing.gui.ui.controllers.main_controller import MainController
from ImageProcessing.gui.ui.controllers.processing_controller import ProcessingController
from ImageProcessing.gui.ui.main_window import MainWindow
from ImageProcessing.gui.ui.widgets import camera_dialog, dialogs
from ImageProcessing.library.photo_library import PhotoLibrary
from ImageProcessing.settings import SettingsManager


@pytest.fixture
def notices(monkeypatch):
    recorded = MagicMock()
    monkeypatch.setattr(dialogs, "show_error", recorded.show_error)
    monkeypatch.setattr(dialogs, "show_information", recorded.show_information)
    monkeypatch.setattr(camera_dialog, "camera_available", lambda: False)
    return recorded


@pytest.fixture
def screen(qtbot, tmp_path, sync_pool, deferred_pool, make_session, notices):
    window = MainWindow()
    qtbot.addWidget(window)
    processing = ProcessingController(thread_pool=sync_pool)
    loader = ImageLoader(thread_pool=deferred_pool, session=make_session())
    controller = MainController(
        window,
        processing=processing,
        loader=loader,
        library=PhotoLibrary(tmp_path / "library"),
        settings=SettingsManager(tmp_path / "settings.json"),
    )
    return controller


def _buttons_enabled(controller):
    return [button.isEnabled() for button in controller.window.buttons()]


def _add_results(controller, image, *modifications):
    controller.set_new_image(image)
    for modification in modifications:
        controller.process(modification)


def test_buttons_start_disabled(screen) -> None:
    assert len(_buttons_enabled(screen)) == 5
    assert not any(_buttons_enabled(screen))


def test_set_new_image_enables_controls_and_cancels_download(screen, rgb_image) -> None:
    assert screen.download_from_text("https://example.com/a.png")
    worker = screen._loader.active_worker
    assert worker is not None

    screen.set_new_image(rgb_image)

    assert all(_buttons_enabled(screen))
    assert screen.window.progress_bar.isHidden()
    assert screen.window.choose_image_label.isHidden()
    assert worker.is_cancelled()
    assert not screen._loader.is_active()
    assert screen.current_image() is rgb_image


def test_invalid_url_never_starts_a_download(screen, notices, monkeypatch) -> None:
    download = MagicMock()
    monkeypatch.setattr(screen._loader, "download_image", download)

    assert screen.download_from_text("not a link") is False

    download.assert_not_called()
    notices.show_error.assert_called_once()
    assert notices.show_error.call_args.args[1] == Titles.WRONG_URL


def test_valid_url_resets_screen_and_downloads(screen, rgb_image, monkeypatch) -> None:
    screen.set_new_image(rgb_image)
    download = MagicMock()
    monkeypatch.setattr(screen._loader, "download_image", download)

    assert screen.download_from_text(" https://example.com/cat.png ")

    download.assert_called_once_with("https://example.com/cat.png")
    window = screen.window
    assert not window.progress_bar.isHidden()
    assert not window.choose_image_label.isHidden()
    assert window.choose_image_label.text() == "0%"
    assert screen.current_image() is None
    assert not any(_buttons_enabled(screen))
    assert screen._settings.get("download.last_url") == "https://example.com/cat.png"


def test_download_progress_updates_label_and_bar(screen) -> None:
    screen._loader.progressChanged.emit(0.45)

    assert screen.window.choose_image_label.text() == "45%"
    assert screen.window.progress_bar.value() == 45


def test_downloaded_image_becomes_primary(screen, rgb_image) -> None:
    screen.download_from_text("https://example.com/a.png")
    screen._loader.imageLoaded.emit(rgb_image)

    assert screen.current_image() is rgb_image
    assert all(_buttons_enabled(screen))


def test_download_failure_restores_controls(screen, notices) -> None:
    screen.download_from_text("https://example.com/a.png")
    screen._loader.downloadFailed.emit("Download failed: 404")

    assert screen.window.progress_bar.isHidden()
    assert not screen.window.choose_image_label.isHidden()
    assert not any(_buttons_enabled(screen))
    notices.show_error.assert_called_once()
    assert notices.show_error.call_args.args[1] == "Download failed: 404"


def test_process_without_image_does_nothing(screen) -> None:
    assert screen.process(Modification.ROTATE) is None
    assert screen._processing.model.rowCount() == 0


def test_process_adds_a_finished_row(screen, rgb_image) -> None:
    _add_results(screen, rgb_image, Modification.MIRROR)

    model = screen._processing.model
    assert model.rowCount() == 1
    assert model.entry_at(0).state is ProcessingState.DONE


def test_button_click_triggers_processing(screen, rgb_image) -> None:
    screen.set_new_image(rgb_image)
    screen.window.processing_buttons[Modification.INVERT].click()

    assert screen._processing.model.entry_at(0).modification is Modification.INVERT


def test_row_update_without_index_touches_nothing(screen, rgb_image) -> None:
    _add_results(screen, rgb_image, Modification.MIRROR)
    model = screen._processing.model
    events = []
    model.rowsInserted.connect(lambda *args: events.append("insert"))
    model.rowsRemoved.connect(lambda *args: events.append("remove"))
    model.dataChanged.connect(lambda *args: events.append("change"))

    screen.apply_row_update(None, RowUpdateMode.UPDATE)
    screen.apply_row_update(None, RowUpdateMode.INSERT)

    assert events == []
    assert model.rowCount() == 1


def test_delete_removes_exactly_that_row(screen, rgb_image) -> None:
    _add_results(screen, rgb_image, Modification.ROTATE, Modification.MIRROR, Modification.INVERT)

    screen.perform_row_action(1, AlertOption.DELETE)

    model = screen._processing.model
    assert [entry.modification for entry in model.entries] == [Modification.ROTATE, Modification.INVERT]
    assert screen.window.result_list.model().rowCount() == 2


def test_save_reports_success(screen, notices, rgb_image, tmp_path) -> None:
    _add_results(screen, rgb_image, Modification.GRAYSCALE)

    screen.perform_row_action(0, AlertOption.SAVE)

    notices.show_information.assert_called_once()
    assert notices.show_information.call_args.args[1] == Titles.IMAGE_SAVED
    assert list((tmp_path / "library").glob("*_grayscale.png"))


def test_save_reports_failure_description(screen, notices, rgb_image, tmp_path) -> None:
    blocker = tmp_path / "blocked"
    blocker.write_text("file, not a directory")
    screen._library = PhotoLibrary(blocker)
    _add_results(screen, rgb_image, Modification.GRAYSCALE)

    screen.perform_row_action(0, AlertOption.SAVE)

    notices.show_error.assert_called_once()
    assert notices.show_error.call_args.kwargs["title"] == Titles.SAVE_ERROR
    assert notices.show_error.call_args.args[1]


def test_use_as_primary_replaces_current_image(screen, rgb_image) -> None:
    _add_results(screen, rgb_image, Modification.INVERT)

    screen.perform_row_action(0, AlertOption.USE_AS_PRIMARY)

    current = screen.current_image()
    assert current is screen._processing.image_at(0)
    np.testing.assert_array_equal(np.asarray(current), 255 - np.asarray(rgb_image))


def test_cancel_leaves_rows_alone(screen, rgb_image) -> None:
    _add_results(screen, rgb_image, Modification.INVERT)
    screen.perform_row_action(0, AlertOption.CANCEL)
    assert screen._processing.model.rowCount() == 1


def test_pending_rows_only_offer_delete(screen, rgb_image) -> None:
    screen._processing.model.insert_pending(Modification.ROTATE)
    assert screen.row_options(0) == [AlertOption.DELETE, AlertOption.CANCEL]


def test_choose_image_offers_sources(screen, notices, monkeypatch) -> None:
    offered = []

    def _choose(parent, options, title=None):
        offered.extend(options)
        return AlertOption.DOWNLOAD

    monkeypatch.setattr(dialogs, "choose_option", _choose)
    monkeypatch.setattr(dialogs, "ask_download_url", lambda parent, initial="": "nope")

    screen.choose_image()

    assert offered == [AlertOption.PHOTO_LIBRARY, AlertOption.DOWNLOAD, AlertOption.CANCEL]
    notices.show_error.assert_called_once()


def test_photo_library_choice_loads_file(screen, monkeypatch, tmp_path, rgba_image) -> None:
    path = tmp_path / "picked.png"
    rgba_image.save(path)
    monkeypatch.setattr(dialogs, "choose_image_file", lambda parent, start=None: path)

    screen.open_photo_library()

    assert screen.current_image().size == rgba_image.size
    assert all(_buttons_enabled(screen))


def test_unreadable_file_shows_error(screen, notices, monkeypatch, tmp_path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"garbage")
    monkeypatch.setattr(dialogs, "choose_image_file", lambda parent, start=None: path)

    screen.open_photo_library()

    assert screen.current_image() is None
    notices.show_error.assert_called_once()


def test_cancelled_download_restores_existing_image_controls(screen, notices, rgb_image) -> None:
    screen.set_new_image(rgb_image)
    screen.window.progress_bar.setVisible(True)
    screen.change_buttons_enabled(False)

    screen._loader.downloadCancelled.emit()

    assert screen.window.progress_bar.isHidden()
    assert screen.window.choose_image_label.isHidden()
    assert all(_buttons_enabled(screen))
    notices.show_error.assert_not_called()


def test_failed_download_with_existing_image_reenables_controls(screen, notices, rgb_image) -> None:
    screen.set_new_image(rgb_image)
    screen.window.progress_bar.setVisible(True)
    screen.change_buttons_enabled(False)

    screen._loader.downloadFailed.emit("Download failed: timeout")

    assert screen.window.progress_bar.isHidden()
    assert all(_buttons_enabled(screen))
    notices.show_error.assert_called_once()
