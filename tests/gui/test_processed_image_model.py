from __future__ import annotations

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap

from ImageProcessing.core.modification import Modification
from ImageProcessing.gui.ui.models.processed_image_model import ProcessedImageListModel, Roles


@pytest.fixture
def model(qapp):
    return ProcessedImageListModel(thumbnail_size=16)


def _data(model, row, role):
    return model.data(model.index(row, 0), role)


def test_insert_pending_appends_rows_with_unique_jobs(model, qtbot) -> None:
    with qtbot.waitSignal(model.rowsInserted) as blocker:
        first = model.insert_pending(Modification.ROTATE)
    second = model.insert_pending(Modification.INVERT)

    assert blocker.args[1:] == [0, 0]
    assert first == (0, 1)
    assert second == (1, 2)
    assert model.rowCount() == 2
    assert _data(model, 0, Qt.ItemDataRole.DisplayRole) == "Rotate 0%"
    assert _data(model, 1, Roles.STATE) == "pending"


def test_progress_updates_display_text(model) -> None:
    row, job = model.insert_pending(Modification.GRAYSCALE)
    changed = []
    model.dataChanged.connect(lambda top, bottom, roles: changed.append((top.row(), bottom.row())))

    assert model.update_progress(job, 0.45) == row

    assert changed == [(row, row)]
    assert _data(model, row, Roles.PROGRESS) == pytest.approx(0.45)
    assert _data(model, row, Qt.ItemDataRole.DisplayRole) == "Grayscale 45%"


def test_complete_stores_image_and_thumbnail(model, rgb_image) -> None:
    row, job = model.insert_pending(Modification.MIRROR)

    assert model.complete(job, rgb_image) == row

    assert model.image_at(row) is rgb_image
    assert _data(model, row, Roles.STATE) == "done"
    assert _data(model, row, Qt.ItemDataRole.DisplayRole) == "Mirror"
    thumbnail = _data(model, row, Qt.ItemDataRole.DecorationRole)
    assert isinstance(thumbnail, QPixmap)
    assert max(thumbnail.width(), thumbnail.height()) <= 16


def test_fail_marks_row_and_keeps_message(model) -> None:
    row, job = model.insert_pending(Modification.INVERT)

    assert model.fail(job, "boom") == row
    assert _data(model, row, Qt.ItemDataRole.DisplayRole) == "Invert failed"
    assert _data(model, row, Roles.ERROR) == "boom"


def test_remove_row_deletes_exactly_that_entry(model) -> None:
    jobs = [model.insert_pending(m)[1] for m in (Modification.ROTATE, Modification.MIRROR, Modification.INVERT)]
    removed_ranges = []
    model.rowsRemoved.connect(lambda parent, first, last: removed_ranges.append((first, last)))

    removed = model.remove_row(1)

    assert removed.job_id == jobs[1]
    assert removed_ranges == [(1, 1)]
    assert [entry.job_id for entry in model.entries] == [jobs[0], jobs[2]]


def test_results_follow_their_job_after_deletions(model, rgb_image) -> None:
    _, first = model.insert_pending(Modification.ROTATE)
    _, second = model.insert_pending(Modification.MIRROR)
    model.remove_row(0)

    assert model.complete(second, rgb_image) == 0
    assert model.complete(first, rgb_image) is None
    assert model.update_progress(first, 0.5) is None


def test_out_of_range_rows_raise(model) -> None:
    with pytest.raises(IndexError):
        model.remove_row(0)
    with pytest.raises(IndexError):
        model.entry_at(3)
    assert model.data(model.index(5, 0), Qt.ItemDataRole.DisplayRole) is None


def test_role_names_expose_custom_roles(model) -> None:
    names = model.roleNames()
    assert bytes(names[Roles.PROGRESS]) == b"progress"
    assert bytes(names[Roles.JOB_ID]) == b"jobId"
