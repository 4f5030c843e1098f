"""Item delegate drawing a result row with its thumbnail and progress."""

from __future__ import annotations

from PySide6.QtCore import QModelIndex, QRect, QSize, Qt
from PySide6.QtGui import QIcon, QPainter, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QStyle,
    QStyledItemDelegate,
    QStyleOptionProgressBar,
    QStyleOptionViewItem,
)

from .... import config
from ..models.processed_image_model import Roles

_PADDING = 6
_PROGRESS_HEIGHT = 6


class ProcessedImageDelegate(QStyledItemDelegate):
    """Paint thumbnail, label and, while the job runs, a thin progress bar."""

    def sizeHint(self, option: QStyleOptionViewItem, index: QModelIndex) -> QSize:  # type: ignore[override]
        base = super().sizeHint(option, index)
        height = max(base.height(), config.THUMBNAIL_SIZE + 2 * _PADDING)
        return QSize(base.width(), height)

    def paint(self, painter: QPainter, option: QStyleOptionViewItem, index: QModelIndex) -> None:  # type: ignore[override]
        style = option.widget.style() if option.widget is not None else QApplication.style()
        painter.save()
        try:
            # Draw selection and hover background only; content is painted below.
            background = QStyleOptionViewItem(option)
            self.initStyleOption(background, index)
            background.text = ""
            background.icon = QIcon()
            style.drawControl(QStyle.ControlElement.CE_ItemViewItem, background, painter, option.widget)

            rect = option.rect.adjusted(_PADDING, _PADDING, -_PADDING, -_PADDING)
            thumb_rect = QRect(rect.left(), rect.top(), config.THUMBNAIL_SIZE, rect.height())

            pixmap = index.data(Qt.ItemDataRole.DecorationRole)
            if isinstance(pixmap, QPixmap) and not pixmap.isNull():
                target = pixmap.rect()
                target.moveCenter(thumb_rect.center())
                painter.drawPixmap(target, pixmap)

            text_rect = rect.adjusted(config.THUMBNAIL_SIZE + _PADDING, 0, 0, 0)
            text = index.data(Qt.ItemDataRole.DisplayRole) or ""
            painter.drawText(text_rect, int(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter), text)

            if index.data(Roles.STATE) == "pending":
                progress = float(index.data(Roles.PROGRESS) or 0.0)
                bar = QStyleOptionProgressBar()
                bar.rect = QRect(
                    text_rect.left(),
                    text_rect.bottom() - _PROGRESS_HEIGHT,
                    text_rect.width(),
                    _PROGRESS_HEIGHT,
                )
                bar.minimum = 0
                bar.maximum = 100
                bar.progress = int(round(progress * 100))
                bar.textVisible = False
                style.drawControl(QStyle.ControlElement.CE_ProgressBar, bar, painter, option.widget)
        finally:
            painter.restore()


__all__ = ["ProcessedImageDelegate"]
