"""Clickable thumbnail tile used by both pages."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from app.views.constants import FAILED_TILE_TEXT, LOADING_TEXT


class PhotoTile(QWidget):
    """Thumbnail with a caption line; emits `clicked` on left click."""

    clicked = Signal()

    def __init__(self, caption: str, side: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._side = side
        self._masonry = False
        self._pixmap: QPixmap | None = None

        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        self.image_label = QLabel(LOADING_TEXT)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedSize(side, side)
        self.image_label.setStyleSheet("background-color: #111; color: #888;")
        v.addWidget(self.image_label)

        self.caption_label = QLabel(caption)
        self.caption_label.setWordWrap(True)
        self.caption_label.setStyleSheet("color: #bbb;")
        v.addWidget(self.caption_label)
        self.setCursor(Qt.PointingHandCursor)

    def set_image(self, image: Any) -> None:
        if image is None:
            self.image_label.setText(FAILED_TILE_TEXT)
            return
        pm = QPixmap.fromImage(image)
        if pm.isNull():
            self.image_label.setText(FAILED_TILE_TEXT)
            return
        self._pixmap = pm
        self._refit()

    def set_masonry(self, masonry: bool) -> None:
        """Masonry tiles keep the photo's aspect ratio instead of a square cell."""
        self._masonry = masonry
        self._refit()

    def _refit(self) -> None:
        if self._masonry and self._pixmap is not None and self._pixmap.width() > 0:
            height = int(self._side * self._pixmap.height() / self._pixmap.width())
            self.image_label.setFixedSize(self._side, max(1, height))
        else:
            self.image_label.setFixedSize(self._side, self._side)
        if self._pixmap is None:
            return
        self.image_label.setPixmap(
            self._pixmap.scaled(
                self.image_label.width(),
                self.image_label.height(),
                Qt.KeepAspectRatioByExpanding if not self._masonry else Qt.KeepAspectRatio,
                Qt.SmoothTransformation,
            )
        )
        self.image_label.setText("")

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mousePressEvent(event)
