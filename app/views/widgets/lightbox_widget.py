"""Modal lightbox overlay shared by the home and gallery pages.

The widget is a thin paint adapter over `LightboxSession`: every input event is
translated into a session call and the result is repainted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from PySide6.QtCore import QDate, QEvent, QLocale, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QGuiApplication, QPainter, QPixmap, QTransform
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.views.constants import (
    FAILED_TILE_TEXT,
    INFO_PANEL_WIDTH,
    LIGHTBOX_BACKDROP_CSS,
    LIGHTBOX_BUTTON_SIZE,
    LOADING_TEXT,
)
from core.services.lightbox_service import LightboxSession, LightboxView

_KEY_NAMES = {
    Qt.Key_Escape: "Escape",
    Qt.Key_Left: "ArrowLeft",
    Qt.Key_Right: "ArrowRight",
}


def locale_date_text(dt: datetime) -> str:
    """Short locale date, as shown under the photo title."""
    return QLocale().toString(QDate(dt.year, dt.month, dt.day), QLocale.ShortFormat)


class _ImageCanvas(QWidget):
    """Paints the current pixmap with the session's translate/scale transform."""

    backdropClicked = Signal()

    def __init__(self, session: LightboxSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._pixmap: QPixmap | None = None
        self._message = ""
        self.setMouseTracking(False)
        self.setCursor(Qt.OpenHandCursor)

    def set_pixmap(self, pixmap: QPixmap | None, message: str = "") -> None:
        self._pixmap = pixmap
        self._message = message
        self.update()

    def _fitted_rect(self) -> QRectF:
        """Image rect at 1x, fitted and centered in the canvas."""
        if self._pixmap is None or self._pixmap.isNull():
            return QRectF()
        pw, ph = self._pixmap.width(), self._pixmap.height()
        ratio = min(self.width() / max(1, pw), self.height() / max(1, ph), 1.0)
        w, h = pw * ratio, ph * ratio
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def _transform(self) -> QTransform:
        ox, oy, scale = self._session.zoom.transform()
        cx, cy = self.width() / 2, self.height() / 2
        # translate in untransformed space, then scale about the canvas center
        t = QTransform()
        t.translate(ox + cx, oy + cy)
        t.scale(scale, scale)
        t.translate(-cx, -cy)
        return t

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            if self._pixmap is None or self._pixmap.isNull():
                painter.setPen(Qt.lightGray)
                painter.drawText(self.rect(), Qt.AlignCenter, self._message)
                return
            painter.setRenderHint(QPainter.SmoothPixmapTransform)
            painter.setTransform(self._transform())
            painter.drawPixmap(self._fitted_rect(), self._pixmap, QRectF(self._pixmap.rect()))
        finally:
            painter.end()

    def _hits_image(self, pos: QPointF) -> bool:
        inverted, ok = self._transform().inverted()
        if not ok:
            return False
        return self._fitted_rect().contains(inverted.map(pos))

    def wheelEvent(self, event) -> None:  # type: ignore[override]
        dy = event.angleDelta().y()
        if dy == 0:
            super().wheelEvent(event)
            return
        self._session.zoom.wheel(zoom_in=dy > 0)
        self.update()
        event.accept()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        if not self._hits_image(pos):
            self.backdropClicked.emit()
        elif self._session.zoom.press(pos.x(), pos.y()):
            self.setCursor(Qt.ClosedHandCursor)
        event.accept()

    def tap(self, pos: QPointF, double: bool) -> None:
        """Touch counterpart of a click or double-click at `pos`."""
        if double:
            self._session.zoom.double_activate()
            self.update()
        elif not self._hits_image(pos):
            self.backdropClicked.emit()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        pos = event.position()
        if self._session.zoom.drag(pos.x(), pos.y()):
            self.update()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._session.zoom.release()
        self.setCursor(Qt.OpenHandCursor)
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:  # type: ignore[override]
        self._session.zoom.double_activate()
        self.update()
        event.accept()


class LightboxWidget(QWidget):
    """Full-page overlay with navigation controls and a metadata panel."""

    scrollLockChanged = Signal(bool)

    def __init__(
        self,
        session: LightboxSession,
        request_image: Callable[[str], str],
        parent: QWidget | None = None,
    ) -> None:
        """Create a hidden lightbox over `parent`.

        Args:
            session: Lightbox state owned by the page view-model.
            request_image: Starts a background full-image load, returns its token.
            parent: Page widget the overlay covers.
        """
        super().__init__(parent)
        self._session = session
        self._request_image = request_image
        self._current_token: str | None = None
        self._touch_origin: QPointF | None = None
        self._last_tap_ms: int | None = None

        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.setStyleSheet(LIGHTBOX_BACKDROP_CSS)
        self.setFocusPolicy(Qt.StrongFocus)
        self._setup_ui()
        self.hide()

        if parent is not None:
            parent.installEventFilter(self)

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)

        top = QHBoxLayout()
        top.addStretch()
        self._close_btn = self._make_button("×", "关闭")
        self._close_btn.clicked.connect(self.close_lightbox)
        top.addWidget(self._close_btn)
        root.addLayout(top)

        middle = QHBoxLayout()
        self._prev_btn = self._make_button("❮", "上一张")
        self._prev_btn.clicked.connect(self.show_prev)
        middle.addWidget(self._prev_btn)

        self._canvas = _ImageCanvas(self._session, self)
        self._canvas.backdropClicked.connect(self.close_lightbox)
        middle.addWidget(self._canvas, 1)

        self._info_panel = QFrame(self)
        self._info_panel.setFixedWidth(INFO_PANEL_WIDTH)
        self._info_panel.setStyleSheet("color: #ddd; background-color: rgba(20, 20, 20, 0.85);")
        info_layout = QVBoxLayout(self._info_panel)
        self._title_label = QLabel("")
        self._title_label.setWordWrap(True)
        self._title_label.setStyleSheet("font-size: 16pt; font-weight: bold;")
        self._date_label = QLabel("")
        self._exif_grid = QGridLayout()
        info_layout.addWidget(self._title_label)
        info_layout.addWidget(self._date_label)
        info_layout.addLayout(self._exif_grid)
        info_layout.addStretch()
        middle.addWidget(self._info_panel)

        self._next_btn = self._make_button("❯", "下一张")
        self._next_btn.clicked.connect(self.show_next)
        middle.addWidget(self._next_btn)
        root.addLayout(middle, 1)

        bottom = QHBoxLayout()
        bottom.addStretch()
        self._info_btn = self._make_button("i", "显示信息")
        self._info_btn.clicked.connect(self.toggle_info)
        bottom.addWidget(self._info_btn)
        root.addLayout(bottom)

    def _make_button(self, text: str, tooltip: str) -> QPushButton:
        btn = QPushButton(text, self)
        btn.setFixedSize(LIGHTBOX_BUTTON_SIZE, LIGHTBOX_BUTTON_SIZE)
        btn.setToolTip(tooltip)
        btn.setFocusPolicy(Qt.NoFocus)
        btn.setStyleSheet("color: white; font-size: 18pt; background: transparent; border: none;")
        return btn

    # Public API
    def show_view(self, view: LightboxView | None) -> None:
        """Display a view the owning page opened on its session; None is ignored."""
        self._apply(view)

    def show_next(self) -> None:
        self._apply(self._session.next())

    def show_prev(self) -> None:
        self._apply(self._session.prev())

    def close_lightbox(self) -> None:
        self._session.close()
        self._current_token = None
        self.hide()
        self.scrollLockChanged.emit(False)

    def toggle_info(self) -> None:
        self._info_panel.setVisible(self._session.toggle_info())

    def on_image_loaded(self, token: str, url: str, image: Any) -> None:
        """Install a finished full-size load if it is still the current photo."""
        if token != self._current_token:
            return
        if image is None:
            self._canvas.set_pixmap(None, FAILED_TILE_TEXT)
            return
        pm = QPixmap.fromImage(image)
        if pm.isNull():
            logger.error("Lightbox image is null: {}", url)
            self._canvas.set_pixmap(None, FAILED_TILE_TEXT)
            return
        self._canvas.set_pixmap(pm)

    # internals
    def _apply(self, view: LightboxView | None) -> None:
        if view is None:
            return
        self._title_label.setText(view.title)
        self._date_label.setText(view.date_text)
        self._fill_exif(view)
        self._info_panel.setVisible(self._session.info_visible)
        self._canvas.set_pixmap(None, LOADING_TEXT)
        self._current_token = self._request_image(view.url)

        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        if not self.isVisible():
            self.show()
            self.scrollLockChanged.emit(self._session.scroll_locked)
        self.raise_()
        self.setFocus()

    def _fill_exif(self, view: LightboxView) -> None:
        while self._exif_grid.count():
            item = self._exif_grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        if view.exif_placeholder is not None:
            lbl = QLabel(view.exif_placeholder)
            lbl.setStyleSheet("color: #666;")
            self._exif_grid.addWidget(lbl, 0, 0, 1, 2)
            return
        for i, text in enumerate(view.exif_items):
            r, c = divmod(i, 2)
            self._exif_grid.addWidget(QLabel(text), r, c)

    # Qt events
    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        name = _KEY_NAMES.get(event.key())
        if name is None or not self._session.handle_key(name):
            super().keyPressEvent(event)
            return
        if self._session.is_open:
            self._apply(self._session.view)
        else:
            self.close_lightbox()
        event.accept()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        # Clicks that reach the overlay itself landed on the backdrop
        if event.button() == Qt.LeftButton:
            self.close_lightbox()
            event.accept()
            return
        super().mousePressEvent(event)

    def event(self, event) -> bool:  # type: ignore[override]
        etype = event.type()
        if etype == QEvent.TouchBegin and self._session.is_open:
            points = event.points()
            if not points or self._canvas_point(points[0].position()) is None:
                # controls get the synthesized mouse press instead
                event.ignore()
                return False
            self._touch_origin = points[0].position()
            self._session.touch_start(points[0].globalPosition().x())
            event.accept()
            return True
        if etype in (QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            if self._touch_origin is None:
                return super().event(event)
            if etype == QEvent.TouchCancel:
                self._touch_origin = None
            elif etype == QEvent.TouchEnd:
                self._finish_touch(event)
            event.accept()
            return True
        return super().event(event)

    def _finish_touch(self, event) -> None:
        origin, self._touch_origin = self._touch_origin, None
        points = event.points()
        if not points or origin is None:
            return
        view = self._session.touch_end(points[0].globalPosition().x())
        if view is not None:
            self._last_tap_ms = None
            self._apply(view)
            return
        hints = QGuiApplication.styleHints()
        if (points[0].position() - origin).manhattanLength() > hints.startDragDistance():
            return
        now = event.timestamp()
        double = (
            self._last_tap_ms is not None
            and now - self._last_tap_ms <= hints.mouseDoubleClickInterval()
        )
        self._last_tap_ms = None if double else now
        canvas_pos = self._canvas_point(origin)
        if canvas_pos is not None:
            self._canvas.tap(canvas_pos, double)

    def _canvas_point(self, pos: QPointF) -> QPointF | None:
        """Map an overlay position into the canvas; None when it lands on a control."""
        child = self.childAt(pos.toPoint())
        if child is not None and child is not self._canvas:
            return None
        return self._canvas.mapFrom(self, pos)

    def eventFilter(self, obj, event) -> bool:  # type: ignore[override]
        if obj is self.parentWidget() and event.type() == QEvent.Resize and self.isVisible():
            self.setGeometry(obj.rect())
        return super().eventFilter(obj, event)
