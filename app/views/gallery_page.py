"""Gallery page: titled category and series sections over one lightbox."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QLabel, QScrollArea, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.views.constants import (
    DEFAULT_THUMB_SIZE,
    GRID_COLUMNS,
    GRID_SPACING_PX,
    LOADING_TEXT,
    PAGE_GALLERY,
    SECTION_SPACING_PX,
)
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.lightbox_widget import LightboxWidget
from app.views.widgets.photo_tile import PhotoTile
from core.services.interfaces import LoadResult


class GalleryPage(QWidget):
    """Paints `GalleryVM` sections and routes tile clicks to the lightbox."""

    def __init__(
        self,
        vm: GalleryVM,
        runner: ImageTaskRunner,
        thumb_size: int | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._runner = runner
        self._thumb_size = int(thumb_size or DEFAULT_THUMB_SIZE)
        # a photo shown in both its category and its series shares one token
        self._tiles: dict[str, list[PhotoTile]] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        root.addWidget(self.scroll_area)

        self._container: QWidget | None = None
        self._show_message(LOADING_TEXT)

        self.lightbox = LightboxWidget(vm.lightbox, runner.request_full_image, parent=self)
        self.lightbox.scrollLockChanged.connect(self.set_scroll_locked)

    # Public API
    def start_load(self) -> None:
        self._vm.begin_load()
        self.lightbox.close_lightbox()
        self._show_message(LOADING_TEXT)
        self._runner.request_collection(PAGE_GALLERY, self._vm.repo)

    def on_collection_loaded(self, result: LoadResult) -> None:
        self._vm.apply_result(result)
        placeholder = self._vm.placeholder
        if placeholder is not None:
            self._show_message(placeholder)
            return
        self._render_sections()

    def on_image_loaded(self, token: str, url: str, image: Any) -> None:
        tiles = self._tiles.get(token)
        if tiles:
            for tile in tiles:
                tile.set_image(image)
            return
        self.lightbox.on_image_loaded(token, url, image)

    def set_scroll_locked(self, locked: bool) -> None:
        self.scroll_area.verticalScrollBar().setEnabled(not locked)

    # internals
    def _replace_container(self) -> QVBoxLayout:
        self._tiles = {}
        if self._container is not None:
            self._container.deleteLater()
        self._container = QWidget()
        layout = QVBoxLayout(self._container)
        layout.setAlignment(Qt.AlignTop)
        self.scroll_area.setWidget(self._container)
        return layout

    def _show_message(self, text: str) -> None:
        layout = self._replace_container()
        label = QLabel(text)
        label.setAlignment(Qt.AlignCenter)
        layout.addWidget(label)

    def _render_sections(self) -> None:
        layout = self._replace_container()
        for group in self._vm.groups:
            title = QLabel(group.title)
            if group.is_separator:
                title.setStyleSheet(
                    f"font-size: 18pt; color: #fff; margin-top: {SECTION_SPACING_PX}px;"
                    " border-top: 1px solid rgba(255, 255, 255, 0.1);"
                )
                layout.addWidget(title)
                continue
            title.setStyleSheet("font-size: 16pt;")
            layout.addWidget(title)

            grid_host = QWidget()
            grid = QGridLayout(grid_host)
            grid.setSpacing(GRID_SPACING_PX)
            for i, item in enumerate(group.items):
                r, c = divmod(i, GRID_COLUMNS)
                tile = PhotoTile(item.title, self._thumb_size)
                tile.clicked.connect(lambda _i=item.index: self._on_tile_clicked(_i))
                grid.addWidget(tile, r, c)
                token = self._runner.request_thumbnail(PAGE_GALLERY, item.url, self._thumb_size)
                self._tiles.setdefault(token, []).append(tile)
            layout.addWidget(grid_host)
        logger.debug("Gallery painted {} tiles", len(self._vm.render_order))

    def _on_tile_clicked(self, index: int) -> None:
        self.lightbox.show_view(self._vm.open_tile(index))
