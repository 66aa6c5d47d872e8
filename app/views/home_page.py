"""Home page: flat grid with category filters and a grid/masonry toggle."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.home_vm import HomeVM
from app.views.constants import (
    DEFAULT_THUMB_SIZE,
    FILTER_LABELS,
    GRID_COLUMNS,
    GRID_SPACING_PX,
    LOADING_TEXT,
    MASONRY_COLUMNS,
    PAGE_HOME,
    VIEW_LABELS,
)
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.lightbox_widget import LightboxWidget
from app.views.widgets.photo_tile import PhotoTile
from core.models import Photo
from core.services.filter_service import VIEW_MODES
from core.services.interfaces import LoadResult


class HomePage(QWidget):
    """Paints `HomeVM` tiles; filters hide tiles without rebuilding them."""

    def __init__(
        self,
        vm: HomeVM,
        runner: ImageTaskRunner,
        thumb_size: int | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._runner = runner
        self._thumb_size = int(thumb_size or DEFAULT_THUMB_SIZE)
        self._tiles: list[tuple[Photo, PhotoTile]] = []
        self._tokens: dict[str, list[PhotoTile]] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        toolbar = QHBoxLayout()
        self._filter_bar = QHBoxLayout()
        self._filter_group = QButtonGroup(self)
        self._filter_group.setExclusive(True)
        toolbar.addLayout(self._filter_bar)
        toolbar.addStretch()
        self._view_group = QButtonGroup(self)
        self._view_group.setExclusive(True)
        for view in VIEW_MODES:
            btn = QPushButton(VIEW_LABELS.get(view, view))
            btn.setCheckable(True)
            btn.setChecked(view == vm.filter_state.active_view)
            btn.clicked.connect(lambda _checked=False, _v=view: self.select_view(_v))
            self._view_group.addButton(btn)
            toolbar.addWidget(btn)
        root.addLayout(toolbar)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        root.addWidget(self.scroll_area)
        self._host: QWidget | None = None
        self._show_message(LOADING_TEXT)

        self.lightbox = LightboxWidget(vm.lightbox, runner.request_full_image, parent=self)
        self.lightbox.scrollLockChanged.connect(self.set_scroll_locked)

    # Public API
    def start_load(self) -> None:
        self._vm.begin_load()
        self.lightbox.close_lightbox()
        self._show_message(LOADING_TEXT)
        self._runner.request_collection(PAGE_HOME, self._vm.repo)

    def on_collection_loaded(self, result: LoadResult) -> None:
        self._vm.apply_result(result)
        self._rebuild_filter_buttons()
        placeholder = self._vm.placeholder
        if placeholder is not None:
            self._show_message(placeholder)
            return
        self._create_tiles()
        self._relayout()

    def on_image_loaded(self, token: str, url: str, image: Any) -> None:
        tiles = self._tokens.get(token)
        if tiles:
            for tile in tiles:
                tile.set_image(image)
            return
        self.lightbox.on_image_loaded(token, url, image)

    def select_filter(self, filter_value: str) -> None:
        self._vm.select_filter(filter_value)
        self._relayout()

    def select_view(self, view: str) -> None:
        self._vm.select_view(view)
        self._relayout()

    def set_scroll_locked(self, locked: bool) -> None:
        self.scroll_area.verticalScrollBar().setEnabled(not locked)

    # internals
    def _rebuild_filter_buttons(self) -> None:
        for btn in list(self._filter_group.buttons()):
            self._filter_group.removeButton(btn)
            self._filter_bar.removeWidget(btn)
            btn.deleteLater()
        active = self._vm.filter_state.active_filter
        for value in self._vm.filters:
            btn = QPushButton(FILTER_LABELS.get(value, value))
            btn.setCheckable(True)
            btn.setChecked(value == active)
            btn.clicked.connect(lambda _checked=False, _f=value: self.select_filter(_f))
            self._filter_group.addButton(btn)
            self._filter_bar.addWidget(btn)

    def _create_tiles(self) -> None:
        self._detach_tiles()
        self._tiles = []
        self._tokens = {}
        for item in self._vm.tiles:
            tile = PhotoTile(item.category_tag, self._thumb_size)
            tile.setToolTip(item.title)
            tile.clicked.connect(lambda _p=item.photo: self._on_tile_clicked(_p))
            token = self._runner.request_thumbnail(PAGE_HOME, item.url, self._thumb_size)
            self._tokens.setdefault(token, []).append(tile)
            self._tiles.append((item.photo, tile))

    def _on_tile_clicked(self, photo: Photo) -> None:
        self.lightbox.show_view(self._vm.open_photo(photo))

    def _detach_tiles(self) -> None:
        # Tiles outlive layout hosts; reparent them before a host is dropped
        for _, tile in self._tiles:
            tile.setParent(None)

    def _replace_host(self) -> QWidget:
        self._detach_tiles()
        if self._host is not None:
            self._host.deleteLater()
        self._host = QWidget()
        self.scroll_area.setWidget(self._host)
        return self._host

    def _show_message(self, text: str) -> None:
        for _, tile in self._tiles:
            tile.deleteLater()
        self._tiles = []
        self._tokens = {}
        host = self._replace_host()
        layout = QVBoxLayout(host)
        label = QLabel(text)
        label.setAlignment(Qt.AlignCenter)
        layout.addWidget(label)

    def _relayout(self) -> None:
        if not self._tiles:
            return
        host = self._replace_host()
        masonry = self._vm.filter_state.is_masonry
        visible = [tile for photo, tile in self._tiles if self._vm.is_visible(photo)]
        for _, tile in self._tiles:
            tile.set_masonry(masonry)

        if masonry:
            row = QHBoxLayout(host)
            row.setSpacing(GRID_SPACING_PX)
            columns = [QVBoxLayout() for _ in range(MASONRY_COLUMNS)]
            for col in columns:
                col.setAlignment(Qt.AlignTop)
                row.addLayout(col)
            for i, tile in enumerate(visible):
                columns[i % MASONRY_COLUMNS].addWidget(tile)
        else:
            grid = QGridLayout(host)
            grid.setSpacing(GRID_SPACING_PX)
            grid.setAlignment(Qt.AlignTop | Qt.AlignLeft)
            for i, tile in enumerate(visible):
                r, c = divmod(i, GRID_COLUMNS)
                grid.addWidget(tile, r, c)
        for tile in visible:
            tile.show()
        logger.debug(
            "Home relayout - filter: {}, view: {}, visible: {}",
            self._vm.filter_state.active_filter,
            self._vm.filter_state.active_view,
            len(visible),
        )
