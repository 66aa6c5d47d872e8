"""ViewModel for the filterable home grid."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.page_vm import PageVM
from app.viewmodels.photo_vm import PhotoVM
from core.models import Photo
from core.services.filter_service import FilterState, filter_choices, filter_photos


class HomeVM(PageVM):
    """Flat grid with live category filtering and a grid/masonry toggle."""

    error_text = "加载作品失败，请稍后重试。"

    def __init__(self, repo, date_formatter=None) -> None:
        self.filter_state = FilterState()
        self.visible: list[Photo] = []
        super().__init__(repo, date_formatter=date_formatter)

    def index_space(self) -> list[Photo]:
        return self.visible

    def _on_loaded(self) -> None:
        self.visible = filter_photos(self.photos, self.filter_state.active_filter)

    @property
    def tiles(self) -> list[PhotoVM]:
        """Every fetched photo, indexed by fetch order."""
        return [PhotoVM(photo=p, index=i) for i, p in enumerate(self.photos)]

    @property
    def filters(self) -> list[str]:
        return filter_choices(self.photos)

    def select_filter(self, filter_value: str) -> list[Photo]:
        """Switch the active filter; the lightbox now navigates the new subset."""
        self.visible = self.filter_state.select_filter(self.photos, filter_value)
        logger.debug("Filter {} -> {} visible", filter_value, len(self.visible))
        return self.visible

    def select_view(self, view: str) -> None:
        self.filter_state.select_view(view)

    def visible_index(self, photo: Photo) -> int | None:
        """Position of `photo` in the visible subset, or None when filtered out."""
        for i, p in enumerate(self.visible):
            if p is photo:
                return i
        return None

    def is_visible(self, photo: Photo) -> bool:
        return self.visible_index(photo) is not None

    def open_photo(self, photo: Photo):
        """Open the lightbox on `photo` if it is part of the visible subset."""
        index = self.visible_index(photo)
        if index is None:
            return None
        return self.lightbox.open(index)
