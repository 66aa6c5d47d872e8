"""ViewModel for the grouped gallery page."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.group_vm import GroupVM
from app.viewmodels.page_vm import PageVM
from app.viewmodels.photo_vm import PhotoVM
from core.models import Photo
from core.services.grouping_service import GroupingService


class GalleryVM(PageVM):
    """Groups the collection into sections; the lightbox follows paint order."""

    error_text = "加载失败"

    def __init__(self, repo, grouper: GroupingService | None = None, date_formatter=None) -> None:
        self._grouper = grouper or GroupingService()
        self.groups: list[GroupVM] = []
        self.render_order: list[Photo] = []
        super().__init__(repo, date_formatter=date_formatter)

    def index_space(self) -> list[Photo]:
        return self.render_order

    def _on_loaded(self) -> None:
        groups, flattened = self._grouper.build(self.photos)
        self.render_order = flattened
        self.groups = []
        index = 0
        for g in groups:
            items: list[PhotoVM] = []
            for photo in g.items:
                items.append(PhotoVM(photo=photo, index=index))
                index += 1
            self.groups.append(GroupVM(title=g.title, items=items, is_separator=g.is_separator))
        logger.info(
            "Gallery built - sections: {}, render order size: {}",
            len(self.groups),
            len(self.render_order),
        )

    @property
    def lightbox_enabled(self) -> bool:
        """The lightbox is only wired when at least one photo is painted."""
        return bool(self.render_order)

    def open_tile(self, index: int):
        """Open the lightbox for the tile at `index` in paint order."""
        if not self.lightbox_enabled:
            return None
        return self.lightbox.open(index)
