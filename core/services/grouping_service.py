"""Gallery grouping service.

Partitions photos into category sections and series sections and produces the
flattened render order that the lightbox navigates. Input order is preserved
inside every group.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.models import Photo, RenderGroup

DEFAULT_CATEGORY = "other"

# Fixed leading sections: (category key, section title)
CATEGORY_CONFIG: list[tuple[str, str]] = [
    ("nature", "Nature 自然"),
    ("urban", "Urban 城市"),
    ("portrait", "Portrait 人像"),
]

SERIES_HEADING = "Featured Collections 精选系列"
SERIES_PREFIX = "· "


def category_key(photo: Photo) -> str:
    """Normalized grouping key for `photo`."""
    return (photo.category or DEFAULT_CATEGORY).lower()


def _capitalize(key: str) -> str:
    return key[:1].upper() + key[1:]


class GroupingService:
    """Builds gallery render groups from a newest-first photo list."""

    def build(self, photos: Iterable[Photo]) -> tuple[list[RenderGroup], list[Photo]]:
        """Return (groups, flattened) for the gallery page.

        Args:
            photos: Photos in fetch order.

        Returns:
            The render groups in paint order and the concatenation of their
            items. The series heading is emitted as a separator group with no
            items.
        """
        categories: dict[str, list[Photo]] = {}
        series_map: dict[str, list[Photo]] = {}
        for photo in photos:
            categories.setdefault(category_key(photo), []).append(photo)
            if photo.series:
                series_map.setdefault(photo.series, []).append(photo)

        groups: list[RenderGroup] = []
        for key, title in CATEGORY_CONFIG:
            items = categories.pop(key, None)
            if items:
                groups.append(RenderGroup(title=title, items=items))

        for key in sorted(categories):
            groups.append(RenderGroup(title=_capitalize(key), items=categories[key]))

        if series_map:
            groups.append(RenderGroup(title=SERIES_HEADING, is_separator=True))
            for name, items in series_map.items():
                groups.append(RenderGroup(title=f"{SERIES_PREFIX}{name}", items=items))

        flattened = [photo for g in groups for photo in g.items]
        return groups, flattened
