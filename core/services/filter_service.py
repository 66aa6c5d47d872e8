"""Home page filter and view-mode state, decoupled from any UI toolkit."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from core.models import Photo
from core.services.grouping_service import CATEGORY_CONFIG

FILTER_ALL = "all"
VIEW_GRID = "grid"
VIEW_MASONRY = "masonry"
VIEW_MODES = (VIEW_GRID, VIEW_MASONRY)


def filter_photos(photos: Sequence[Photo], filter_value: str) -> list[Photo]:
    """Return the visible subset for `filter_value`, in original order.

    Matching is an exact, case-sensitive comparison against the stored category.
    """
    if filter_value == FILTER_ALL:
        return list(photos)
    return [p for p in photos if p.category == filter_value]


def filter_choices(photos: Sequence[Photo]) -> list[str]:
    """Filter values offered to the user: `all`, priority categories, then the rest."""
    choices = [FILTER_ALL] + [key for key, _ in CATEGORY_CONFIG]
    for photo in photos:
        if photo.category and photo.category not in choices:
            choices.append(photo.category)
    return choices


@dataclass
class FilterState:
    """Active filter and view mode. Exactly one of each is active."""

    active_filter: str = FILTER_ALL
    active_view: str = VIEW_GRID

    def select_filter(self, photos: Sequence[Photo], filter_value: str) -> list[Photo]:
        """Activate `filter_value` and return the new visible subset."""
        self.active_filter = filter_value
        return filter_photos(photos, filter_value)

    def select_view(self, view: str) -> None:
        """Activate a layout mode; never touches the visible subset."""
        if view not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {view!r}")
        self.active_view = view

    @property
    def is_masonry(self) -> bool:
        """True when the masonry layout is active."""
        return self.active_view == VIEW_MASONRY
