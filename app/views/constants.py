"""
UI/view constants centralized for reuse across view modules.

Only magic numbers, labels and stylesheet fragments live here; ordering and
filtering semantics belong to the core services.
"""

from __future__ import annotations

# Page keys used to route collection loads
PAGE_HOME: str = "home"
PAGE_GALLERY: str = "gallery"

PAGE_TITLES: dict[str, str] = {
    PAGE_HOME: "Home 首页",
    PAGE_GALLERY: "Gallery 作品集",
}

LOADING_TEXT: str = "Loading…"
FAILED_TILE_TEXT: str = "(failed)"

FILTER_LABELS: dict[str, str] = {
    "all": "All 全部",
    "nature": "Nature 自然",
    "urban": "Urban 城市",
    "portrait": "Portrait 人像",
}

VIEW_LABELS: dict[str, str] = {
    "grid": "Grid",
    "masonry": "Masonry",
}

# Grid defaults
DEFAULT_THUMB_SIZE: int = 320  # overridable by settings.json
GRID_COLUMNS: int = 4
GRID_SPACING_PX: int = 8
MASONRY_COLUMNS: int = 3
SECTION_SPACING_PX: int = 40

# Lightbox
LIGHTBOX_BACKDROP_CSS: str = "background-color: rgba(0, 0, 0, 0.92);"
LIGHTBOX_BUTTON_SIZE: int = 44
INFO_PANEL_WIDTH: int = 280
