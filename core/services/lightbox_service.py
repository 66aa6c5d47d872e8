"""Lightbox session state machine.

A `LightboxSession` is shared by both pages. It navigates whatever list the
owning page exposes through its index-space provider, so the gallery page can
hand over the render order while the home page hands over the filtered subset.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from core.models import ExifRecord, Photo
from core.services.zoom_service import SWIPE_NEXT, SWIPE_PREV, SwipeTracker, ZoomState

NO_EXIF_TEXT = "No EXIF Data"

IndexSpaceProvider = Callable[[], Sequence[Photo]]
DateFormatter = Callable[[datetime], str]


def parse_photo_date(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; returns None when absent or malformed."""
    if not value:
        return None
    try:
        # fromisoformat only accepts a trailing "Z" from 3.11 on
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        dt = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        logger.debug("Unparsable photo date: {}", value)
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt


def _default_date_formatter(dt: datetime) -> str:
    return dt.strftime("%x")


def exif_summary(exif: ExifRecord | None) -> list[str] | None:
    """Summary items in fixed field order, or None when there is no record.

    Empty or absent fields are dropped; ISO is rendered as "ISO <n>".
    """
    if exif is None:
        return None
    items = [
        exif.camera,
        exif.lens,
        exif.aperture,
        exif.shutter,
        f"ISO {exif.iso}" if exif.iso else "",
        exif.focal,
    ]
    return [item for item in items if item]


@dataclass
class LightboxView:
    """What the lightbox displays for the current photo."""

    url: str
    title: str
    date_text: str
    exif_items: list[str] = field(default_factory=list)
    exif_placeholder: str | None = None


class LightboxSession:
    """Index-based viewer state: open/closed, current photo, panel, zoom."""

    def __init__(
        self,
        index_space: IndexSpaceProvider,
        date_formatter: DateFormatter | None = None,
    ) -> None:
        """Create a closed session.

        Args:
            index_space: Callable returning the list currently navigable.
            date_formatter: Renders a parsed photo date for display.
        """
        self._index_space = index_space
        self._format_date = date_formatter or _default_date_formatter
        self.current_index = 0
        self.is_open = False
        self.info_visible = False
        self.scroll_locked = False
        self.zoom = ZoomState()
        self.swipe = SwipeTracker()
        self.view: LightboxView | None = None

    @property
    def size(self) -> int:
        """Size of the current index space."""
        return len(self._index_space())

    @property
    def current_photo(self) -> Photo | None:
        photos = self._index_space()
        if not self.is_open or not photos:
            return None
        return photos[self.current_index % len(photos)]

    def open(self, index: int) -> LightboxView | None:
        """Show the photo at `index` (wrapped) in pure mode at 1x."""
        photos = self._index_space()
        if not photos:
            return None
        self.current_index = index % len(photos)
        photo = photos[self.current_index]
        self.view = self._build_view(photo)
        self.is_open = True
        self.scroll_locked = True
        self.zoom.reset()
        self.info_visible = False
        return self.view

    def close(self) -> None:
        self.is_open = False
        self.scroll_locked = False
        self.zoom.release()

    def next(self) -> LightboxView | None:
        n = self.size
        if n == 0:
            return None
        return self.open((self.current_index + 1) % n)

    def prev(self) -> LightboxView | None:
        n = self.size
        if n == 0:
            return None
        return self.open((self.current_index - 1 + n) % n)

    def toggle_info(self) -> bool:
        """Flip metadata panel visibility and return the new state."""
        self.info_visible = not self.info_visible
        return self.info_visible

    def handle_key(self, key: str) -> bool:
        """Dispatch a named key while open. Returns True if it was consumed."""
        if not self.is_open:
            return False
        if key == "Escape":
            self.close()
        elif key == "ArrowRight":
            self.next()
        elif key == "ArrowLeft":
            self.prev()
        else:
            return False
        return True

    def touch_start(self, x: float) -> None:
        self.swipe.touch_start(x)

    def touch_end(self, x: float) -> LightboxView | None:
        """Finish a touch; navigates when it was a horizontal swipe."""
        direction = self.swipe.touch_end(x, zoomed=self.zoom.is_zoomed)
        if direction == SWIPE_NEXT:
            return self.next()
        if direction == SWIPE_PREV:
            return self.prev()
        return None

    def _build_view(self, photo: Photo) -> LightboxView:
        dt = parse_photo_date(photo.date)
        items = exif_summary(photo.exif)
        return LightboxView(
            url=photo.url,
            title=photo.title,
            date_text=self._format_date(dt) if dt else "",
            exif_items=items or [],
            exif_placeholder=NO_EXIF_TEXT if items is None else None,
        )
