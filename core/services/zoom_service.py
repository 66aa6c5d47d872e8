"""Zoom, pan and swipe state for the lightbox image.

All coordinates are plain floats in untransformed widget pixels, so the state
can be driven by any event source.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_SCALE = 1.0
MAX_SCALE = 5.0
WHEEL_FACTOR = 1.1
DOUBLE_CLICK_SCALE = 2.0
SWIPE_THRESHOLD_PX = 50.0

SWIPE_NEXT = "next"
SWIPE_PREV = "prev"


@dataclass
class ZoomState:
    """Scale and pan offset of the displayed image.

    The rendered transform is `translate(offset_x, offset_y)` followed by
    `scale(scale)`.
    """

    scale: float = MIN_SCALE
    offset_x: float = 0.0
    offset_y: float = 0.0
    panning: bool = False
    _anchor_x: float = 0.0
    _anchor_y: float = 0.0

    def reset(self) -> None:
        """Back to 1x at the origin; cancels any drag in progress."""
        self.scale = MIN_SCALE
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.panning = False

    @property
    def is_zoomed(self) -> bool:
        """True when the image is magnified beyond 1x."""
        return self.scale > MIN_SCALE

    def wheel(self, zoom_in: bool) -> float:
        """Apply one discrete wheel step and return the clamped scale."""
        if zoom_in:
            self.scale *= WHEEL_FACTOR
        else:
            self.scale /= WHEEL_FACTOR
        self.scale = min(max(MIN_SCALE, self.scale), MAX_SCALE)
        return self.scale

    def press(self, x: float, y: float) -> bool:
        """Start a drag at (x, y). Returns True if panning was armed."""
        if not self.is_zoomed:
            return False
        self._anchor_x = x - self.offset_x
        self._anchor_y = y - self.offset_y
        self.panning = True
        return True

    def drag(self, x: float, y: float) -> bool:
        """Move the image with the pointer. Returns True if the offset changed."""
        if not self.panning:
            return False
        self.offset_x = x - self._anchor_x
        self.offset_y = y - self._anchor_y
        return True

    def release(self) -> None:
        self.panning = False

    def double_activate(self) -> float:
        """Toggle between 1x and 2x; leaving any zoom resets the offset."""
        if self.scale == MIN_SCALE:
            self.scale = DOUBLE_CLICK_SCALE
        else:
            self.scale = MIN_SCALE
            self.offset_x = 0.0
            self.offset_y = 0.0
        return self.scale

    def transform(self) -> tuple[float, float, float]:
        """Return (offset_x, offset_y, scale) in application order."""
        return self.offset_x, self.offset_y, self.scale


@dataclass
class SwipeTracker:
    """Horizontal swipe detection for touch navigation."""

    threshold: float = SWIPE_THRESHOLD_PX
    _start_x: float = 0.0

    def touch_start(self, x: float) -> None:
        self._start_x = x

    def touch_end(self, x: float, zoomed: bool = False) -> str | None:
        """Return `next`, `prev`, or None for a finished touch at `x`.

        Swipe navigation is disabled while the image is zoomed.
        """
        if zoomed:
            return None
        if x < self._start_x - self.threshold:
            return SWIPE_NEXT
        if x > self._start_x + self.threshold:
            return SWIPE_PREV
        return None
