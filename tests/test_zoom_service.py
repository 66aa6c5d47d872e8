import pytest

from core.services.zoom_service import (
    MAX_SCALE,
    MIN_SCALE,
    SWIPE_NEXT,
    SWIPE_PREV,
    SwipeTracker,
    ZoomState,
)


def test_wheel_zooms_by_ten_percent():
    zoom = ZoomState()
    assert zoom.wheel(zoom_in=True) == pytest.approx(1.1)
    assert zoom.wheel(zoom_in=False) == pytest.approx(1.0)


def test_wheel_is_clamped():
    zoom = ZoomState()
    for _ in range(100):
        zoom.wheel(zoom_in=True)
    assert zoom.scale == MAX_SCALE
    for _ in range(100):
        zoom.wheel(zoom_in=False)
    assert zoom.scale == MIN_SCALE


def test_pan_only_when_zoomed():
    zoom = ZoomState()
    assert not zoom.press(10, 10)
    assert not zoom.drag(50, 50)
    assert zoom.transform() == (0.0, 0.0, 1.0)

    zoom.double_activate()
    assert zoom.press(10, 10)
    assert zoom.drag(30, 5)
    assert zoom.transform()[:2] == (20.0, -5.0)

    zoom.release()
    assert not zoom.drag(100, 100)
    assert zoom.transform()[:2] == (20.0, -5.0)


def test_double_activation_toggles_and_resets_offset():
    zoom = ZoomState()
    assert zoom.double_activate() == 2.0
    zoom.press(0, 0)
    zoom.drag(40, 40)
    zoom.release()

    assert zoom.double_activate() == 1.0
    assert zoom.transform() == (0.0, 0.0, 1.0)


def test_double_activation_from_wheel_zoom_returns_to_one():
    zoom = ZoomState()
    zoom.wheel(zoom_in=True)
    assert zoom.double_activate() == MIN_SCALE


def test_reset_cancels_drag():
    zoom = ZoomState(scale=3.0)
    zoom.press(0, 0)
    zoom.reset()
    assert not zoom.panning
    assert zoom.transform() == (0.0, 0.0, 1.0)


@pytest.mark.parametrize(
    "end_x, expected",
    [(100, SWIPE_NEXT), (300, SWIPE_PREV), (170, None), (150, None), (250, None)],
)
def test_swipe_threshold(end_x, expected):
    tracker = SwipeTracker()
    tracker.touch_start(200)
    assert tracker.touch_end(end_x) == expected


def test_swipe_ignored_while_zoomed():
    tracker = SwipeTracker()
    tracker.touch_start(300)
    assert tracker.touch_end(0, zoomed=True) is None
