import pytest

from core.services.filter_service import (
    FILTER_ALL,
    VIEW_GRID,
    VIEW_MASONRY,
    FilterState,
    filter_choices,
    filter_photos,
)
from tests.conftest import make_photo


def test_all_returns_everything_in_order(sample_photos):
    assert filter_photos(sample_photos, FILTER_ALL) == sample_photos


def test_exact_category_match(sample_photos):
    assert [p.id for p in filter_photos(sample_photos, "nature")] == ["1", "3"]


def test_match_is_case_sensitive():
    photos = [make_photo("a", "Nature"), make_photo("b", "nature")]
    assert [p.id for p in filter_photos(photos, "nature")] == ["b"]


def test_unknown_category_yields_empty(sample_photos):
    assert filter_photos(sample_photos, "portrait") == []


def test_filter_choices_append_extra_categories():
    photos = [make_photo("a", "travel"), make_photo("b", "nature"), make_photo("c", "")]
    assert filter_choices(photos) == [FILTER_ALL, "nature", "urban", "portrait", "travel"]


def test_view_switch_does_not_change_filter(sample_photos):
    state = FilterState()
    visible = state.select_filter(sample_photos, "urban")
    state.select_view(VIEW_MASONRY)

    assert state.active_filter == "urban"
    assert state.is_masonry
    assert [p.id for p in visible] == ["2"]

    state.select_view(VIEW_GRID)
    assert not state.is_masonry


def test_unknown_view_rejected():
    with pytest.raises(ValueError):
        FilterState().select_view("carousel")


def test_selecting_same_filter_twice_is_idempotent(sample_photos):
    state = FilterState()
    for value in filter_choices(sample_photos):
        first = state.select_filter(sample_photos, value)
        second = state.select_filter(sample_photos, value)
        assert first == second
        assert state.active_filter == value
