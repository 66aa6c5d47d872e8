from core.services.grouping_service import (
    SERIES_HEADING,
    GroupingService,
    category_key,
)
from tests.conftest import make_photo


def _ids(photos):
    return [p.id for p in photos]


def test_categories_then_series_with_repeated_photos(sample_photos):
    groups, flattened = GroupingService().build(sample_photos)

    assert [g.title for g in groups] == [
        "Nature 自然",
        "Urban 城市",
        SERIES_HEADING,
        "· Alps",
    ]
    assert groups[2].is_separator and groups[2].items == []
    assert _ids(flattened) == ["1", "3", "2", "1", "3"]


def test_priority_order_is_fixed_regardless_of_input_order():
    photos = [
        make_photo("a", "portrait"),
        make_photo("b", "urban"),
        make_photo("c", "nature"),
    ]
    groups, _ = GroupingService().build(photos)
    assert [g.title for g in groups] == ["Nature 自然", "Urban 城市", "Portrait 人像"]


def test_remaining_categories_sorted_and_capitalized():
    photos = [
        make_photo("a", "wildlife"),
        make_photo("b", ""),
        make_photo("c", "Abstract"),
        make_photo("d", "nature"),
    ]
    groups, flattened = GroupingService().build(photos)

    assert [g.title for g in groups] == ["Nature 自然", "Abstract", "Other", "Wildlife"]
    assert _ids(flattened) == ["d", "c", "b", "a"]


def test_category_key_lowercases_and_defaults():
    assert category_key(make_photo("a", "Nature")) == "nature"
    assert category_key(make_photo("b", "")) == "other"


def test_no_series_means_no_heading():
    groups, _ = GroupingService().build([make_photo("a", "urban")])
    assert all(not g.is_separator for g in groups)


def test_series_groups_keep_first_seen_order():
    photos = [
        make_photo("a", "nature", "Zeta"),
        make_photo("b", "nature", "Alpha"),
        make_photo("c", "nature", "Zeta"),
    ]
    groups, _ = GroupingService().build(photos)
    series = [g for g in groups if g.title.startswith("· ")]
    assert [g.title for g in series] == ["· Zeta", "· Alpha"]
    assert _ids(series[0].items) == ["a", "c"]


def test_empty_input():
    groups, flattened = GroupingService().build([])
    assert groups == []
    assert flattened == []


def test_single_series_member_scenario():
    photos = [
        make_photo("1", "nature"),
        make_photo("2", "urban"),
        make_photo("3", "nature", "Alps"),
    ]
    groups, flattened = GroupingService().build(photos)

    assert [(g.title, _ids(g.items)) for g in groups] == [
        ("Nature 自然", ["1", "3"]),
        ("Urban 城市", ["2"]),
        (SERIES_HEADING, []),
        ("· Alps", ["3"]),
    ]
    assert _ids(flattened) == ["1", "3", "2", "3"]
