from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.home_vm import HomeVM
from app.viewmodels.page_vm import (
    EMPTY_TEXT,
    STATUS_EMPTY,
    STATUS_ERROR,
    STATUS_LOADING,
    STATUS_READY,
    fetch_collection,
)
from core.services.interfaces import LoadResult
from tests.conftest import FakeRepo


def test_fetch_collection_wraps_errors():
    result = fetch_collection(FakeRepo(error="boom"))
    assert not result.ok
    assert result.photos == []
    assert "boom" in result.error


def test_gallery_groups_and_render_order(sample_photos):
    vm = GalleryVM(FakeRepo(sample_photos))
    vm.load()

    assert vm.status == STATUS_READY
    assert vm.placeholder is None
    assert [p.id for p in vm.render_order] == ["1", "3", "2", "1", "3"]
    assert [[t.index for t in g.items] for g in vm.groups] == [[0, 1], [2], [], [3, 4]]
    assert vm.groups[2].is_separator


def test_gallery_lightbox_follows_render_order(sample_photos):
    vm = GalleryVM(FakeRepo(sample_photos))
    vm.load()

    vm.open_tile(1)
    assert vm.lightbox.current_photo.id == "3"
    vm.lightbox.next()
    assert vm.lightbox.current_photo.id == "2"


def test_gallery_empty_and_error_placeholders():
    empty = GalleryVM(FakeRepo([]))
    empty.load()
    assert empty.status == STATUS_EMPTY
    assert empty.placeholder == EMPTY_TEXT
    assert not empty.lightbox_enabled
    assert empty.open_tile(0) is None

    failed = GalleryVM(FakeRepo(error="offline"))
    failed.load()
    assert failed.status == STATUS_ERROR
    assert failed.placeholder == "加载失败"
    assert failed.groups == []


def test_begin_load_closes_lightbox(sample_photos):
    vm = GalleryVM(FakeRepo(sample_photos))
    vm.load()
    vm.open_tile(0)
    vm.begin_load()
    assert vm.status == STATUS_LOADING
    assert not vm.lightbox.is_open


def test_failed_reload_clears_previous_content(sample_photos):
    vm = HomeVM(FakeRepo(sample_photos))
    vm.load()
    vm.apply_result(LoadResult(error="gone"))
    assert vm.photos == []
    assert vm.visible == []
    assert vm.placeholder == "加载作品失败，请稍后重试。"


def test_home_filter_drives_lightbox_index_space(sample_photos):
    vm = HomeVM(FakeRepo(sample_photos))
    vm.load()
    vm.select_filter("nature")

    view = vm.open_photo(sample_photos[2])
    assert view.title == "Lake"
    assert vm.lightbox.current_index == 1
    vm.lightbox.next()
    assert vm.lightbox.current_photo.id == "1"


def test_home_hidden_photo_cannot_open(sample_photos):
    vm = HomeVM(FakeRepo(sample_photos))
    vm.load()
    vm.select_filter("urban")
    assert not vm.is_visible(sample_photos[0])
    assert vm.open_photo(sample_photos[0]) is None
    assert not vm.lightbox.is_open


def test_home_tiles_and_filters(sample_photos):
    vm = HomeVM(FakeRepo(sample_photos))
    vm.load()
    assert [t.category_tag for t in vm.tiles] == ["nature", "urban", "nature"]
    assert vm.filters[:4] == ["all", "nature", "urban", "portrait"]

    vm.select_view("masonry")
    assert vm.filter_state.is_masonry
    assert len(vm.visible) == 3


def test_filter_survives_reload(sample_photos):
    repo = FakeRepo(sample_photos)
    vm = HomeVM(repo)
    vm.load()
    vm.select_filter("urban")
    vm.load()
    assert [p.id for p in vm.visible] == ["2"]
    assert repo.calls == 2
