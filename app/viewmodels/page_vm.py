"""Shared load/placeholder behavior for the two portfolio pages."""

from __future__ import annotations

from loguru import logger

from core.services.interfaces import CollectionLoadError, IPhotoSource, LoadResult
from core.services.lightbox_service import DateFormatter, LightboxSession
from core.models import Photo

EMPTY_TEXT = "暂无作品"

STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_EMPTY = "empty"
STATUS_ERROR = "error"


def fetch_collection(repo: IPhotoSource) -> LoadResult:
    """Run one collection load, converting failures into a `LoadResult`.

    Safe to call from a worker thread; it touches no view-model state.
    """
    try:
        photos = repo.load()
    except CollectionLoadError as ex:
        logger.error("Failed to load photos: {}", ex)
        return LoadResult(error=str(ex))
    logger.info("Loaded {} photos", len(photos))
    return LoadResult(photos=photos)


class PageVM:
    """Base page view-model.

    Subclasses decide which list the lightbox navigates by overriding
    `index_space` and rebuild their derived state in `_on_loaded`.
    """

    error_text = "加载失败"

    def __init__(self, repo: IPhotoSource, date_formatter: DateFormatter | None = None) -> None:
        """Create a PageVM.

        Args:
            repo: Collection source with a `load()` method.
            date_formatter: Optional display formatter handed to the lightbox.
        """
        self._repo = repo
        self.photos: list[Photo] = []
        self.status = STATUS_LOADING
        self.lightbox = LightboxSession(self.index_space, date_formatter=date_formatter)

    def index_space(self) -> list[Photo]:
        raise NotImplementedError

    def load(self) -> None:
        """Load synchronously (tests and scripts)."""
        self.apply_result(fetch_collection(self._repo))

    def begin_load(self) -> None:
        """Mark the page as loading before a background fetch starts."""
        self.status = STATUS_LOADING
        self.lightbox.close()

    def apply_result(self, result: LoadResult) -> None:
        """Install a finished load. Failures never leave a partial render."""
        if not result.ok:
            self.photos = []
            self.status = STATUS_ERROR
        else:
            self.photos = list(result.photos)
            self.status = STATUS_READY if self.photos else STATUS_EMPTY
        self._on_loaded()

    def _on_loaded(self) -> None:
        pass

    @property
    def placeholder(self) -> str | None:
        """Static text shown instead of content, or None when content exists."""
        if self.status == STATUS_ERROR:
            return self.error_text
        if self.status == STATUS_EMPTY:
            return EMPTY_TEXT
        return None

    @property
    def repo(self) -> IPhotoSource:
        return self._repo
