from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger

from app.viewmodels.page_vm import fetch_collection
from core.services.interfaces import LoadResult


class _ImageTask(QRunnable):
    """QRunnable for background image loading.

    Emits `receiver.imageLoaded(token, url, image)` upon completion. The
    receiver is expected to own a Qt `Signal(str, str, object)` named
    `imageLoaded`.
    """

    def __init__(
        self, *, url: str, side: int, is_full: bool, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._url = url
        self._side = side
        self._is_full = is_full
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            if self._is_full:
                img = self._service.get_full(self._url)
            else:
                img = self._service.get_thumbnail(self._url, self._side)
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.error("Image task failed: {}", ex)
            img = None
        self._receiver.imageLoaded.emit(self._token, self._url, img)  # type: ignore[attr-defined]


class _CollectionTask(QRunnable):
    """QRunnable performing one collection fetch for a page.

    Emits `receiver.collectionLoaded(page_key, result)` with a `LoadResult`.
    """

    def __init__(self, *, page_key: str, repo: Any, receiver: QObject) -> None:
        super().__init__()
        self._page_key = page_key
        self._repo = repo
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            result = fetch_collection(self._repo)
        except Exception as ex:
            logger.exception("Collection task failed for {}", self._page_key)
            result = LoadResult(error=str(ex) or type(ex).__name__)
        self._receiver.collectionLoaded.emit(self._page_key, result)  # type: ignore[attr-defined]


class ImageTaskRunner:
    """Dispatches collection and image load tasks to the global thread pool.

    Tokens keep a fixed format so receivers can route results:
    - Lightbox image: "full|{url}"
    - Tile thumbnail: "thumb|{owner}|{url}|{side}"
    """

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_collection(self, page_key: str, repo: Any) -> None:
        """Start the single collection fetch for `page_key`."""
        self._pool.start(_CollectionTask(page_key=page_key, repo=repo, receiver=self._receiver))

    def request_full_image(self, url: str) -> str:
        """Request the full-size image. Returns the token string."""
        token = f"full|{url}"
        if self._service is None:
            return token
        task = _ImageTask(
            url=url,
            side=0,
            is_full=True,
            service=self._service,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token

    def request_thumbnail(self, owner: str, url: str, side: int) -> str:
        """Request a tile thumbnail for `url` bounded by `side`. Returns token."""
        token = f"thumb|{owner}|{url}|{side}"
        if self._service is None:
            return token
        task = _ImageTask(
            url=url,
            side=side,
            is_full=False,
            service=self._service,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token
