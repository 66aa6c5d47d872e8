"""HTTP access to the collection endpoint.

Provides `load()` returning the newest-first photo list. Malformed records are
skipped; transport, status and payload errors raise `CollectionLoadError`.
"""

from __future__ import annotations

from loguru import logger
import requests

from core.models import Photo
from core.services.interfaces import CollectionLoadError
from infrastructure.utils import join_url

COLLECTION_PATH = "/api/photos"


class HttpPhotoRepository:
    """Load photo records from a running collection service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def collection_url(self) -> str:
        return join_url(self.base_url, COLLECTION_PATH)

    def load(self) -> list[Photo]:
        """Fetch and parse the whole collection in one request."""
        url = self.collection_url
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as ex:
            raise CollectionLoadError(f"GET {url} failed: {ex}") from ex
        except ValueError as ex:
            raise CollectionLoadError(f"GET {url} returned invalid JSON: {ex}") from ex

        if not isinstance(payload, list):
            raise CollectionLoadError(f"GET {url} returned {type(payload).__name__}, expected list")

        photos: list[Photo] = []
        for row in payload:
            if not isinstance(row, dict):
                logger.warning("Skipping non-object photo record: {}", row)
                continue
            photos.append(Photo.from_dict(row))
        return photos
