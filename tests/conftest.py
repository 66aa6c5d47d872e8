from __future__ import annotations

import os

import pytest

from core.models import ExifRecord, Photo
from core.services.interfaces import CollectionLoadError

# widgets are built without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_photo(pid: str, category: str = "", series: str = "", **kwargs) -> Photo:
    return Photo(id=pid, url=f"/uploads/{pid}.jpg", category=category, series=series, **kwargs)


class FakeRepo:
    """Collection source returning canned photos or raising on demand."""

    def __init__(self, photos=None, error: str | None = None) -> None:
        self.photos = list(photos or [])
        self.error = error
        self.calls = 0

    def load(self):
        self.calls += 1
        if self.error:
            raise CollectionLoadError(self.error)
        return list(self.photos)


@pytest.fixture
def sample_photos() -> list[Photo]:
    """Newest first: 1 nature/Alps, 2 urban, 3 nature/Alps."""
    return [
        make_photo("1", "nature", "Alps", title="Peak"),
        make_photo("2", "urban", title="Street"),
        make_photo(
            "3",
            "nature",
            "Alps",
            title="Lake",
            date="2024-05-01T10:00:00.000Z",
            exif=ExifRecord(camera="X100", shutter="1/200s", iso=400, focal="35mm"),
        ),
    ]
