"""Core service interfaces and shared data structures.

This module defines the collection source protocol, the load outcome shared by
both page view-models, and the error raised when a collection cannot be read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from core.models import Photo


class CollectionLoadError(Exception):
    """Raised when the collection endpoint cannot be read or parsed."""


class IPhotoSource(Protocol):
    """Interface for anything that yields the full photo collection."""

    def load(self) -> list[Photo]:
        """Return every photo, newest first. Raises `CollectionLoadError`."""
        ...


@dataclass
class LoadResult:
    """Outcome of a single collection load.

    Attributes:
        photos: Photos in fetch order (empty on failure).
        error: Human-readable failure reason, or None on success.
    """

    photos: list[Photo] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the load did not fail."""
        return self.error is None
