"""Lightweight view model wrapper around `Photo`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Photo


@dataclass
class PhotoVM:
    """Expose convenient properties for tiles."""

    photo: Photo
    index: int

    @property
    def url(self) -> str:
        return self.photo.url

    @property
    def title(self) -> str:
        """Display title (falls back to the photo id)."""
        return self.photo.title or self.photo.id

    @property
    def category_tag(self) -> str:
        """Raw category as shown on home-page tiles."""
        return self.photo.category
