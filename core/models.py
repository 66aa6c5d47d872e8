"""Core domain models for portfolio photos and render groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ExifRecord:
    """Camera settings captured at upload time. Any field may be empty."""

    camera: str = ""
    lens: str = ""
    aperture: str = ""
    shutter: str = ""
    iso: int | str | None = None
    focal: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExifRecord:
        """Build a record from a loosely typed mapping, ignoring unknown keys."""

        def _text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            camera=_text("camera"),
            lens=_text("lens"),
            aperture=_text("aperture"),
            shutter=_text("shutter"),
            iso=data.get("iso"),
            focal=_text("focal"),
        )


@dataclass
class Photo:
    """A single portfolio photo as returned by the collection endpoint."""

    id: str
    url: str
    title: str = ""
    category: str = ""
    series: str = ""
    date: str | None = None
    exif: ExifRecord | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Photo:
        """Parse one collection record; optional fields fall back to absent."""
        raw_exif = data.get("exif")
        exif = ExifRecord.from_dict(raw_exif) if isinstance(raw_exif, dict) else None
        series = data.get("series")
        date = data.get("date")
        return cls(
            id=str(data.get("id", "")),
            url=str(data.get("url", "")),
            title=str(data.get("title") or ""),
            category=str(data.get("category") or ""),
            series=series if isinstance(series, str) else "",
            date=date if isinstance(date, str) and date else None,
            exif=exif,
        )


@dataclass
class RenderGroup:
    """A titled section of photos, in the order they are painted."""

    title: str
    items: list[Photo] = field(default_factory=list)
    is_separator: bool = False
