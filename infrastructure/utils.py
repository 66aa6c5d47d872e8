"""Small shared helpers for URLs, timestamps and number display.

Used by both the viewer's HTTP layer and the collection service.
"""

from __future__ import annotations

from datetime import datetime, timezone


def join_url(base_url: str, path: str) -> str:
    """Join a service base URL with an absolute or relative asset path.

    Fully qualified `path` values are returned unchanged.
    """
    if path.startswith(("http://", "https://")):
        return path
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def utc_timestamp_iso(now: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision and a trailing "Z"."""
    dt = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def millis_id(now: datetime | None = None) -> str:
    """Millisecond epoch string, used for record ids and upload names."""
    dt = now or datetime.now(timezone.utc)
    return str(round(dt.timestamp() * 1000))


def format_number(value: float) -> str:
    """Render a number without a trailing ".0" for integral values."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"
