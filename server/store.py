"""Flat JSON file persistence for photo records.

The file holds a JSON array in insertion order (oldest first). A missing or
unparsable file reads as an empty collection. Writes go to a sibling temp file
that replaces `db.json` in one step, and every read-modify-write runs under the
store's lock, so concurrent requests on the threaded server never drop records.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile
import threading
from typing import Any

from loguru import logger


class JsonPhotoStore:
    """Read/modify/write access to `db.json`."""

    def __init__(self, db_path: str | Path) -> None:
        self._path = Path(db_path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[dict[str, Any]]:
        """Return all records, oldest first."""
        with self._lock:
            return self._read_unlocked()

    def write(self, records: list[dict[str, Any]]) -> None:
        with self._lock:
            self._write_unlocked(records)

    def newest_first(self) -> list[dict[str, Any]]:
        return list(reversed(self.read()))

    def append(self, record: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            records = self._read_unlocked()
            records.append(record)
            self._write_unlocked(records)
        return record

    def update(self, photo_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        """Apply non-None `changes` to the record with `photo_id`."""
        with self._lock:
            records = self._read_unlocked()
            for record in records:
                if record.get("id") == photo_id:
                    for key, value in changes.items():
                        if value is not None:
                            record[key] = value
                    self._write_unlocked(records)
                    return record
        return None

    def remove(self, photo_id: str) -> dict[str, Any] | None:
        """Drop the record with `photo_id` and return it, or None if unknown."""
        with self._lock:
            records = self._read_unlocked()
            kept = [r for r in records if r.get("id") != photo_id]
            if len(kept) == len(records):
                return None
            removed = next(r for r in records if r.get("id") == photo_id)
            self._write_unlocked(kept)
        return removed

    def _read_unlocked(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning("Unreadable photo store {}: {}", self._path, ex)
            return []
        if not isinstance(data, list):
            logger.warning("Photo store {} does not hold a list", self._path)
            return []
        return data

    def _write_unlocked(self, records: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
