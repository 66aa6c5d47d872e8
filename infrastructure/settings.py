"""Settings access helpers for JSON-based viewer configuration."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULTS: dict[str, Any] = {
    "server": {
        "base_url": "http://localhost:3000",
        "timeout_seconds": 10,
    },
    "gallery": {
        "thumbnail_size": 320,
    },
    "window": {
        "title": "Folio",
    },
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class JsonSettings:
    """JSON settings reader with dotted-key access layered over `DEFAULTS`.

    A missing file is not an error; the built-in defaults apply.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._path = Path(settings_path) if settings_path else None
        if self._path is None:
            return
        if not self._path.exists():
            logger.info("settings.json not found at {}, using defaults", self._path)
            return
        with self._path.open("r", encoding="utf-8") as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            _merge(self._data, loaded)
        else:
            logger.warning("Ignoring non-object settings file: {}", self._path)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Integer lookup that falls back to `default` on bad values."""
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            logger.warning("Invalid integer setting {}, using {}", key, default)
            return default
