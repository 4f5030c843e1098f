"""Small JSON backed preference store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import SettingsInvalidError
from .utils.jsonio import read_json, write_json

LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "download.last_url": "",
    "library.root": "",
    "filters.backend": "",
}


class SettingsManager:
    """Persist flat ``dotted.key`` preferences into a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._data: Dict[str, Any] = dict(DEFAULT_SETTINGS)
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Read the settings file, keeping defaults when it is missing or corrupt."""

        self._loaded = True
        if not self._path.exists():
            return
        try:
            stored = read_json(self._path)
        except SettingsInvalidError as exc:
            LOGGER.warning("Ignoring unreadable settings file: %s", exc)
            return
        for key, value in stored.items():
            expected = type(DEFAULT_SETTINGS[key]) if key in DEFAULT_SETTINGS else None
            if expected is not None and not isinstance(value, expected):
                LOGGER.warning("Ignoring setting %s with unexpected value %r", key, value)
                continue
            self._data[key] = value

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        if not self._loaded:
            self.load()
        value = self._data.get(key)
        if value is None or value == "":
            return default if default is not None else value
        return value

    def set(self, key: str, value: Any) -> None:
        if not self._loaded:
            self.load()
        if self._data.get(key) == value:
            return
        self._data[key] = value
        try:
            write_json(self._path, self._data)
        except OSError as exc:
            LOGGER.warning("Failed to persist settings to %s: %s", self._path, exc)
