"""Application wide constants with environment overrides.

Every value can be tuned through an ``IMAGEPROCESSING_*`` environment variable
so packagers and tests can adjust behaviour without touching the code.
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, value)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.environ.get(name, "").strip()
    return Path(raw).expanduser() if raw else default


APP_NAME = "ImageProcessing"

# Network ----------------------------------------------------------------
DOWNLOAD_TIMEOUT = _env_float("IMAGEPROCESSING_DOWNLOAD_TIMEOUT", 15.0)
"""Seconds to wait for the server to connect or send the next chunk."""

DOWNLOAD_CHUNK_SIZE = _env_int("IMAGEPROCESSING_DOWNLOAD_CHUNK_SIZE", 64 * 1024)
MAX_DOWNLOAD_BYTES = _env_int("IMAGEPROCESSING_MAX_DOWNLOAD_BYTES", 64 * 1024 * 1024)
ALLOWED_URL_SCHEMES = ("http", "https")

# Filtering --------------------------------------------------------------
FILTER_BAND_HEIGHT = _env_int("IMAGEPROCESSING_FILTER_BAND_HEIGHT", 64)
"""Rows processed per step; each finished band reports progress."""

FILTER_BACKEND = os.environ.get("IMAGEPROCESSING_FILTER_BACKEND", "numpy").strip().lower() or "numpy"
FILTER_BACKENDS = ("numpy", "pillow")

# Presentation -----------------------------------------------------------
THUMBNAIL_SIZE = _env_int("IMAGEPROCESSING_THUMBNAIL_SIZE", 96, minimum=16)
PRIMARY_VIEW_MIN_HEIGHT = 320

# Storage ----------------------------------------------------------------
DATA_DIR = _env_path("IMAGEPROCESSING_DATA_DIR", Path.home() / ".imageprocessing")
SETTINGS_FILE = DATA_DIR / "settings.json"
LIBRARY_DIR = _env_path("IMAGEPROCESSING_LIBRARY_DIR", Path.home() / "Pictures" / APP_NAME)
