import io
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Run every Qt test without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Mock QtMultimedia to avoid libpulse and camera dependencies in headless tests
if "PySide6.QtMultimedia" not in sys.modules:
    mock_mm = MagicMock()
    mock_mm.__spec__ = MagicMock()
    sys.modules["PySide6.QtMultimedia"] = mock_mm

if "PySide6.QtMultimediaWidgets" not in sys.modules:
    mock_mmw = MagicMock()
    mock_mmw.__spec__ = MagicMock()
    sys.modules["PySide6.QtMultimediaWidgets"] = mock_mmw

import numpy as np  # noqa: E402
from PIL import Image  # noqa: E402


class SyncThreadPool:
    """Stand-in for ``QThreadPool`` running every runnable immediately."""

    def __init__(self):
        self.started = []

    def start(self, runnable):
        self.started.append(runnable)
        runnable.run()


class DeferredThreadPool:
    """Stand-in for ``QThreadPool`` that only queues runnables."""

    def __init__(self):
        self.started = []

    def start(self, runnable):
        self.started.append(runnable)

    def run_all(self):
        pending, self.started = self.started, []
        for runnable in pending:
            runnable.run()


class FakeResponse:
    def __init__(self, chunks, *, status=200, content_length=None, raise_on_iter=None):
        self._chunks = list(chunks)
        self.status_code = status
        self.headers = {}
        if content_length is not None:
            self.headers["Content-Length"] = str(content_length)
        self._raise_on_iter = raise_on_iter

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            yield chunk
        if self._raise_on_iter is not None:
            raise self._raise_on_iter


class FakeSession:
    """Minimal ``requests.Session`` double returning canned responses."""

    def __init__(self, response=None, *, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, stream=False, timeout=None):
        self.calls.append((url, stream, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


def png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def rgb_image():
    """A 5x3 RGB image with a distinct value in every pixel."""

    pixels = np.arange(5 * 3 * 3, dtype=np.uint8).reshape((3, 5, 3)) * 5
    return Image.fromarray(pixels)


@pytest.fixture
def rgba_image():
    pixels = np.zeros((4, 6, 4), dtype=np.uint8)
    pixels[..., 0] = np.arange(6, dtype=np.uint8) * 40
    pixels[..., 1] = 100
    pixels[..., 2] = np.arange(4, dtype=np.uint8)[:, None] * 60
    pixels[..., 3] = np.arange(6, dtype=np.uint8) * 30 + 10
    return Image.fromarray(pixels)


@pytest.fixture
def sync_pool():
    return SyncThreadPool()


@pytest.fixture
def deferred_pool():
    return DeferredThreadPool()


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def encode_png():
    return png_bytes
