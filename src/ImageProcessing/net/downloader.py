"""Streamed image download with progress reporting and cancellation."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional
from urllib.parse import urlsplit

import requests
from PIL import Image

from .. import config
from ..core.filters.io import decode_image
from ..errors import DownloadCancelledError, DownloadError, InvalidURLError

LOGGER = logging.getLogger(__name__)


def parse_download_url(text: Optional[str]) -> str:
    """Return the normalised URL typed by the user.

    Only absolute ``http``/``https`` URLs with a host are accepted.  Anything
    else raises :class:`InvalidURLError` so callers never start a download.
    """

    if text is None:
        raise InvalidURLError("No URL given")
    candidate = text.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        raise InvalidURLError(f"Wrong url: {text!r}")
    try:
        parts = urlsplit(candidate)
        # Accessing ``port`` validates the numeric range.
        parts.port
    except ValueError as exc:
        raise InvalidURLError(f"Wrong url: {text!r}") from exc
    if parts.scheme.lower() not in config.ALLOWED_URL_SCHEMES or not parts.hostname:
        raise InvalidURLError(f"Wrong url: {text!r}")
    return candidate


def _content_length(response: requests.Response) -> Optional[int]:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def download_bytes(
    url: str,
    *,
    on_progress: Optional[Callable[[float], None]] = None,
    cancel_event: Optional[threading.Event] = None,
    session: Optional[requests.Session] = None,
    chunk_size: Optional[int] = None,
    timeout: Optional[float] = None,
    max_bytes: Optional[int] = None,
) -> bytes:
    """Fetch the body at *url*, checking *cancel_event* between chunks."""

    http = session if session is not None else requests.Session()
    chunk_size = chunk_size or config.DOWNLOAD_CHUNK_SIZE
    timeout = timeout or config.DOWNLOAD_TIMEOUT
    max_bytes = max_bytes or config.MAX_DOWNLOAD_BYTES

    def _check_cancelled() -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise DownloadCancelledError(f"Download cancelled: {url}")

    _check_cancelled()
    if on_progress is not None:
        on_progress(0.0)

    try:
        with http.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            total = _content_length(response)
            if total is not None and total > max_bytes:
                raise DownloadError(f"Image is too large ({total} bytes)")

            buffer = bytearray()
            for chunk in response.iter_content(chunk_size=chunk_size):
                _check_cancelled()
                if not chunk:
                    continue
                buffer.extend(chunk)
                if len(buffer) > max_bytes:
                    raise DownloadError(f"Image is larger than {max_bytes} bytes")
                if on_progress is not None and total is not None:
                    on_progress(min(1.0, len(buffer) / total))
    except requests.RequestException as exc:
        _check_cancelled()
        raise DownloadError(f"Download failed: {exc}") from exc
    finally:
        if session is None:
            http.close()

    _check_cancelled()
    if on_progress is not None:
        on_progress(1.0)
    LOGGER.debug("Downloaded %d bytes from %s", len(buffer), url)
    return bytes(buffer)


def download_image(
    url: str,
    *,
    on_progress: Optional[Callable[[float], None]] = None,
    cancel_event: Optional[threading.Event] = None,
    session: Optional[requests.Session] = None,
    chunk_size: Optional[int] = None,
    timeout: Optional[float] = None,
    max_bytes: Optional[int] = None,
) -> Image.Image:
    """Download and decode the image at *url*."""

    payload = download_bytes(
        url,
        on_progress=on_progress,
        cancel_event=cancel_event,
        session=session,
        chunk_size=chunk_size,
        timeout=timeout,
        max_bytes=max_bytes,
    )
    return decode_image(payload)


__all__ = ["download_bytes", "download_image", "parse_download_url"]
