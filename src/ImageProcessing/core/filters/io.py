"""Decoding helpers that hand normalised Pillow images to the executors."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from ...errors import ImageDecodeError

SUPPORTED_MODES = ("RGB", "RGBA")


def normalise_mode(image: Image.Image) -> Image.Image:
    """Return *image* converted to ``RGB`` or ``RGBA``.

    Palette images with a transparency entry and ``LA`` images keep their
    alpha channel; everything else is flattened to ``RGB``.
    """

    if image.mode in SUPPORTED_MODES:
        return image
    has_alpha = image.mode in ("LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    return image.convert("RGBA" if has_alpha else "RGB")


def _finalise(image: Image.Image) -> Image.Image:
    # ``exif_transpose`` returns a fresh, fully loaded image, detached from the source file.
    transposed = ImageOps.exif_transpose(image)
    if transposed is None:  # pragma: no cover - only returned with ``in_place=True``
        transposed = image
    transposed.load()
    return normalise_mode(transposed)


def decode_image(data: bytes) -> Image.Image:
    """Decode an encoded image held in memory."""

    if not data:
        raise ImageDecodeError("Downloaded data is empty")
    try:
        with Image.open(io.BytesIO(data)) as image:
            return _finalise(image)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Unable to decode image data: {exc}") from exc


def load_image(path: Path) -> Image.Image:
    """Open the image stored at *path*."""

    try:
        with Image.open(path) as image:
            return _finalise(image)
    except FileNotFoundError as exc:
        raise ImageDecodeError(f"Image file not found: {path}") from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Unable to open {path}: {exc}") from exc


__all__ = ["SUPPORTED_MODES", "decode_image", "load_image", "normalise_mode"]
