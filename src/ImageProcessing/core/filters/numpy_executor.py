"""NumPy vectorised executor for the image modifications.

The frame is processed in horizontal bands of output rows.  Each finished band
reports progress so the result list can show a live per-row indicator while a
large photo is being filtered.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
from PIL import Image

from ..modification import Modification

ProgressCallback = Callable[[float], None]

# ITU-R BT.601 luma weights.
_LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


def _grayscale_band(band: np.ndarray) -> np.ndarray:
    rgb = band[..., :3].astype(np.float32, copy=False)
    luma = rgb @ _LUMA_WEIGHTS
    gray = np.clip(np.rint(luma), 0, 255).astype(np.uint8)
    out = band.copy()
    out[..., 0] = gray
    out[..., 1] = gray
    out[..., 2] = gray
    return out


def _invert_band(band: np.ndarray) -> np.ndarray:
    out = band.copy()
    out[..., :3] = 255 - band[..., :3]
    return out


def _mirror_band(band: np.ndarray) -> np.ndarray:
    return band[:, ::-1]


def _left_side_mirror_band(band: np.ndarray) -> np.ndarray:
    """Reflect the left half of *band* onto its right half."""

    out = band.copy()
    width = band.shape[1]
    half = width // 2
    if half:
        # With odd widths the centre column keeps its original pixels.
        out[:, width - half :] = band[:, :half][:, ::-1]
    return out


_ROW_KERNELS = {
    Modification.GRAYSCALE: _grayscale_band,
    Modification.INVERT: _invert_band,
    Modification.MIRROR: _mirror_band,
    Modification.LEFT_SIDE_MIRROR: _left_side_mirror_band,
}


def _output_shape(pixels: np.ndarray, modification: Modification) -> tuple[int, ...]:
    if modification is Modification.ROTATE:
        height, width = pixels.shape[:2]
        return (width, height) + pixels.shape[2:]
    return pixels.shape


def _compute_band(
    pixels: np.ndarray,
    modification: Modification,
    start: int,
    stop: int,
) -> np.ndarray:
    if modification is Modification.ROTATE:
        # Output rows of a clockwise rotation are the source columns, read bottom-up.
        return np.rot90(pixels[:, start:stop], k=-1)
    return _ROW_KERNELS[modification](pixels[start:stop])


def apply_modification_array(
    pixels: np.ndarray,
    modification: Modification,
    *,
    band_height: int = 64,
    progress: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """Return a new ``uint8`` array holding *pixels* with *modification* applied.

    ``pixels`` must be shaped ``(height, width, channels)``.  The callback, if
    any, receives monotonically increasing values ending with exactly ``1.0``.
    """

    if pixels.ndim != 3:
        raise ValueError(f"Expected a (height, width, channels) array, got {pixels.shape}")

    out = np.empty(_output_shape(pixels, modification), dtype=np.uint8)
    total_rows = out.shape[0]
    step = max(1, int(band_height))

    for start in range(0, total_rows, step):
        stop = min(total_rows, start + step)
        out[start:stop] = _compute_band(pixels, modification, start, stop)
        if progress is not None and stop < total_rows:
            progress(stop / total_rows)

    if progress is not None:
        progress(1.0)
    return out


def apply_modification_numpy(
    image: Image.Image,
    modification: Modification,
    *,
    band_height: int = 64,
    progress: Optional[ProgressCallback] = None,
) -> Image.Image:
    """Apply *modification* to an ``RGB``/``RGBA`` Pillow image via NumPy."""

    pixels = np.asarray(image, dtype=np.uint8)
    result = apply_modification_array(
        pixels,
        modification,
        band_height=band_height,
        progress=progress,
    )
    # ``(h, w, 3)`` and ``(h, w, 4)`` uint8 arrays map back to ``RGB`` and ``RGBA``.
    return Image.fromarray(np.ascontiguousarray(result))


__all__ = ["apply_modification_array", "apply_modification_numpy"]
