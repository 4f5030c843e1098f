"""Image modification package.

- io: decoding and mode normalisation
- numpy_executor: banded kernels that report progress
- pillow_executor: single-call Pillow implementations used as fallback
- facade: backend selection
"""

from __future__ import annotations

from .facade import apply_modification, resolve_backend
from .io import decode_image, load_image, normalise_mode

__all__ = [
    "apply_modification",
    "decode_image",
    "load_image",
    "normalise_mode",
    "resolve_backend",
]
