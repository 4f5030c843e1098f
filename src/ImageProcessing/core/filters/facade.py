"""Entry point selecting the executor used to modify an image."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PIL import Image

from ... import config
from ..modification import Modification
from .io import normalise_mode
from .numpy_executor import apply_modification_numpy
from .pillow_executor import apply_modification_pillow

_LOGGER = logging.getLogger(__name__)


def resolve_backend(name: Optional[str] = None) -> str:
    """Return a known backend name, defaulting to the configured one."""

    candidate = (name or config.FILTER_BACKEND or "numpy").strip().lower()
    if candidate not in config.FILTER_BACKENDS:
        _LOGGER.warning("Unknown filter backend %r, using numpy", candidate)
        return "numpy"
    return candidate


def apply_modification(
    image: Image.Image,
    modification: Modification | str,
    *,
    progress: Optional[Callable[[float], None]] = None,
    band_height: Optional[int] = None,
    backend: Optional[str] = None,
) -> Image.Image:
    """Return a new image with *modification* applied to *image*.

    The source image is never mutated.  ``progress`` receives values in
    ``[0, 1]`` and is always called with ``1.0`` once the result is ready.
    """

    modification = Modification.from_value(modification)
    source = normalise_mode(image)
    selected = resolve_backend(backend)

    if selected == "numpy":
        try:
            return apply_modification_numpy(
                source,
                modification,
                band_height=band_height or config.FILTER_BAND_HEIGHT,
                progress=progress,
            )
        except (MemoryError, ValueError):
            _LOGGER.warning(
                "NumPy executor failed for %s, falling back to Pillow",
                modification.value,
                exc_info=True,
            )

    return apply_modification_pillow(source, modification, progress=progress)


__all__ = ["apply_modification", "resolve_backend"]
