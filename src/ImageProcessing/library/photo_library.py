"""Directory backed photo library receiving saved results."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image

from ..core.modification import Modification
from ..errors import SaveError
from ..utils.jsonio import atomic_write_bytes

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveOutcome:
    """Result of a save request as reported to the user."""

    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None


class PhotoLibrary:
    """Write processed images as PNG files into :attr:`root`."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _target_path(self, modification: Optional[Modification]) -> Path:
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        suffix = modification.value if modification is not None else "image"
        candidate = self._root / f"{stamp}_{suffix}.png"
        counter = 1
        while candidate.exists():
            candidate = self._root / f"{stamp}_{suffix}_{counter}.png"
            counter += 1
        return candidate

    def save(self, image: Image.Image, modification: Optional[Modification] = None) -> Path:
        """Encode *image* as PNG and store it; raises :class:`SaveError` on failure."""

        try:
            self._root.mkdir(parents=True, exist_ok=True)
            target = self._target_path(modification)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            atomic_write_bytes(target, buffer.getvalue())
        except (OSError, ValueError) as exc:
            raise SaveError(str(exc) or exc.__class__.__name__) from exc
        LOGGER.info("Saved image to %s", target)
        return target

    def save_outcome(
        self,
        image: Image.Image,
        modification: Optional[Modification] = None,
    ) -> SaveOutcome:
        """Like :meth:`save` but folds failures into a :class:`SaveOutcome`."""

        try:
            path = self.save(image, modification)
        except SaveError as exc:
            LOGGER.warning("Saving image failed: %s", exc)
            return SaveOutcome(error=str(exc))
        return SaveOutcome(path=path)


__all__ = ["PhotoLibrary", "SaveOutcome"]
