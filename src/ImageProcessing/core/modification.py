"""Enumeration of the supported image modifications."""

from __future__ import annotations

from enum import Enum

from ..errors import UnknownModificationError


class Modification(str, Enum):
    """Identifier attached to every processing button and result row."""

    ROTATE = "rotate"
    GRAYSCALE = "grayscale"
    MIRROR = "mirror"
    INVERT = "invert"
    LEFT_SIDE_MIRROR = "left_side_mirror"

    @property
    def label(self) -> str:
        """Human readable name shown on buttons and rows."""

        return _LABELS[self]

    @classmethod
    def from_value(cls, value: "str | Modification") -> "Modification":
        """Return the member named by *value*, accepting values and member names."""

        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() in (member.value, member.name.lower()):
                return member
        raise UnknownModificationError(f"Unknown modification: {value!r}")


_LABELS = {
    Modification.ROTATE: "Rotate",
    Modification.GRAYSCALE: "Grayscale",
    Modification.MIRROR: "Mirror",
    Modification.INVERT: "Invert",
    Modification.LEFT_SIDE_MIRROR: "Left mirror",
}


__all__ = ["Modification"]
