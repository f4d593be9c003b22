"""
EAGLE rotation strings and text alignment.

EAGLE encodes text anchors as one of nine alignment keywords and
orientation as a rotation string like ``R90`` or ``SMR270``. The native
model has a text angle (0 or 90 for readable text) plus separate
horizontal/vertical justification, so alignment must be recomputed from
the rotation relative to the owning instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class TextAlign(IntEnum):
    """EAGLE text anchor. Opposite corners are negations of each other."""

    CENTER = 0
    CENTER_LEFT = 1
    TOP_CENTER = 2
    TOP_LEFT = 3
    TOP_RIGHT = 4
    CENTER_RIGHT = -1
    BOTTOM_CENTER = -2
    BOTTOM_LEFT = -4
    BOTTOM_RIGHT = -3

    @classmethod
    def from_string(cls, value: str) -> Optional["TextAlign"]:
        """Parse an EAGLE keyword such as ``bottom-left``.

        Returns:
            TextAlign or None if the keyword is unknown
        """
        return _ALIGN_KEYWORDS.get(value.strip().lower())


_ALIGN_KEYWORDS = {
    "center": TextAlign.CENTER,
    "center-left": TextAlign.CENTER_LEFT,
    "top-center": TextAlign.TOP_CENTER,
    "top-left": TextAlign.TOP_LEFT,
    "top-right": TextAlign.TOP_RIGHT,
    "center-right": TextAlign.CENTER_RIGHT,
    "bottom-center": TextAlign.BOTTOM_CENTER,
    "bottom-left": TextAlign.BOTTOM_LEFT,
    "bottom-right": TextAlign.BOTTOM_RIGHT,
}


class HJustify(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VJustify(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


_JUSTIFY = {
    TextAlign.CENTER: (HJustify.CENTER, VJustify.CENTER),
    TextAlign.CENTER_LEFT: (HJustify.LEFT, VJustify.CENTER),
    TextAlign.CENTER_RIGHT: (HJustify.RIGHT, VJustify.CENTER),
    TextAlign.TOP_CENTER: (HJustify.CENTER, VJustify.TOP),
    TextAlign.TOP_LEFT: (HJustify.LEFT, VJustify.TOP),
    TextAlign.TOP_RIGHT: (HJustify.RIGHT, VJustify.TOP),
    TextAlign.BOTTOM_CENTER: (HJustify.CENTER, VJustify.BOTTOM),
    TextAlign.BOTTOM_LEFT: (HJustify.LEFT, VJustify.BOTTOM),
    TextAlign.BOTTOM_RIGHT: (HJustify.RIGHT, VJustify.BOTTOM),
}

# Mirroring a text at 90/270 degrees flips it top-to-bottom
_MIRROR_VERTICAL = {
    TextAlign.BOTTOM_RIGHT: TextAlign.TOP_RIGHT,
    TextAlign.BOTTOM_LEFT: TextAlign.TOP_LEFT,
    TextAlign.TOP_LEFT: TextAlign.BOTTOM_LEFT,
    TextAlign.TOP_RIGHT: TextAlign.BOTTOM_RIGHT,
}

# Mirroring a text at 0/180 degrees flips it left-to-right
_MIRROR_HORIZONTAL = {
    TextAlign.BOTTOM_RIGHT: TextAlign.BOTTOM_LEFT,
    TextAlign.BOTTOM_LEFT: TextAlign.BOTTOM_RIGHT,
    TextAlign.TOP_LEFT: TextAlign.TOP_RIGHT,
    TextAlign.TOP_RIGHT: TextAlign.TOP_LEFT,
    TextAlign.CENTER_LEFT: TextAlign.CENTER_RIGHT,
    TextAlign.CENTER_RIGHT: TextAlign.CENTER_LEFT,
}


_ROTATION_RE = re.compile(r"^(?P<spin>S)?(?P<mirror>M)?R(?P<degrees>\d+(?:\.\d+)?)$")


@dataclass(frozen=True)
class Rotation:
    """Parsed EAGLE rotation string.

    ``MR90`` is mirrored and rotated 90 degrees; ``S`` (spin) lets text be
    drawn upside down instead of being flipped to stay readable.
    """

    degrees: float = 0.0
    mirror: bool = False
    spin: bool = False

    @classmethod
    def parse(cls, value: str) -> Optional["Rotation"]:
        """Parse ``[S][M]R<degrees>``; None when the string is malformed."""
        match = _ROTATION_RE.match(value.strip())
        if match is None:
            return None
        return cls(
            degrees=float(match.group("degrees")),
            mirror=match.group("mirror") is not None,
            spin=match.group("spin") is not None,
        )

    @property
    def quadrant(self) -> int:
        """Rotation in 90 degree steps, 0..3."""
        return int(self.degrees / 90) % 4


@dataclass(frozen=True)
class TextStyle:
    """Native text orientation: angle in degrees plus justification."""

    angle: int = 0
    h_justify: HJustify = HJustify.LEFT
    v_justify: VJustify = VJustify.BOTTOM


def convert_alignment(
    align: TextAlign,
    rel_degrees: int,
    mirror: bool = False,
    spin: bool = False,
    abs_degrees: int = 0,
) -> TextStyle:
    """Compute the native text style for an EAGLE text.

    Args:
        align: EAGLE anchor
        rel_degrees: Rotation relative to the owning instance, 0..359
        mirror: Whether the text is mirrored
        spin: Keep the literal rotation instead of the readable one
        abs_degrees: Absolute rotation, used to pick the mirror axis

    Returns:
        TextStyle with angle and justification
    """
    value = int(align)
    angle = 0

    if spin:
        angle = rel_degrees % 360
    elif rel_degrees == 90:
        angle = 90
    elif rel_degrees == 180:
        value = -value
    elif rel_degrees == 270:
        angle = 90
        value = -value

    result = TextAlign(value)

    if mirror:
        if abs_degrees in (90, 270):
            result = _MIRROR_VERTICAL.get(result, result)
        elif abs_degrees in (0, 180):
            result = _MIRROR_HORIZONTAL.get(result, result)

    h_justify, v_justify = _JUSTIFY[result]
    return TextStyle(angle=angle, h_justify=h_justify, v_justify=v_justify)


__all__ = [
    "TextAlign",
    "HJustify",
    "VJustify",
    "Rotation",
    "TextStyle",
    "convert_alignment",
]
