"""
Unit conversion between EAGLE and the native schematic model.

EAGLE stores lengths in millimetres with Y increasing upward. The native
model stores integer mils with Y increasing downward, so every Y ordinate
is negated exactly once, at the point it is read from the XML.
"""

from __future__ import annotations

__all__ = [
    "MM_PER_MIL",
    "EUNIT_TO_MIL",
    "to_native_length",
    "to_native_y",
    "to_mils",
    "to_mils_y",
    "from_native_length",
    "text_size",
]

# Conversion constants
MM_PER_MIL = 0.0254
EUNIT_TO_MIL = 1000.0 / 25.4


def to_native_length(value: float) -> float:
    """Scale an EAGLE length (mm) to native units (mils)."""
    return value * EUNIT_TO_MIL


def to_native_y(value: float) -> float:
    """Scale an EAGLE Y ordinate and flip it to the Y-down convention."""
    return -value * EUNIT_TO_MIL


def to_mils(value: float) -> int:
    """Scale an EAGLE length to the integer mils stored in the document."""
    return int(round(to_native_length(value)))


def to_mils_y(value: float) -> int:
    """Scale and flip an EAGLE Y ordinate to integer mils."""
    return int(round(to_native_y(value)))


def from_native_length(value: float) -> float:
    """Convert native mils back to EAGLE millimetres."""
    return value * MM_PER_MIL


def text_size(size: float, font: str | None = None) -> tuple[int, int]:
    """Convert an EAGLE text height to a native (width, height) pair.

    EAGLE's proportional font (no ``font`` attribute) renders narrower than
    its height, the fixed font is squat, and the vector font is square.

    Args:
        size: Text height in mm
        font: EAGLE font keyword; None means the default proportional font

    Returns:
        (width, height) in mils
    """
    height = to_native_length(size)
    if font is None or font == "proportional":
        return int(round(height * 0.85)), int(round(height))
    if font == "fixed":
        return int(round(height)), int(round(height * 0.80))
    return int(round(height)), int(round(height))
