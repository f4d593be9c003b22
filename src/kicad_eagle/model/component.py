"""
Native Component Model

A Component is one placed unit of a library part on a sheet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from ..eagle.alignment import HJustify, VJustify
from ..geometry import Point, Rectangle
from .part import FieldId, LibField, LibPart


class Orientation(IntEnum):
    """Placement rotation in degrees, counterclockwise as seen on the page."""

    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @classmethod
    def from_degrees(cls, degrees: float) -> Optional["Orientation"]:
        """Orientation for an exact quarter turn; None for any other angle."""
        for member in cls:
            if degrees == member.value:
                return member
        return None


# Rotation matrices (a, b, c, d) for Y-down coordinates:
# x' = a*x + b*y, y' = c*x + d*y
_MATRICES = {
    Orientation.DEG_0: (1, 0, 0, 1),
    Orientation.DEG_90: (0, 1, -1, 0),
    Orientation.DEG_180: (-1, 0, 0, -1),
    Orientation.DEG_270: (0, -1, 1, 0),
}


def transform(orientation: Orientation, mirror: bool = False) -> tuple[int, int, int, int]:
    """Matrix placing a part-relative point on the sheet.

    The rotation is applied first; mirroring then negates X about the
    component origin.
    """
    a, b, c, d = _MATRICES[orientation]
    if mirror:
        a, b = -a, -b
    return a, b, c, d


@dataclass
class ComponentField:
    """A field of a placed component. ``position`` is absolute."""

    id: FieldId
    text: str
    position: Point
    size: int = 50
    visible: bool = True
    angle: int = 0
    h_justify: HJustify = HJustify.CENTER
    v_justify: VJustify = VJustify.CENTER
    mirror: bool = False
    bold: bool = False

    @property
    def name(self) -> str:
        return self.id.label

    @classmethod
    def from_template(cls, template: LibField, origin: Point) -> "ComponentField":
        """Copy a part field, offsetting its position by the component origin."""
        return cls(
            id=template.id,
            text=template.text,
            position=template.position + origin,
            size=template.size,
            visible=template.visible,
            angle=template.angle,
            h_justify=template.h_justify,
            v_justify=template.v_justify,
            bold=template.bold,
        )


@dataclass
class Component:
    """A placed unit of a library part."""

    lib_id: str
    part: LibPart
    unit: int
    position: Point
    orientation: Orientation = Orientation.DEG_0
    mirror: bool = False
    fields: dict[FieldId, ComponentField] = field(default_factory=dict)
    timestamp: int = 0
    # (sheet path + timestamp, reference, unit)
    references: list[tuple[str, str, int]] = field(default_factory=list)

    @property
    def reference(self) -> str:
        return self.fields[FieldId.REFERENCE].text

    @property
    def value(self) -> str:
        return self.fields[FieldId.VALUE].text

    @property
    def footprint(self) -> str:
        f = self.fields.get(FieldId.FOOTPRINT)
        return f.text if f else ""

    def matrix(self) -> tuple[int, int, int, int]:
        return transform(self.orientation, self.mirror)

    def to_sheet(self, point: Point) -> Point:
        """Map a part-relative point to sheet coordinates."""
        a, b, c, d = self.matrix()
        return Point(
            self.position.x + a * point.x + b * point.y,
            self.position.y + c * point.x + d * point.y,
        )

    def pin_positions(self) -> dict[str, Point]:
        """Sheet position of every pin of this unit, keyed by pin number."""
        return {pin.number: self.to_sheet(pin.position) for pin in self.part.pins(self.unit)}

    def move(self, dx: int, dy: int) -> None:
        offset = Point(dx, dy)
        self.position = self.position + offset
        for f in self.fields.values():
            f.position = f.position + offset

    def bounding_box(self) -> Rectangle:
        body = self.part.bounding_box(self.unit)
        if body is None:
            return Rectangle.around(self.position, 0)
        corners = [
            Point(body.min_x, body.min_y),
            Point(body.max_x, body.max_y),
        ]
        return Rectangle.from_points(*(self.to_sheet(p) for p in corners))
