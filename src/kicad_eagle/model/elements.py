"""
Native Schematic Element Models

Wire, Junction, Label, Text, BusEntry, Marker and SheetSymbol classes.
All coordinates are integer mils, Y down.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..eagle.alignment import HJustify, VJustify
from ..geometry import Layer, Point, Rectangle

if TYPE_CHECKING:
    from .sheet import Sheet


@dataclass
class Wire:
    """A line between two points on the wire, bus or notes layer."""

    start: Point
    end: Point
    layer: Layer = Layer.WIRE

    @property
    def position(self) -> Point:
        return self.start

    def move(self, dx: int, dy: int) -> None:
        offset = Point(dx, dy)
        self.start = self.start + offset
        self.end = self.end + offset

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_points(self.start, self.end)

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y and self.start.x != self.end.x

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x and self.start.y != self.end.y

    @property
    def is_null(self) -> bool:
        """True when the wire has collapsed to a single point."""
        return self.start == self.end

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass
class Junction:
    """A junction dot where wires connect."""

    position: Point

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.position, 0)


class LabelKind(Enum):
    """Scope of a net label."""

    LOCAL = "local"
    GLOBAL = "global"


@dataclass
class Label:
    """A net label.

    ``spin_style`` is the quadrant the label text reads toward (0..3).
    """

    text: str
    position: Point
    kind: LabelKind = LabelKind.LOCAL
    size: int = 50
    spin_style: int = 0

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.position, 0)


@dataclass
class Text:
    """A free-standing note."""

    text: str
    position: Point
    width: int = 50
    height: int = 50
    angle: int = 0
    h_justify: HJustify = HJustify.LEFT
    v_justify: VJustify = VJustify.BOTTOM
    bold: bool = False
    italic: bool = False

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.position, 0)


@dataclass
class BusEntry:
    """A 45 degree connector between a bus and a wire.

    ``position`` is the left end. Shape ``/`` rises to the right (its other
    end is at +size, -size); shape ``\\`` falls to the right (+size, +size).
    """

    position: Point
    shape: str = "/"
    size: int = 100

    def __post_init__(self):
        if self.shape not in ("/", "\\"):
            raise ValueError(f"Invalid bus entry shape: {self.shape!r}")

    @property
    def end(self) -> Point:
        if self.shape == "/":
            return self.position + Point(self.size, -self.size)
        return self.position + Point(self.size, self.size)

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_points(self.position, self.end)

    @classmethod
    def between(cls, a: Point, b: Point, size: int = 100) -> "BusEntry":
        """Build the entry spanning two diagonal points."""
        left, right = (a, b) if a.x <= b.x else (b, a)
        return cls(position=left, shape="/" if right.y < left.y else "\\", size=size)


@dataclass
class Marker:
    """A visible flag left where the importer could not decide what to draw."""

    position: Point
    message: str

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.position, 0)


@dataclass
class SheetSymbol:
    """A box on the root page standing for one child sheet."""

    position: Point
    sheet: "Sheet"
    width: int = 1000
    height: int = 1000
    timestamp: int = 0

    @property
    def name(self) -> str:
        return self.sheet.name

    @property
    def file_name(self) -> str:
        return self.sheet.file_name

    def move(self, dx: int, dy: int) -> None:
        self.position = self.position + Point(dx, dy)

    def bounding_box(self) -> Rectangle:
        return Rectangle(
            self.position.x,
            self.position.y,
            self.position.x + self.width,
            self.position.y + self.height,
        )

