"""
Native Library Part Models

A LibPart is a reusable multi-unit symbol: four fields plus draw items,
each draw item tagged with the unit it belongs to. Coordinates are integer
mils relative to the part origin, Y down.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, Optional, Union

from ..eagle.alignment import HJustify, VJustify
from ..geometry import Point, Rectangle, merge_boxes

DEFAULT_PIN_TEXT_SIZE = 50
DEFAULT_PIN_LENGTH = 300


class PinType(str, Enum):
    """Electrical type of a pin."""

    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    TRI_STATE = "tri_state"
    PASSIVE = "passive"
    UNSPECIFIED = "unspecified"
    POWER_IN = "power_in"
    POWER_OUT = "power_out"
    OPEN_COLLECTOR = "open_collector"
    OPEN_EMITTER = "open_emitter"
    NO_CONNECT = "no_connect"


class PinShape(str, Enum):
    """Graphic style of a pin."""

    LINE = "line"
    INVERTED = "inverted"
    CLOCK = "clock"
    INVERTED_CLOCK = "inverted_clock"


class PinOrientation(str, Enum):
    """Direction the pin line extends from its connection point."""

    RIGHT = "R"
    UP = "U"
    LEFT = "L"
    DOWN = "D"

    def vector(self) -> Point:
        return _PIN_VECTORS[self]


_PIN_VECTORS = {
    PinOrientation.RIGHT: Point(1, 0),
    PinOrientation.UP: Point(0, -1),
    PinOrientation.LEFT: Point(-1, 0),
    PinOrientation.DOWN: Point(0, 1),
}


class FieldId(IntEnum):
    """Mandatory part fields."""

    REFERENCE = 0
    VALUE = 1
    FOOTPRINT = 2
    DATASHEET = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class LibField:
    """A text field of a part template."""

    id: FieldId
    text: str = ""
    position: Point = Point(0, 0)
    size: int = 50
    visible: bool = True
    angle: int = 0
    h_justify: HJustify = HJustify.CENTER
    v_justify: VJustify = VJustify.CENTER
    bold: bool = False


@dataclass
class LibCircle:
    unit: int
    center: Point
    radius: int
    width: int = 0

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.center, self.radius)


@dataclass
class LibRectangle:
    unit: int
    start: Point
    end: Point
    width: int = 0
    filled: bool = True

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_points(self.start, self.end)


@dataclass
class LibPolyline:
    unit: int
    points: list[Point] = field(default_factory=list)
    width: int = 0
    filled: bool = False

    def bounding_box(self) -> Optional[Rectangle]:
        if not self.points:
            return None
        return Rectangle.from_points(*self.points)


@dataclass
class LibArc:
    """Circular arc drawn counterclockwise (as seen on the page) from start to end."""

    unit: int
    center: Point
    radius: int
    start: Point
    end: Point
    width: int = 0
    filled: bool = False

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.center, self.radius)


@dataclass
class LibText:
    unit: int
    text: str
    position: Point
    width: int = 50
    height: int = 50
    angle: int = 0
    h_justify: HJustify = HJustify.LEFT
    v_justify: VJustify = VJustify.BOTTOM
    bold: bool = False

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(self.position, 0)


@dataclass
class LibPin:
    """A symbol pin. ``position`` is the connection point."""

    unit: int
    name: str
    number: str
    position: Point
    length: int = DEFAULT_PIN_LENGTH
    orientation: PinOrientation = PinOrientation.RIGHT
    type: PinType = PinType.PASSIVE
    shape: PinShape = PinShape.LINE
    name_size: int = DEFAULT_PIN_TEXT_SIZE
    number_size: int = DEFAULT_PIN_TEXT_SIZE

    @property
    def end(self) -> Point:
        """Point where the pin meets the symbol body."""
        return self.position + self.orientation.vector().scaled(self.length)

    @property
    def name_visible(self) -> bool:
        return self.name_size > 0

    @property
    def number_visible(self) -> bool:
        return self.number_size > 0

    def bounding_box(self) -> Rectangle:
        return Rectangle.from_points(self.position, self.end)


DrawItem = Union[LibCircle, LibRectangle, LibPolyline, LibArc, LibText, LibPin]


def _default_fields() -> dict[FieldId, LibField]:
    return {fid: LibField(id=fid) for fid in FieldId}


@dataclass
class LibPart:
    """A reusable part definition with one unit per gate."""

    name: str
    unit_count: int = 1
    power: bool = False
    fields: dict[FieldId, LibField] = field(default_factory=_default_fields)
    draw_items: list[DrawItem] = field(default_factory=list)

    @property
    def reference(self) -> LibField:
        return self.fields[FieldId.REFERENCE]

    @property
    def value(self) -> LibField:
        return self.fields[FieldId.VALUE]

    @property
    def footprint(self) -> LibField:
        return self.fields[FieldId.FOOTPRINT]

    def add(self, item: DrawItem) -> None:
        self.draw_items.append(item)

    def items(self, unit: Optional[int] = None) -> Iterator[DrawItem]:
        """Draw items, optionally only those of one unit."""
        for item in self.draw_items:
            if unit is None or item.unit == unit:
                yield item

    def pins(self, unit: Optional[int] = None) -> list[LibPin]:
        return [item for item in self.items(unit) if isinstance(item, LibPin)]

    def get_pin(self, number: str) -> Optional[LibPin]:
        for pin in self.pins():
            if pin.number == number:
                return pin
        return None

    def bounding_box(self, unit: Optional[int] = None) -> Optional[Rectangle]:
        """Bounding box of the body of one unit (or every unit)."""
        return merge_boxes(
            box for box in (item.bounding_box() for item in self.items(unit)) if box is not None
        )


@dataclass
class PartLibrary:
    """Name-keyed collection of parts shared by every sheet of a document."""

    name: str
    parts: dict[str, LibPart] = field(default_factory=dict)

    def add(self, part: LibPart) -> None:
        self.parts[part.name] = part

    def get(self, name: str) -> Optional[LibPart]:
        return self.parts.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.parts

    def __iter__(self) -> Iterator[LibPart]:
        return iter(self.parts.values())

    def __len__(self) -> int:
        return len(self.parts)
