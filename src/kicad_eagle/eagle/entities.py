"""
EAGLE element records.

One dataclass per EAGLE element the importer reads. Each ``from_node``
validates required attributes, converts values and fills documented
defaults for optional ones. Values stay in EAGLE units (mm, Y up); the
importer converts them when it builds native items.

Error kinds:
- a required attribute that is absent raises MissingAttributeError
- a value that cannot be converted (number, yes/no, rotation, alignment,
  closed keyword set) raises AttributeValueError
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, TypeVar

from lxml import etree

from ..exceptions import AttributeValueError, MissingAttributeError
from .alignment import Rotation, TextAlign
from .tree import ElementKind, iter_children, node_text, require_attribute

T = TypeVar("T")

_MISSING = object()


# =============================================================================
# Attribute helpers
# =============================================================================


def _convert(node: etree._Element, name: str, raw: str, convert: Callable[[str], T], expected: str) -> T:
    try:
        return convert(raw)
    except ValueError:
        raise AttributeValueError(
            str(node.tag), name, raw, expected=expected, line=node.sourceline
        ) from None


def _finite(raw: str) -> float:
    value = float(raw)
    # nan, inf and overflowing literals such as 1e400 have no native length
    if not math.isfinite(value):
        raise ValueError(raw)
    return value


def _float(node: etree._Element, name: str, default=_MISSING) -> float:
    raw = node.get(name)
    if raw is None:
        if default is _MISSING:
            raise MissingAttributeError(str(node.tag), name, line=node.sourceline)
        return default
    return _convert(node, name, raw, _finite, "finite number")


def _int(node: etree._Element, name: str, default=_MISSING) -> int:
    raw = node.get(name)
    if raw is None:
        if default is _MISSING:
            raise MissingAttributeError(str(node.tag), name, line=node.sourceline)
        return default
    return _convert(node, name, raw, int, "integer")


def _parse_bool(raw: str) -> bool:
    if raw == "yes":
        return True
    if raw == "no":
        return False
    raise ValueError(raw)


def _bool(node: etree._Element, name: str, default: bool) -> bool:
    raw = node.get(name)
    if raw is None:
        return default
    return _convert(node, name, raw, _parse_bool, "yes|no")


def _rotation(node: etree._Element, name: str = "rot") -> Optional[Rotation]:
    raw = node.get(name)
    if raw is None:
        return None
    rot = Rotation.parse(raw)
    if rot is None:
        raise AttributeValueError(
            str(node.tag), name, raw, expected="[S][M]R<degrees>", line=node.sourceline
        )
    return rot


def _align(node: etree._Element, name: str = "align") -> Optional[TextAlign]:
    raw = node.get(name)
    if raw is None:
        return None
    align = TextAlign.from_string(raw)
    if align is None:
        raise AttributeValueError(
            str(node.tag), name, raw, expected="bottom-left, center, top-right, ...",
            line=node.sourceline,
        )
    return align


def _or_default(value, default):
    # TextAlign.CENTER is 0, so "or" cannot be used
    return default if value is None else value


def _choice(node: etree._Element, name: str, choices: tuple[str, ...], default: Optional[str]):
    raw = node.get(name)
    if raw is None:
        return default
    if raw not in choices:
        raise AttributeValueError(
            str(node.tag), name, raw, expected="|".join(choices), line=node.sourceline
        )
    return raw


# =============================================================================
# Records
# =============================================================================


@dataclass
class ELayer:
    """``<layer number name color fill [visible] [active]>``"""

    number: int
    name: str
    color: int
    fill: int
    visible: bool = True
    active: bool = True

    @classmethod
    def from_node(cls, node: etree._Element) -> "ELayer":
        return cls(
            number=_int(node, "number"),
            name=require_attribute(node, "name"),
            color=_int(node, "color"),
            fill=_int(node, "fill"),
            visible=_bool(node, "visible", True),
            active=_bool(node, "active", True),
        )


@dataclass
class EWire:
    """``<wire>``; a ``curve`` attribute makes it an arc of that sweep (degrees)."""

    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    layer: int
    curve: Optional[float] = None
    style: str = "continuous"
    cap: str = "round"

    @classmethod
    def from_node(cls, node: etree._Element) -> "EWire":
        return cls(
            x1=_float(node, "x1"),
            y1=_float(node, "y1"),
            x2=_float(node, "x2"),
            y2=_float(node, "y2"),
            width=_float(node, "width"),
            layer=_int(node, "layer"),
            curve=_float(node, "curve", None),
            style=_choice(
                node, "style", ("continuous", "longdash", "shortdash", "dashdot"), "continuous"
            ),
            cap=_choice(node, "cap", ("flat", "round"), "round"),
        )

    @property
    def is_arc(self) -> bool:
        return self.curve is not None and self.curve != 0


@dataclass
class EJunction:
    x: float
    y: float

    @classmethod
    def from_node(cls, node: etree._Element) -> "EJunction":
        return cls(x=_float(node, "x"), y=_float(node, "y"))


@dataclass
class ELabel:
    """``<label>``. Defaults: proportional font, ratio 8, no rotation, no xref."""

    x: float
    y: float
    size: float
    layer: int
    font: str = "proportional"
    ratio: int = 8
    rot: Rotation = field(default_factory=Rotation)
    xref: bool = False

    @classmethod
    def from_node(cls, node: etree._Element) -> "ELabel":
        return cls(
            x=_float(node, "x"),
            y=_float(node, "y"),
            size=_float(node, "size"),
            layer=_int(node, "layer"),
            font=_choice(node, "font", ("vector", "proportional", "fixed"), "proportional"),
            ratio=_int(node, "ratio", 8),
            rot=_rotation(node) or Rotation(),
            xref=_bool(node, "xref", False),
        )


@dataclass
class EPinRef:
    """``<pinref part gate pin>``; only validated, it creates no item."""

    part: str
    gate: str
    pin: str

    @classmethod
    def from_node(cls, node: etree._Element) -> "EPinRef":
        return cls(
            part=require_attribute(node, "part"),
            gate=require_attribute(node, "gate"),
            pin=require_attribute(node, "pin"),
        )


@dataclass
class EText:
    """``<text>``. Defaults: proportional font, ratio 8, no rotation, bottom-left."""

    text: str
    x: float
    y: float
    size: float
    layer: int = 0
    font: Optional[str] = None
    ratio: int = 8
    rot: Rotation = field(default_factory=Rotation)
    align: TextAlign = TextAlign.BOTTOM_LEFT

    @classmethod
    def from_node(cls, node: etree._Element) -> "EText":
        return cls(
            text=node_text(node),
            x=_float(node, "x"),
            y=_float(node, "y"),
            size=_float(node, "size"),
            layer=_int(node, "layer", 0),
            font=_choice(node, "font", ("vector", "proportional", "fixed"), None),
            ratio=_int(node, "ratio", 8),
            rot=_rotation(node) or Rotation(),
            align=_or_default(_align(node), TextAlign.BOTTOM_LEFT),
        )

    @property
    def bold(self) -> bool:
        return self.ratio > 12


@dataclass
class ECircle:
    x: float
    y: float
    radius: float
    width: float
    layer: int

    @classmethod
    def from_node(cls, node: etree._Element) -> "ECircle":
        return cls(
            x=_float(node, "x"),
            y=_float(node, "y"),
            radius=_float(node, "radius"),
            width=_float(node, "width"),
            layer=_int(node, "layer"),
        )


@dataclass
class ERect:
    x1: float
    y1: float
    x2: float
    y2: float
    layer: int
    rot: Rotation = field(default_factory=Rotation)

    @classmethod
    def from_node(cls, node: etree._Element) -> "ERect":
        return cls(
            x1=_float(node, "x1"),
            y1=_float(node, "y1"),
            x2=_float(node, "x2"),
            y2=_float(node, "y2"),
            layer=_int(node, "layer"),
            rot=_rotation(node) or Rotation(),
        )


@dataclass
class EVertex:
    x: float
    y: float
    curve: float = 0.0

    @classmethod
    def from_node(cls, node: etree._Element) -> "EVertex":
        return cls(x=_float(node, "x"), y=_float(node, "y"), curve=_float(node, "curve", 0.0))


@dataclass
class EPolygon:
    width: float
    layer: int
    vertices: list[EVertex] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: etree._Element) -> "EPolygon":
        return cls(
            width=_float(node, "width"),
            layer=_int(node, "layer"),
            vertices=[
                EVertex.from_node(child)
                for child in iter_children(node)
                if ElementKind.of(child) is ElementKind.VERTEX
            ],
        )


@dataclass
class EPin:
    """``<pin>``. Defaults: no rotation, long, both visible.

    ``length`` and ``direction`` keep whatever keyword the file holds; the
    converter falls back to its own defaults for keywords it does not know.
    """

    name: str
    x: float
    y: float
    rot: Rotation = field(default_factory=Rotation)
    length: str = "long"
    visible: str = "both"
    direction: Optional[str] = None
    function: Optional[str] = None
    swaplevel: int = 0

    @classmethod
    def from_node(cls, node: etree._Element) -> "EPin":
        return cls(
            name=require_attribute(node, "name"),
            x=_float(node, "x"),
            y=_float(node, "y"),
            rot=_rotation(node) or Rotation(),
            length=node.get("length", "long"),
            visible=_choice(node, "visible", ("off", "pad", "pin", "both"), "both"),
            direction=node.get("direction"),
            function=_choice(node, "function", ("none", "dot", "clk", "dotclk"), None),
            swaplevel=_int(node, "swaplevel", 0),
        )


class AttrDisplay(Enum):
    """What an instance ``<attribute>`` shows."""

    OFF = "off"
    VALUE = "value"
    NAME = "name"
    BOTH = "both"


@dataclass
class EAttr:
    """``<attribute>`` on an instance (field override) or part."""

    name: str
    value: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    size: Optional[float] = None
    layer: Optional[int] = None
    ratio: Optional[int] = None
    rot: Optional[Rotation] = None
    display: AttrDisplay = AttrDisplay.VALUE
    align: Optional[TextAlign] = None

    @classmethod
    def from_node(cls, node: etree._Element) -> "EAttr":
        display = _choice(node, "display", tuple(d.value for d in AttrDisplay), "value")
        return cls(
            name=require_attribute(node, "name"),
            value=node.get("value"),
            x=_float(node, "x", None),
            y=_float(node, "y", None),
            size=_float(node, "size", None),
            layer=_int(node, "layer", None),
            ratio=_int(node, "ratio", None),
            rot=_rotation(node),
            display=AttrDisplay(display),
            align=_align(node),
        )


@dataclass
class EInstance:
    """``<instance part gate x y [smashed] [rot]>`` with its attribute overrides."""

    part: str
    gate: str
    x: float
    y: float
    smashed: bool = False
    rot: Optional[Rotation] = None
    attributes: list[EAttr] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: etree._Element) -> "EInstance":
        return cls(
            part=require_attribute(node, "part"),
            gate=require_attribute(node, "gate"),
            x=_float(node, "x"),
            y=_float(node, "y"),
            smashed=_bool(node, "smashed", False),
            rot=_rotation(node),
            attributes=[
                EAttr.from_node(child)
                for child in iter_children(node)
                if ElementKind.of(child) is ElementKind.ATTRIBUTE
            ],
        )


@dataclass
class EPart:
    """``<part>``: one placed component and the library device it uses."""

    name: str
    library: str
    deviceset: str
    device: str
    technology: str = ""
    value: Optional[str] = None

    @classmethod
    def from_node(cls, node: etree._Element) -> "EPart":
        return cls(
            name=require_attribute(node, "name"),
            library=require_attribute(node, "library"),
            deviceset=require_attribute(node, "deviceset"),
            device=require_attribute(node, "device"),
            technology=node.get("technology", ""),
            value=node.get("value"),
        )


@dataclass
class EConnect:
    """Gate pin to package pad(s). ``pad`` may list several pads."""

    gate: str
    pin: str
    pad: str

    @classmethod
    def from_node(cls, node: etree._Element) -> "EConnect":
        return cls(
            gate=require_attribute(node, "gate"),
            pin=require_attribute(node, "pin"),
            pad=require_attribute(node, "pad"),
        )

    @property
    def pads(self) -> list[str]:
        return self.pad.split()


@dataclass
class EDevice:
    name: str
    package: Optional[str] = None
    connects: list[EConnect] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: etree._Element) -> "EDevice":
        connects = []
        for child in iter_children(node):
            if ElementKind.of(child) is ElementKind.CONNECTS:
                connects.extend(
                    EConnect.from_node(c)
                    for c in iter_children(child)
                    if ElementKind.of(c) is ElementKind.CONNECT
                )
        return cls(
            name=require_attribute(node, "name"),
            package=node.get("package"),
            connects=connects,
        )

    def find_connect(self, gate: str, pin: str) -> Optional[EConnect]:
        for connect in self.connects:
            if connect.gate == gate and connect.pin == pin:
                return connect
        return None


@dataclass
class EGate:
    name: str
    symbol: str
    x: float
    y: float
    addlevel: str = "next"
    swaplevel: int = 0

    @classmethod
    def from_node(cls, node: etree._Element) -> "EGate":
        return cls(
            name=require_attribute(node, "name"),
            symbol=require_attribute(node, "symbol"),
            x=_float(node, "x"),
            y=_float(node, "y"),
            addlevel=_choice(
                node, "addlevel", ("must", "can", "next", "request", "always"), "next"
            ),
            swaplevel=_int(node, "swaplevel", 0),
        )


@dataclass
class EDeviceSet:
    name: str
    prefix: str = ""
    uservalue: bool = False

    @classmethod
    def from_node(cls, node: etree._Element) -> "EDeviceSet":
        return cls(
            name=require_attribute(node, "name"),
            prefix=node.get("prefix", ""),
            uservalue=_bool(node, "uservalue", False),
        )


__all__ = [
    "ELayer",
    "EWire",
    "EJunction",
    "ELabel",
    "EPinRef",
    "EText",
    "ECircle",
    "ERect",
    "EVertex",
    "EPolygon",
    "EPin",
    "AttrDisplay",
    "EAttr",
    "EInstance",
    "EPart",
    "EConnect",
    "EDevice",
    "EGate",
    "EDeviceSet",
]
