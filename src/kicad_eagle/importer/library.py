"""
Library conversion.

Turns every EAGLE ``<library>`` into native parts: one part per
deviceset/device pair, one unit per gate, the gate's symbol converted into
that unit's draw items. Symbol coordinates go through the same unit and Y
conversion as sheet coordinates.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from lxml import etree

from ..eagle.alignment import Rotation, convert_alignment
from ..eagle.entities import (
    ECircle,
    EDevice,
    EDeviceSet,
    EGate,
    EPin,
    EPolygon,
    ERect,
    EText,
    EWire,
)
from ..eagle.tree import ElementKind, children_of, iter_children, map_children, require_attribute
from ..geometry import Point, convert_arc_center
from ..model.part import (
    DEFAULT_PIN_LENGTH,
    DEFAULT_PIN_TEXT_SIZE,
    LibArc,
    LibCircle,
    LibField,
    LibPart,
    LibPin,
    LibPolyline,
    LibRectangle,
    LibText,
    PinOrientation,
    PinShape,
    PinType,
)
from ..units import text_size, to_mils, to_mils_y, to_native_length, to_native_y
from .names import escape_name, part_name
from .session import DiagnosticKind, ImportSession, LibraryRecord

logger = logging.getLogger(__name__)

PIN_LENGTHS = {
    "short": 100,
    "middle": 200,
    "long": 300,
    "point": 0,
}

PIN_TYPES = {
    "sup": PinType.POWER_IN,
    "pas": PinType.PASSIVE,
    "out": PinType.OUTPUT,
    "in": PinType.INPUT,
    "nc": PinType.NO_CONNECT,
    "io": PinType.BIDIRECTIONAL,
    "oc": PinType.OPEN_EMITTER,
    "hiz": PinType.TRI_STATE,
}

PIN_SHAPES = {
    "dot": PinShape.INVERTED,
    "clk": PinShape.CLOCK,
    "dotclk": PinShape.INVERTED_CLOCK,
}

PIN_ORIENTATIONS = {
    0: PinOrientation.RIGHT,
    90: PinOrientation.UP,
    180: PinOrientation.LEFT,
    270: PinOrientation.DOWN,
}


@dataclass
class SymbolConversion:
    """What converting one gate's symbol found out."""

    pin_count: int = 0
    has_supply_pin: bool = False
    found_name: bool = False
    found_value: bool = False

    @property
    def power(self) -> bool:
        """A symbol whose only pin is a supply pin is a power symbol."""
        return self.pin_count == 1 and self.has_supply_pin


def _point(x: float, y: float) -> Point:
    return Point(to_mils(x), to_mils_y(y))


def _native(x: float, y: float) -> tuple[float, float]:
    return (to_native_length(x), to_native_y(y))


def _round_point(p: tuple[float, float]) -> Point:
    return Point(int(round(p[0])), int(round(p[1])))


# =============================================================================
# Libraries and devicesets
# =============================================================================


def load_library(session: ImportSession, node: etree._Element) -> LibraryRecord:
    """Convert one ``<library>`` and register its parts in the session library."""
    record = LibraryRecord(name=require_attribute(node, "name"))
    children = map_children(node)

    for symbol in children_of(children, "symbols"):
        if ElementKind.of(symbol) is ElementKind.SYMBOL:
            record.symbols[require_attribute(symbol, "name")] = symbol

    for deviceset in children_of(children, "devicesets"):
        if ElementKind.of(deviceset) is ElementKind.DEVICESET:
            load_deviceset(session, record, deviceset)

    logger.debug(
        "Library %s: %d symbols, %d parts", record.name, len(record.symbols), len(record.parts)
    )
    return record


def load_deviceset(session: ImportSession, record: LibraryRecord, node: etree._Element) -> None:
    """Build one part per device of a deviceset."""
    deviceset = EDeviceSet.from_node(node)
    children = map_children(node)

    gates = [
        EGate.from_node(gate)
        for gate in children_of(children, "gates")
        if ElementKind.of(gate) is ElementKind.GATE
    ]

    for device_node in children_of(children, "devices"):
        if ElementKind.of(device_node) is not ElementKind.DEVICE:
            continue
        device = EDevice.from_node(device_node)
        part = build_part(session, record, deviceset, device, gates)
        record.parts[part.name] = part
        session.library.add(part)


def build_part(
    session: ImportSession,
    record: LibraryRecord,
    deviceset: EDeviceSet,
    device: EDevice,
    gates: list[EGate],
) -> LibPart:
    """Create the part for one device, converting each gate into a unit.

    Args:
        session: Current import
        record: Library the deviceset belongs to
        deviceset: The deviceset
        device: One device of the deviceset
        gates: The deviceset's gates in document order

    Returns:
        The finished part
    """
    name = part_name(deviceset.name, device.name)
    if device.package:
        record.packages[name] = device.package

    part = LibPart(name=name, unit_count=len(gates))
    if deviceset.prefix:
        part.reference.text = deviceset.prefix

    found_name = False
    found_value = False
    power = False

    for unit, gate in enumerate(gates, start=1):
        record.units[(deviceset.name, device.name, gate.name)] = unit

        symbol = record.symbols.get(gate.symbol)
        if symbol is None:
            session.report(
                DiagnosticKind.UNRESOLVED_REFERENCE,
                f"Gate '{gate.name}' uses unknown symbol '{gate.symbol}'",
                library=record.name,
                deviceset=deviceset.name,
            )
            continue

        result = convert_symbol(session, part, symbol, unit, gate.name, device)
        found_name = found_name or result.found_name
        found_value = found_value or result.found_value
        power = result.power

    # Without a >NAME / >VALUE marker there is nowhere to show the field
    part.reference.visible = found_name
    part.value.visible = found_value

    part.unit_count = len(gates)
    part.power = len(gates) == 1 and power
    return part


# =============================================================================
# Symbols
# =============================================================================


def convert_symbol(
    session: ImportSession,
    part: LibPart,
    node: etree._Element,
    unit: int,
    gate_name: str,
    device: EDevice,
) -> SymbolConversion:
    """Add the draw items of one symbol to ``part`` as unit ``unit``.

    ``>NAME`` and ``>VALUE`` texts are not drawn; they place the reference
    and value fields instead.
    """
    result = SymbolConversion()

    for child in iter_children(node):
        kind = ElementKind.of(child)

        if kind is ElementKind.CIRCLE:
            part.add(convert_circle(ECircle.from_node(child), unit))
        elif kind is ElementKind.RECTANGLE:
            part.add(convert_rectangle(ERect.from_node(child), unit))
        elif kind is ElementKind.POLYGON:
            part.add(convert_polygon(EPolygon.from_node(child), unit))
        elif kind is ElementKind.WIRE:
            part.add(convert_wire(EWire.from_node(child), unit))
        elif kind is ElementKind.PIN:
            epin = EPin.from_node(child)
            result.pin_count += 1
            if (epin.direction or "").lower() == "sup":
                result.has_supply_pin = True
            for pin in convert_pin(session, epin, unit, result.pin_count, gate_name, device):
                part.add(pin)
        elif kind is ElementKind.TEXT:
            etext = EText.from_node(child)
            marker = etext.text.strip().upper()
            if marker == ">NAME":
                apply_field_marker(part.reference, etext)
                result.found_name = True
            elif marker == ">VALUE":
                apply_field_marker(part.value, etext)
                result.found_value = True
            else:
                part.add(convert_text(etext, unit))

    return result


def convert_circle(circle: ECircle, unit: int) -> LibCircle:
    return LibCircle(
        unit=unit,
        center=_point(circle.x, circle.y),
        radius=to_mils(circle.radius),
        width=to_mils(circle.width),
    )


def convert_rectangle(rect: ERect, unit: int) -> LibRectangle:
    # EAGLE rectangles are always filled
    return LibRectangle(
        unit=unit,
        start=_point(rect.x1, rect.y1),
        end=_point(rect.x2, rect.y2),
        filled=True,
    )


def convert_polygon(polygon: EPolygon, unit: int) -> LibPolyline:
    return LibPolyline(
        unit=unit,
        points=[_point(v.x, v.y) for v in polygon.vertices],
        width=to_mils(polygon.width),
        filled=True,
    )


def convert_wire(wire: EWire, unit: int):
    """A straight wire becomes a two point polyline, a curved one an arc."""
    if wire.is_arc and (wire.x1, wire.y1) != (wire.x2, wire.y2):
        return convert_arc(wire, unit)
    return LibPolyline(
        unit=unit,
        points=[_point(wire.x1, wire.y1), _point(wire.x2, wire.y2)],
        width=to_mils(wire.width),
    )


def convert_arc(wire: EWire, unit: int) -> LibArc:
    """Convert a curved wire to an arc.

    A line thicker than the arc radius cannot be drawn as a stroked arc;
    it is emulated with a filled arc whose ends are pushed out by the
    line width.
    """
    begin = _native(wire.x1, wire.y1)
    end = _native(wire.x2, wire.y2)
    center = convert_arc_center(begin, end, wire.curve)

    radius = math.hypot(begin[0] - center[0], begin[1] - center[1])
    width = to_native_length(wire.width)
    filled = False

    if width > radius:
        scale = (width + radius) / radius
        begin = (center[0] + (begin[0] - center[0]) * scale, center[1] + (begin[1] - center[1]) * scale)
        end = (center[0] + (end[0] - center[0]) * scale, center[1] + (end[1] - center[1]) * scale)
        radius = width + radius
        width = 1
        filled = True

    # Arcs run counterclockwise from start to end
    if wire.curve > 0:
        start, stop = begin, end
    else:
        start, stop = end, begin

    return LibArc(
        unit=unit,
        center=_round_point(center),
        radius=int(round(radius)),
        start=_round_point(start),
        end=_round_point(stop),
        width=int(round(width)),
        filled=filled,
    )


def convert_text(etext: EText, unit: int) -> LibText:
    width, height = text_size(etext.size, etext.font)
    degrees = int(etext.rot.degrees)
    style = convert_alignment(etext.align, degrees, etext.rot.mirror, etext.rot.spin, degrees)
    return LibText(
        unit=unit,
        text=etext.text,
        position=_point(etext.x, etext.y),
        width=width,
        height=height,
        angle=style.angle,
        h_justify=style.h_justify,
        v_justify=style.v_justify,
        bold=etext.bold,
    )


def apply_field_marker(field: LibField, etext: EText) -> None:
    """Place a part field where the symbol's ``>NAME``/``>VALUE`` text is."""
    text = convert_text(etext, unit=0)
    field.position = text.position
    field.size = text.height
    field.angle = text.angle
    field.h_justify = text.h_justify
    field.v_justify = text.v_justify
    field.bold = text.bold
    field.visible = True


# =============================================================================
# Pins
# =============================================================================


def pin_orientation(session: ImportSession, rot: Rotation, name: str) -> PinOrientation:
    orientation = PIN_ORIENTATIONS.get(rot.degrees)
    if orientation is None:
        session.report(
            DiagnosticKind.UNHANDLED_ROTATION,
            f"Pin '{name}' has unhandled rotation {rot.degrees:g}; using 0",
            pin=name,
        )
        return PinOrientation.RIGHT
    return orientation


def pin_type(direction: Optional[str]) -> PinType:
    """Electrical type for an EAGLE pin direction; no direction is passive."""
    if direction is None:
        return PinType.PASSIVE
    return PIN_TYPES.get(direction.lower(), PinType.UNSPECIFIED)


def convert_pin(
    session: ImportSession,
    epin: EPin,
    unit: int,
    index: int,
    gate_name: str,
    device: EDevice,
) -> list[LibPin]:
    """Convert one symbol pin into the pins of the part.

    Without connects the pin is numbered by its position in the symbol.
    With connects it gets one copy per pad it is connected to, and none if
    it is not connected at all. A pin on several pads shows no number.

    Args:
        session: Current import
        epin: The symbol pin
        unit: Unit (gate number) the pin belongs to
        index: 1-based position of the pin within the symbol
        gate_name: Gate the symbol is used by
        device: Device whose connects map pins to pads

    Returns:
        List of pins, possibly empty
    """
    name_size = DEFAULT_PIN_TEXT_SIZE
    number_size = DEFAULT_PIN_TEXT_SIZE
    if epin.visible == "off":
        name_size = number_size = 0
    elif epin.visible == "pad":
        name_size = 0
    elif epin.visible == "pin":
        number_size = 0

    pin = LibPin(
        unit=unit,
        name=escape_name(epin.name),
        number=str(index),
        position=_point(epin.x, epin.y),
        length=PIN_LENGTHS.get(epin.length, DEFAULT_PIN_LENGTH),
        orientation=pin_orientation(session, epin.rot, epin.name),
        type=pin_type(epin.direction),
        shape=PIN_SHAPES.get(epin.function, PinShape.LINE),
        name_size=name_size,
        number_size=number_size,
    )

    if not device.connects:
        return [pin]

    connect = device.find_connect(gate_name, epin.name)
    if connect is None:
        return []

    pads = connect.pads
    if len(pads) > 1:
        number_size = 0
    return [replace(pin, number=pad, number_size=number_size) for pad in pads]
