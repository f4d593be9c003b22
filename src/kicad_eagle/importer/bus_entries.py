"""
Bus entry synthesis.

EAGLE connects a net wire to a bus simply by ending the wire on the bus.
The native model needs a 45 degree bus entry between the two, so for
every wire end lying on a bus the wire is shortened by one entry size and
an entry is placed in the gap. Where no placement can be found a marker is
left on the sheet instead.

Runs once per sheet, after every wire of that sheet has been placed.
Running it again changes nothing: shortened wires no longer end on a bus
and markers are not duplicated.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..geometry import Layer, Point, segment_hit
from ..model.elements import BusEntry, Marker, Wire
from ..model.sheet import Sheet
from .session import DiagnosticKind, ImportSession

logger = logging.getLogger(__name__)

BUS_ENTRY_NEEDED = "Bus Entry needed"


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# (wire axis, away sign, bus side sign) -> (entry shape, entry origin in entry sizes)
#
# "away" points from the crossing toward the far end of the wire, "side"
# is the direction along the bus in which the bus continues. The entry
# runs from crossing + side to crossing + away; its origin is the left end.
ENTRY_TABLE: dict[tuple[Axis, int, int], tuple[str, tuple[int, int]]] = {
    (Axis.HORIZONTAL, -1, -1): ("/", (-1, 0)),
    (Axis.HORIZONTAL, -1, +1): ("\\", (-1, 0)),
    (Axis.HORIZONTAL, +1, -1): ("\\", (0, -1)),
    (Axis.HORIZONTAL, +1, +1): ("/", (0, 1)),
    (Axis.VERTICAL, -1, -1): ("/", (-1, 0)),
    (Axis.VERTICAL, +1, -1): ("\\", (-1, 0)),
    (Axis.VERTICAL, -1, +1): ("\\", (0, -1)),
    (Axis.VERTICAL, +1, +1): ("/", (0, 1)),
}

# Order in which the two bus directions are tried
PROBE_SIDES = (-1, +1)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def wire_axis(wire: Wire) -> Optional[Axis]:
    if wire.is_horizontal:
        return Axis.HORIZONTAL
    if wire.is_vertical:
        return Axis.VERTICAL
    return None


def _along(axis: Axis, amount: int) -> Point:
    """Vector of ``amount`` along an axis."""
    return Point(amount, 0) if axis is Axis.HORIZONTAL else Point(0, amount)


def _across(axis: Axis, amount: int) -> Point:
    """Vector of ``amount`` perpendicular to an axis."""
    return Point(0, amount) if axis is Axis.HORIZONTAL else Point(amount, 0)


def perpendicular_entry(
    crossing: Point, far: Point, axis: Axis, bus: Wire, size: int
) -> Optional[tuple[BusEntry, Point]]:
    """Entry for an axis-aligned wire ending on a bus.

    Returns:
        (entry, new wire end) or None when the bus does not continue one
        entry size away from the crossing in either direction
    """
    away = _sign(far.x - crossing.x) if axis is Axis.HORIZONTAL else _sign(far.y - crossing.y)

    for side in PROBE_SIDES:
        probe = crossing + _across(axis, side * size)
        if segment_hit(probe, bus.start, bus.end):
            shape, (ox, oy) = ENTRY_TABLE[(axis, away, side)]
            entry = BusEntry(position=crossing + Point(ox, oy).scaled(size), shape=shape, size=size)
            return entry, crossing + _along(axis, away * size)
    return None


def diagonal_entry(crossing: Point, far: Point, size: int) -> tuple[BusEntry, Point]:
    """Entry for a diagonal wire: it continues the wire's direction at 45 degrees."""
    step = Point(_sign(far.x - crossing.x), _sign(far.y - crossing.y)).scaled(size)
    new_end = crossing + step
    return BusEntry.between(crossing, new_end, size), new_end


def _bus_under(point: Point, busses: list[Wire]) -> Optional[Wire]:
    for bus in busses:
        if segment_hit(point, bus.start, bus.end):
            return bus
    return None


def move_labels(sheet: Sheet, old: Point, new: Point) -> None:
    """Move labels lying between a wire's old and new end onto the new end."""
    for label in sheet.labels:
        if segment_hit(label.position, old, new):
            label.position = new


def flag_missing_entry(session: ImportSession, sheet: Sheet, position: Point) -> None:
    for marker in sheet.markers:
        if marker.position == position and marker.message == BUS_ENTRY_NEEDED:
            return
    sheet.add(Marker(position=position, message=BUS_ENTRY_NEEDED))
    session.report(
        DiagnosticKind.BUS_ENTRY_NEEDED,
        "No room for a bus entry at a wire/bus crossing",
        sheet=sheet.name,
        x=position.x,
        y=position.y,
    )


def _resolve_end(
    session: ImportSession, sheet: Sheet, wire: Wire, at_start: bool, busses: list[Wire]
) -> bool:
    """Handle one end of a wire. Returns False when the wire was deleted."""
    crossing, far = (wire.start, wire.end) if at_start else (wire.end, wire.start)

    bus = _bus_under(crossing, busses)
    if bus is None:
        return True

    axis = wire_axis(wire)
    if axis is None:
        entry, new_end = diagonal_entry(crossing, far, session.config.bus_entry_size)
    else:
        # A wire running along the bus needs no entry
        if wire_axis(bus) is axis:
            return True
        found = perpendicular_entry(crossing, far, axis, bus, session.config.bus_entry_size)
        if found is None:
            flag_missing_entry(session, sheet, crossing)
            return True
        entry, new_end = found

    sheet.add(entry)
    move_labels(sheet, crossing, new_end)

    if new_end == far:
        sheet.remove(wire)
        return False

    if at_start:
        wire.start = new_end
    else:
        wire.end = new_end
    return True


def add_bus_entries(session: ImportSession, sheet: Sheet) -> None:
    """Insert bus entries wherever a wire of the sheet ends on a bus."""
    busses = sheet.wires(Layer.BUS)
    if not busses:
        return

    before = len(sheet.bus_entries)
    for wire in sheet.wires(Layer.WIRE):
        if wire.is_null:
            continue
        if _resolve_end(session, sheet, wire, True, busses):
            _resolve_end(session, sheet, wire, False, busses)

    logger.debug("Sheet %s: %d bus entries added", sheet.name, len(sheet.bus_entries) - before)
