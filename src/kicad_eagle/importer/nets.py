"""
Nets, busses and their labels.

EAGLE names every net globally; the native model connects same-named
labels only within a sheet unless the label is global. A net that appears
on more than one sheet therefore gets global labels, any other net gets
local ones.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lxml import etree

from ..eagle.alignment import Rotation
from ..eagle.entities import EJunction, ELabel, EPinRef, EWire
from ..eagle.tree import (
    ElementKind,
    children_of,
    count_children,
    iter_children,
    map_children,
)
from ..geometry import Point, midpoint, nearest_line_point, segment_hit
from ..model.elements import Junction, Label, LabelKind, Wire
from ..model.sheet import Sheet
from ..units import to_mils, to_mils_y
from .names import escape_name
from .session import ImportSession

logger = logging.getLogger(__name__)

# Text size of labels added for segments that had none
SYNTHETIC_LABEL_SIZE = 10


def count_nets(session: ImportSession, sheet_nodes: Iterable[etree._Element]) -> None:
    """Count, for every net name, how many sheets it appears on.

    Must run over all sheets before any label is created.
    """
    for sheet_node in sheet_nodes:
        names = {
            net.get("name", "")
            for net in children_of(map_children(sheet_node), "nets")
            if ElementKind.of(net) is ElementKind.NET
        }
        session.net_counts.update(names)


def label_kind(session: ImportSession, net_name: str) -> LabelKind:
    if session.net_counts[net_name] > 1:
        return LabelKind.GLOBAL
    return LabelKind.LOCAL


def label_spin_style(rot: Rotation) -> int:
    """Quadrant of a label; mirrored horizontal labels read the other way."""
    style = rot.quadrant
    if rot.mirror and style in (0, 2):
        style = (style + 2) % 4
    return style


def load_wire(session: ImportSession, node: etree._Element) -> Wire:
    ewire = EWire.from_node(node)
    return Wire(
        start=Point(to_mils(ewire.x1), to_mils_y(ewire.y1)),
        end=Point(to_mils(ewire.x2), to_mils_y(ewire.y2)),
        layer=session.layer(ewire.layer),
    )


def load_junction(node: etree._Element) -> Junction:
    ejunction = EJunction.from_node(node)
    return Junction(position=Point(to_mils(ejunction.x), to_mils_y(ejunction.y)))


def label_on_wire(position: Point, wires: list[Wire], tolerance: int = 0) -> bool:
    return any(segment_hit(position, w.start, w.end, tolerance) for w in wires)


def load_label(
    session: ImportSession, node: etree._Element, net_name: str, wires: list[Wire]
) -> Label:
    """Create the label for a ``<label>`` of a segment.

    EAGLE allows a label to sit away from its wire. Such a label is moved
    to the closest start, middle or end point of the segment's wires.
    """
    elabel = ELabel.from_node(node)
    position = Point(to_mils(elabel.x), to_mils_y(elabel.y))

    label = Label(
        text=escape_name(net_name),
        position=position,
        kind=label_kind(session, net_name),
        size=to_mils(elabel.size),
        spin_style=label_spin_style(elabel.rot),
    )

    if wires and not label_on_wire(position, wires, session.config.label_tolerance):
        label.position = nearest_line_point(position, [(w.start, w.end) for w in wires])
        logger.debug("Moved label %s from %s to %s", net_name, position, label.position)

    return label


def load_segment(
    session: ImportSession,
    sheet: Sheet,
    node: etree._Element,
    net_name: str,
    segment_count: int,
) -> None:
    """Add one segment's wires, junctions and labels to the sheet."""
    children = list(iter_children(node))

    # Wires first: labels are checked against them
    wires = [load_wire(session, c) for c in children if ElementKind.of(c) is ElementKind.WIRE]

    labelled = False
    for child in children:
        kind = ElementKind.of(child)
        if kind is ElementKind.JUNCTION:
            sheet.add(load_junction(child))
        elif kind is ElementKind.LABEL:
            sheet.add(load_label(session, child, net_name, wires))
            labelled = True
        elif kind is ElementKind.PINREF:
            EPinRef.from_node(child)

    if not labelled and wires:
        kind = label_kind(session, net_name)
        # A lone segment of a sheet-local net is named by its connections alone
        if kind is LabelKind.GLOBAL or segment_count > 1:
            first = wires[0]
            sheet.add(
                Label(
                    text=escape_name(net_name),
                    position=midpoint(first.start, first.end),
                    kind=kind,
                    size=SYNTHETIC_LABEL_SIZE,
                    spin_style=0,
                )
            )

    for wire in wires:
        sheet.add(wire)


def load_segments(session: ImportSession, sheet: Sheet, node: etree._Element, name: str) -> None:
    """Load every segment of a ``<net>`` or ``<bus>``."""
    segment_count = count_children(node, "segment")
    for segment in iter_children(node):
        if ElementKind.of(segment) is ElementKind.SEGMENT:
            load_segment(session, sheet, segment, name, segment_count)
