"""
Sheet assembly.

Fills one native sheet from one EAGLE ``<sheet>``: busses, nets, bus
entries, instances and plain drawing items, in that order. The page is
then grown to fit the drawing and the drawing is centred on it.

Multi-sheet files get a synthetic root page holding one sheet symbol per
EAGLE sheet.
"""

from __future__ import annotations

import logging
from typing import Optional

from lxml import etree

from ..eagle.alignment import convert_alignment
from ..eagle.entities import EText
from ..eagle.tree import ElementKind, children_of, map_children, node_text, require_attribute
from ..geometry import Point
from ..model.elements import SheetSymbol, Text
from ..model.sheet import Sheet
from ..units import text_size, to_mils, to_mils_y
from .bus_entries import add_bus_entries
from .instances import load_instance
from .names import escape_name, sheet_file_name
from .nets import load_segments, load_wire
from .session import ImportSession

logger = logging.getLogger(__name__)

SHEET_SYMBOL_SIZE = 1000


def load_plain_text(node: etree._Element) -> Text:
    """A free text of the ``<plain>`` section."""
    etext = EText.from_node(node)
    width, height = text_size(etext.size, etext.font)
    degrees = int(etext.rot.degrees)
    style = convert_alignment(etext.align, degrees, etext.rot.mirror, etext.rot.spin, degrees)
    return Text(
        # An empty note would be invisible and unselectable
        text=escape_name(etext.text) if etext.text else '" "',
        position=Point(to_mils(etext.x), to_mils_y(etext.y)),
        width=width,
        height=height,
        angle=style.angle,
        h_justify=style.h_justify,
        v_justify=style.v_justify,
        bold=etext.bold,
    )


def sheet_name(session: ImportSession, node: etree._Element, index: int) -> str:
    """Sheet description, or ``<file stem>_<index>`` without one."""
    description = map_children(node).get(ElementKind.DESCRIPTION.value)
    if description is not None:
        text = node_text(description).strip()
        if text:
            return text
    return f"{session.source.stem}_{index}"


def fit_page(session: ImportSession, sheet: Sheet) -> Optional[Point]:
    """Grow the page to hold the drawing and centre the drawing on it.

    The translation is floored to the grid so items stay on grid.

    Returns:
        The translation applied, or None for an empty sheet
    """
    box = sheet.bounding_box()
    if box is None:
        return None

    margin = session.config.page_margin
    target_width = box.width + margin
    target_height = box.height + margin

    page = sheet.page
    if page.width < target_width or page.height < target_height:
        page.set_user_size(max(page.width, target_width), max(page.height, target_height))

    grid = session.config.grid
    offset = page.center - box.center
    translation = Point(offset.x - offset.x % grid, offset.y - offset.y % grid)

    sheet.move_items(translation.x, translation.y)
    return translation


def assemble_sheet(session: ImportSession, sheet: Sheet, node: etree._Element, index: int) -> Sheet:
    """Fill ``sheet`` from an EAGLE ``<sheet>`` node.

    Args:
        session: Current import
        sheet: Empty native sheet to fill
        node: The ``<sheet>`` element
        index: Sheet number used in generated names (0 for a lone sheet)

    Returns:
        The filled sheet
    """
    sheet.name = sheet_name(session, node, index)
    sheet.file_name = sheet_file_name(sheet.name)
    children = map_children(node)

    # Busses before nets: bus entries need both
    for bus in children_of(children, "busses"):
        if ElementKind.of(bus) is ElementKind.BUS:
            load_segments(session, sheet, bus, require_attribute(bus, "name"))

    for net in children_of(children, "nets"):
        if ElementKind.of(net) is ElementKind.NET:
            load_segments(session, sheet, net, require_attribute(net, "name"))

    add_bus_entries(session, sheet)

    for instance in children_of(children, "instances"):
        if ElementKind.of(instance) is ElementKind.INSTANCE:
            load_instance(session, sheet, instance)

    for item in children_of(children, "plain"):
        kind = ElementKind.of(item)
        if kind is ElementKind.TEXT:
            sheet.add(load_plain_text(item))
        elif kind is ElementKind.WIRE:
            sheet.add(load_wire(session, item))

    translation = fit_page(session, sheet)
    logger.debug(
        "Sheet %s: %d items, page %dx%d, moved by %s",
        sheet.name,
        len(sheet.items),
        sheet.page.width,
        sheet.page.height,
        translation,
    )
    return sheet


def layout_sheets(session: ImportSession, root: Sheet, nodes: list[etree._Element]) -> None:
    """Assemble every sheet of a multi-sheet file under a root page.

    Sheet symbols fill the root page left to right, top to bottom, two
    grid pitches apart, wrapping after ``sheet_columns`` pitches.
    """
    spacing = session.config.sheet_spacing
    columns = session.config.sheet_columns
    base = session.new_stamp()

    x, y = 1, 1
    for index, node in enumerate(nodes, start=1):
        # Drawn once per batch; subtracting the index keeps stamps unique
        stamp = (base - index) & 0xFFFFFFFF
        child = Sheet(timestamp=stamp, path=f"/{stamp:08X}/")
        assemble_sheet(session, child, node, index)

        root.add(
            SheetSymbol(
                position=Point(x * spacing, y * spacing),
                sheet=child,
                width=SHEET_SYMBOL_SIZE,
                height=SHEET_SYMBOL_SIZE,
                timestamp=stamp,
            )
        )

        x += 2
        if x > columns:
            x = 1
            y += 2
