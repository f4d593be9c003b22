"""
Component placement.

Each ``<instance>`` places one gate of a ``<part>`` on the sheet. The part
is resolved through the tables the library loader built; an instance that
cannot be resolved is skipped and reported as a diagnostic.
"""

from __future__ import annotations

import logging
import zlib
from typing import Optional

from lxml import etree

from ..eagle.alignment import TextAlign, convert_alignment
from ..eagle.entities import AttrDisplay, EAttr, EInstance
from ..geometry import Point
from ..model.component import Component, ComponentField, Orientation
from ..model.part import FieldId
from ..model.sheet import Sheet
from ..units import to_mils, to_mils_y
from .names import part_name
from .session import DiagnosticKind, ImportSession

logger = logging.getLogger(__name__)

# Instance attributes that override a component field
FIELD_ATTRIBUTES = {
    "NAME": FieldId.REFERENCE,
    "VALUE": FieldId.VALUE,
}


def module_stamp(name: str, value: str, unit: int) -> int:
    """Deterministic 32-bit stamp for a placed unit."""
    return zlib.crc32(f"{name}\x00{value}\x00{unit}".encode("utf-8")) & 0xFFFFFFFF


def apply_attribute(
    field: ComponentField,
    attr: EAttr,
    instance_degrees: float,
    instance_mirror: bool,
) -> None:
    """Override a component field with an instance ``<attribute>``.

    The attribute's rotation is absolute; the text style is computed from
    the rotation relative to the instance.
    """
    if attr.x is not None and attr.y is not None:
        field.position = Point(to_mils(attr.x), to_mils_y(attr.y))

    align = TextAlign.BOTTOM_LEFT if attr.align is None else attr.align
    abs_degrees = int(attr.rot.degrees) if attr.rot else 0
    mirror = attr.rot.mirror if attr.rot else False
    spin = attr.rot.spin if attr.rot else False
    if instance_mirror:
        mirror = not mirror

    rel_degrees = int(abs_degrees - instance_degrees + 360) % 360
    style = convert_alignment(align, rel_degrees, mirror, spin, abs_degrees)

    field.angle = style.angle
    field.h_justify = style.h_justify
    field.v_justify = style.v_justify
    field.mirror = mirror
    field.visible = attr.display is not AttrDisplay.OFF
    if attr.size is not None:
        field.size = to_mils(attr.size)


def _orientation(session: ImportSession, einstance: EInstance, sheet: Sheet) -> Orientation:
    if einstance.rot is None:
        return Orientation.DEG_0
    orientation = Orientation.from_degrees(einstance.rot.degrees)
    if orientation is None:
        session.report(
            DiagnosticKind.UNHANDLED_ROTATION,
            f"Instance '{einstance.part}' has unhandled rotation {einstance.rot.degrees:g}; using 0",
            part=einstance.part,
            sheet=sheet.name,
        )
        return Orientation.DEG_0
    return orientation


def _unresolved(session: ImportSession, sheet: Sheet, einstance: EInstance, what: str) -> None:
    session.report(
        DiagnosticKind.UNRESOLVED_REFERENCE,
        f"Skipped instance '{einstance.part}' gate '{einstance.gate}': {what}",
        part=einstance.part,
        gate=einstance.gate,
        sheet=sheet.name,
    )


def load_instance(
    session: ImportSession, sheet: Sheet, node: etree._Element
) -> Optional[Component]:
    """Place one instance on the sheet.

    Returns:
        The placed component, or None when the instance was skipped
    """
    einstance = EInstance.from_node(node)

    epart = session.parts.get(einstance.part)
    if epart is None:
        _unresolved(session, sheet, einstance, "no such part")
        return None

    record = session.libraries.get(epart.library)
    if record is None:
        _unresolved(session, sheet, einstance, f"no library '{epart.library}'")
        return None

    name = part_name(epart.deviceset, epart.device)
    unit = record.units.get((epart.deviceset, epart.device, einstance.gate))
    if unit is None:
        _unresolved(session, sheet, einstance, f"no gate '{einstance.gate}' in '{name}'")
        return None

    lib_part = record.parts.get(name)
    if lib_part is None:
        _unresolved(session, sheet, einstance, f"no part '{name}' in '{record.name}'")
        return None

    position = Point(to_mils(einstance.x), to_mils_y(einstance.y))
    component = Component(
        lib_id=name,
        part=lib_part,
        unit=unit,
        position=position,
        orientation=_orientation(session, einstance, sheet),
        mirror=einstance.rot.mirror if einstance.rot else False,
    )

    for field_id, template in lib_part.fields.items():
        component.fields[field_id] = ComponentField.from_template(template, position)

    reference = component.fields[FieldId.REFERENCE]
    value = component.fields[FieldId.VALUE]
    footprint = component.fields[FieldId.FOOTPRINT]

    reference.text = einstance.part
    value.text = epart.value if epart.value is not None else name
    footprint.text = record.packages.get(name, "")
    footprint.visible = False

    component.timestamp = module_stamp(einstance.part, epart.value or "", unit)
    component.references.append(
        (f"{sheet.path}{component.timestamp:08X}", einstance.part, unit)
    )

    instance_degrees = einstance.rot.degrees if einstance.rot else 0
    found = set()
    for attr in einstance.attributes:
        field_id = FIELD_ATTRIBUTES.get(attr.name)
        if field_id is None:
            continue
        apply_attribute(component.fields[field_id], attr, instance_degrees, component.mirror)
        found.add(field_id)

    # A smashed instance only shows the fields it has attributes for
    if einstance.smashed:
        for field_id in FIELD_ATTRIBUTES.values():
            if field_id not in found:
                component.fields[field_id].visible = False

    sheet.add(component)
    logger.debug("Placed %s (%s unit %d) at %s", einstance.part, name, unit, position)
    return component
