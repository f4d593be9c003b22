"""
Native schematic document model.

Sheets of placed items, the shared part library and the root document
produced by the importer.
"""

from .component import Component, ComponentField, Orientation, transform
from .elements import BusEntry, Junction, Label, LabelKind, Marker, SheetSymbol, Text, Wire
from .part import (
    FieldId,
    LibArc,
    LibCircle,
    LibField,
    LibPart,
    LibPin,
    LibPolyline,
    LibRectangle,
    LibText,
    PartLibrary,
    PinOrientation,
    PinShape,
    PinType,
)
from .sheet import PageInfo, RootDocument, Sheet

__all__ = [
    # Elements
    "Wire",
    "Junction",
    "Label",
    "LabelKind",
    "Text",
    "BusEntry",
    "Marker",
    "SheetSymbol",
    # Parts
    "FieldId",
    "LibField",
    "LibCircle",
    "LibRectangle",
    "LibPolyline",
    "LibArc",
    "LibText",
    "LibPin",
    "LibPart",
    "PartLibrary",
    "PinType",
    "PinShape",
    "PinOrientation",
    # Components
    "Component",
    "ComponentField",
    "Orientation",
    "transform",
    # Sheets
    "PageInfo",
    "Sheet",
    "RootDocument",
]
