"""
EAGLE source format access.

Reading the XML tree, decoding element kinds and parsing element
attributes into typed records.
"""

from .alignment import (
    HJustify,
    Rotation,
    TextAlign,
    TextStyle,
    VJustify,
    convert_alignment,
)
from .entities import (
    AttrDisplay,
    EAttr,
    ECircle,
    EConnect,
    EDevice,
    EDeviceSet,
    EGate,
    EInstance,
    EJunction,
    ELabel,
    ELayer,
    EPart,
    EPin,
    EPinRef,
    EPolygon,
    ERect,
    EText,
    EVertex,
    EWire,
)
from .tree import (
    ElementKind,
    check_header,
    children_of,
    count_children,
    iter_children,
    load_document,
    map_children,
    node_text,
    require_attribute,
    require_child,
)

__all__ = [
    # Alignment
    "HJustify",
    "VJustify",
    "Rotation",
    "TextAlign",
    "TextStyle",
    "convert_alignment",
    # Records
    "AttrDisplay",
    "EAttr",
    "ECircle",
    "EConnect",
    "EDevice",
    "EDeviceSet",
    "EGate",
    "EInstance",
    "EJunction",
    "ELabel",
    "ELayer",
    "EPart",
    "EPin",
    "EPinRef",
    "EPolygon",
    "ERect",
    "EText",
    "EVertex",
    "EWire",
    # Tree
    "ElementKind",
    "check_header",
    "children_of",
    "count_children",
    "iter_children",
    "load_document",
    "map_children",
    "node_text",
    "require_attribute",
    "require_child",
]
