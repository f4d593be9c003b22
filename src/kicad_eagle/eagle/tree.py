"""
EAGLE XML document access.

Loads the file with lxml and gives the rest of the importer three small
tools: a closed :class:`ElementKind` decoded once per node, a
name-to-child index for one level of the tree, and child counting.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

from lxml import etree

from ..exceptions import (
    FileAccessError,
    FileNotFoundError,
    MissingAttributeError,
    MissingElementError,
    ParseError,
)

logger = logging.getLogger(__name__)

NodeMap = dict[str, etree._Element]


class ElementKind(Enum):
    """Every EAGLE element the importer understands.

    Tags outside this set decode to OTHER and are skipped by the walkers.
    """

    EAGLE = "eagle"
    DRAWING = "drawing"
    LAYERS = "layers"
    LAYER = "layer"
    SCHEMATIC = "schematic"
    PARTS = "parts"
    PART = "part"
    LIBRARIES = "libraries"
    LIBRARY = "library"
    SYMBOLS = "symbols"
    SYMBOL = "symbol"
    DEVICESETS = "devicesets"
    DEVICESET = "deviceset"
    DEVICES = "devices"
    DEVICE = "device"
    CONNECTS = "connects"
    CONNECT = "connect"
    GATES = "gates"
    GATE = "gate"
    SHEETS = "sheets"
    SHEET = "sheet"
    DESCRIPTION = "description"
    BUSSES = "busses"
    BUS = "bus"
    NETS = "nets"
    NET = "net"
    SEGMENT = "segment"
    WIRE = "wire"
    JUNCTION = "junction"
    LABEL = "label"
    PINREF = "pinref"
    PORTREF = "portref"
    INSTANCES = "instances"
    INSTANCE = "instance"
    ATTRIBUTE = "attribute"
    PLAIN = "plain"
    TEXT = "text"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    VERTEX = "vertex"
    PIN = "pin"
    OTHER = ""

    @classmethod
    def of(cls, node: etree._Element) -> "ElementKind":
        """Decode a node's tag."""
        return _KINDS_BY_TAG.get(node.tag, cls.OTHER)


_KINDS_BY_TAG = {kind.value: kind for kind in ElementKind if kind is not ElementKind.OTHER}


def _is_element(node) -> bool:
    # Comments, processing instructions and entity references carry a callable tag
    return isinstance(node.tag, str)


def iter_children(node: Optional[etree._Element]) -> Iterator[etree._Element]:
    """Element children of a node in document order."""
    if node is None:
        return
    for child in node:
        if _is_element(child):
            yield child


def map_children(node: Optional[etree._Element]) -> NodeMap:
    """Index a node's immediate children by tag name.

    When a tag repeats, the FIRST child with that tag is kept. Repeated
    children (nets, busses, instances...) are reached through their
    container with :func:`children_of` instead.
    """
    mapping: NodeMap = {}
    for child in iter_children(node):
        mapping.setdefault(child.tag, child)
    return mapping


def count_children(node: Optional[etree._Element], name: str) -> int:
    """Count immediate children with the given tag."""
    return sum(1 for child in iter_children(node) if child.tag == name)


def children_of(mapping: NodeMap, container: str) -> list[etree._Element]:
    """Children of the container ``mapping[container]``; empty if it is absent."""
    return list(iter_children(mapping.get(container)))


def require_child(mapping: NodeMap, parent: etree._Element, name: str) -> etree._Element:
    """Fetch a mandatory child from a node map.

    Raises:
        MissingElementError: If the parent has no such child
    """
    child = mapping.get(name)
    if child is None:
        raise MissingElementError(str(parent.tag), name, line=parent.sourceline)
    return child


def require_attribute(node: etree._Element, name: str) -> str:
    """Fetch a mandatory attribute.

    Raises:
        MissingAttributeError: If the attribute is absent
    """
    value = node.get(name)
    if value is None:
        raise MissingAttributeError(str(node.tag), name, line=node.sourceline)
    return value


def node_text(node: etree._Element) -> str:
    """Concatenated text content of a node (EAGLE texts are single-line)."""
    return "".join(node.itertext())


def load_document(path: Union[str, Path]) -> etree._Element:
    """Parse an EAGLE file and return its root element.

    Raises:
        FileNotFoundError: If the file does not exist
        FileAccessError: If the file cannot be read
        ParseError: If the XML is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Unable to read file '{path}'",
            context={"file": str(path)},
            suggestions=["Check the path spelling"],
        )

    # No entity expansion, no network access
    parser = etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        with open(path, "rb") as f:
            tree = etree.parse(f, parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(
            f"Malformed XML: {e.msg}",
            line=e.lineno,
            file_path=path,
        ) from e
    except OSError as e:
        raise FileAccessError(
            f"Unable to read file '{path}'",
            context={"file": str(path), "reason": e.strerror or str(e)},
        ) from e

    root = tree.getroot()
    logger.debug("Parsed %s (root <%s>)", path, root.tag)
    return root


def check_header(path: Union[str, Path]) -> bool:
    """Cheap test that a file looks like an EAGLE document.

    The first three lines must be the XML declaration, the EAGLE doctype
    and the opening ``<eagle version=...>`` tag.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = [f.readline() for _ in range(3)]
    except OSError:
        return False

    return (
        lines[0].startswith("<?xml")
        and lines[1].startswith("<!DOCTYPE eagle SYSTEM")
        and lines[2].startswith("<eagle version")
    )


__all__ = [
    "ElementKind",
    "NodeMap",
    "iter_children",
    "map_children",
    "count_children",
    "children_of",
    "require_child",
    "require_attribute",
    "node_text",
    "load_document",
    "check_header",
]
