"""
EAGLE schematic importer.

Drives one import from file to RootDocument:

1. check the header and parse the XML
2. read the layer table
3. read the parts table and convert every library
4. count on how many sheets each net appears
5. assemble the sheet(s)

Steps 3 and 4 must finish before any sheet is assembled: placement looks
parts up by name and label scope depends on the net counts of all sheets.

Example::

    from kicad_eagle import EagleSchematicImporter

    importer = EagleSchematicImporter()
    doc = importer.load("amplifier.sch")
    for sheet in doc.sheets:
        print(sheet.name, len(sheet.components))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from ..config import Config
from ..eagle.entities import ELayer, EPart
from ..eagle.tree import (
    ElementKind,
    check_header,
    children_of,
    iter_children,
    load_document,
    map_children,
    require_child,
)
from ..exceptions import FileFormatError, FileNotFoundError
from ..logging import configure_from_flags
from ..model.sheet import RootDocument, Sheet
from .library import load_library
from .nets import count_nets
from .session import LAYER_NAMES, DiagnosticHook, ImportSession
from .sheets import assemble_sheet, layout_sheets

logger = logging.getLogger(__name__)


def load_layers(session: ImportSession, node: Optional[etree._Element]) -> None:
    """Map EAGLE layer numbers to native layers by layer name."""
    for child in iter_children(node):
        if ElementKind.of(child) is not ElementKind.LAYER:
            continue
        layer = ELayer.from_node(child)
        if layer.name in LAYER_NAMES:
            session.layers[layer.number] = LAYER_NAMES[layer.name]


def load_schematic(session: ImportSession, node: etree._Element) -> Sheet:
    """Convert a ``<schematic>`` and return the root sheet."""
    children = map_children(node)

    for part in children_of(children, "parts"):
        if ElementKind.of(part) is ElementKind.PART:
            epart = EPart.from_node(part)
            session.parts[epart.name] = epart

    for library in children_of(children, "libraries"):
        if ElementKind.of(library) is ElementKind.LIBRARY:
            record = load_library(session, library)
            session.libraries[record.name] = record

    sheets_node = require_child(children, node, "sheets")
    sheet_nodes = [s for s in iter_children(sheets_node) if ElementKind.of(s) is ElementKind.SHEET]

    count_nets(session, sheet_nodes)

    root = Sheet(name=session.source.stem, file_name=session.source.name)
    if len(sheet_nodes) > 1:
        layout_sheets(session, root, sheet_nodes)
    elif sheet_nodes:
        assemble_sheet(session, root, sheet_nodes[0], 0)
    return root


class EagleSchematicImporter:
    """Imports EAGLE schematics (``.sch``, EAGLE 6 and later).

    Args:
        config: Settings; defaults to :meth:`Config.load` from the current directory
        diagnostic_hook: Called with every recoverable problem as it is found
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        diagnostic_hook: Optional[DiagnosticHook] = None,
    ):
        self.config = config if config is not None else Config.load()
        self.diagnostic_hook = diagnostic_hook

        defaults = self.config.defaults
        configure_from_flags(defaults.verbose, defaults.quiet)

    def load(self, path: Union[str, Path]) -> RootDocument:
        """Import one file.

        Args:
            path: EAGLE schematic file

        Returns:
            The imported document

        Raises:
            FileNotFoundError: If the file does not exist
            FileAccessError: If the file cannot be read
            FileFormatError: If the header is not an EAGLE header
            ParseError: If the XML is malformed or misses required content
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Unable to read file '{path}'",
                context={"file": str(path)},
                suggestions=["Check the path spelling"],
            )

        if self.config.importer.check_header and not check_header(path):
            raise FileFormatError(
                f"'{path.name}' is not an EAGLE schematic",
                context={"file": str(path)},
                suggestions=[
                    "Open the .sch file saved by EAGLE 6 or later",
                    "Set [import] check_header = false to skip this check",
                ],
            )

        logger.debug("Importing %s", path)
        root_node = load_document(path)

        # Everything built below stays local until the document is returned
        session = ImportSession(path, self.config.importer, self.diagnostic_hook)

        drawing = require_child(map_children(root_node), root_node, "drawing")
        drawing_children = map_children(drawing)
        load_layers(session, drawing_children.get("layers"))

        schematic = require_child(drawing_children, drawing, "schematic")
        root = load_schematic(session, schematic)

        document = RootDocument(
            root=root,
            library=session.library,
            diagnostics=session.diagnostics,
            source=str(path),
        )

        logger.info(
            "Imported %s: %d sheet(s), %d part(s), %d diagnostic(s)",
            path.name,
            len(document.sheets),
            len(document.library),
            len(document.diagnostics),
        )
        return document


def load(
    path: Union[str, Path],
    config: Optional[Config] = None,
    diagnostic_hook: Optional[DiagnosticHook] = None,
) -> RootDocument:
    """Import an EAGLE schematic.

    Args:
        path: EAGLE schematic file
        config: Settings; defaults to :meth:`Config.load` from the current directory
        diagnostic_hook: Called with every recoverable problem as it is found

    Returns:
        The imported document
    """
    return EagleSchematicImporter(config, diagnostic_hook).load(path)
