"""
kicad-eagle: Import EAGLE schematics into a native schematic document.

Reads an EAGLE ``.sch`` file (XML, EAGLE 6 and later) and rebuilds it as
sheets of wires, labels, bus entries and placed components, plus a library
of multi-unit parts converted from the file's embedded libraries.

Modules:
    eagle: XML access and EAGLE element records
    model: Native document model (sheets, parts, components)
    importer: The conversion itself
    config: TOML configuration files
    exceptions: Error hierarchy

Quick Start::

    import kicad_eagle

    doc = kicad_eagle.load("project.sch")
    for sheet in doc.sheets:
        print(sheet.name, len(sheet.components))

    for diagnostic in doc.diagnostics:
        print(diagnostic)
"""

__version__ = "0.1.0"

from kicad_eagle.config import Config
from kicad_eagle.eagle.tree import check_header
from kicad_eagle.exceptions import (
    AttributeValueError,
    ConfigError,
    FileAccessError,
    FileFormatError,
    FileNotFoundError,
    KiCadEagleError,
    MissingAttributeError,
    MissingElementError,
    ParseError,
)
from kicad_eagle.importer import (
    Diagnostic,
    DiagnosticKind,
    EagleSchematicImporter,
    Severity,
    load,
)
from kicad_eagle.model import PartLibrary, RootDocument, Sheet

__all__ = [
    # Version
    "__version__",
    # Import
    "load",
    "check_header",
    "EagleSchematicImporter",
    "Config",
    # Document
    "RootDocument",
    "Sheet",
    "PartLibrary",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    # Errors
    "KiCadEagleError",
    "FileAccessError",
    "FileNotFoundError",
    "FileFormatError",
    "ParseError",
    "MissingElementError",
    "MissingAttributeError",
    "AttributeValueError",
    "ConfigError",
]
