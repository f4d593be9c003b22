"""
EAGLE to native schematic conversion.

The importer converts libraries first, then counts nets across all
sheets, then assembles each sheet.
"""

from .loader import EagleSchematicImporter, load
from .session import Diagnostic, DiagnosticHook, DiagnosticKind, ImportSession, Severity

__all__ = [
    "EagleSchematicImporter",
    "load",
    "Diagnostic",
    "DiagnosticHook",
    "DiagnosticKind",
    "ImportSession",
    "Severity",
]
