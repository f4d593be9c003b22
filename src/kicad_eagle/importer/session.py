"""
Per-import state.

An ImportSession is created by :func:`kicad_eagle.load` for one file and
threaded through every importer step. It owns the tables built before
the sheets are assembled (layer map, parts, libraries, net counts), the
shared part library and the diagnostics collected along the way. Nothing
here is module-global, so two imports never share state.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from lxml import etree

from ..config import ImportConfig
from ..eagle.entities import EPart
from ..geometry import Layer
from ..model.part import LibPart, PartLibrary

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """How much a diagnostic degrades the imported document."""

    WARNING = "warning"
    INFO = "info"


class DiagnosticKind(str, Enum):
    """Recoverable problems met while importing."""

    UNRESOLVED_REFERENCE = "unresolved_reference"
    BUS_ENTRY_NEEDED = "bus_entry_needed"
    UNHANDLED_ROTATION = "unhandled_rotation"


@dataclass
class Diagnostic:
    """One recoverable problem. The affected item was skipped or flagged."""

    kind: DiagnosticKind
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"


DiagnosticHook = Callable[[Diagnostic], None]

# EAGLE layer names that map to something other than notes
LAYER_NAMES = {
    "Nets": Layer.WIRE,
    "Busses": Layer.BUS,
    "Info": Layer.NOTES,
    "Guide": Layer.NOTES,
}


@dataclass
class LibraryRecord:
    """Lookup tables for one EAGLE ``<library>``.

    Attributes:
        name: Library name as referenced by ``<part library=...>``
        symbols: Symbol name -> ``<symbol>`` node, converted per gate on demand
        parts: Part name -> finished LibPart
        units: (deviceset, device, gate) -> 1-based unit number
        packages: Part name -> package name
    """

    name: str
    symbols: dict[str, etree._Element] = field(default_factory=dict)
    parts: dict[str, LibPart] = field(default_factory=dict)
    units: dict[tuple[str, str, str], int] = field(default_factory=dict)
    packages: dict[str, str] = field(default_factory=dict)


class ImportSession:
    """State of one import, from the first table to the finished document."""

    def __init__(
        self,
        source: Path,
        config: Optional[ImportConfig] = None,
        diagnostic_hook: Optional[DiagnosticHook] = None,
        stamp_base: Optional[int] = None,
    ):
        self.source = Path(source)
        self.config = config or ImportConfig()
        self.diagnostic_hook = diagnostic_hook
        self.layers: dict[int, Layer] = {}
        self.parts: dict[str, EPart] = {}
        self.libraries: dict[str, LibraryRecord] = {}
        self.library = PartLibrary(name=self.source.stem)
        self.net_counts: Counter[str] = Counter()
        self.diagnostics: list[Diagnostic] = []
        self._last_stamp = int(time.time()) if stamp_base is None else stamp_base - 1

    def layer(self, number: int) -> Layer:
        """Native layer for an EAGLE layer number; unmapped layers are notes."""
        return self.layers.get(number, Layer.NOTES)

    def new_stamp(self) -> int:
        """Next value of a strictly increasing 32-bit stamp counter."""
        self._last_stamp = (self._last_stamp + 1) & 0xFFFFFFFF
        return self._last_stamp

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        severity: Severity = Severity.WARNING,
        **context: Any,
    ) -> Diagnostic:
        """Record a recoverable problem, log it and pass it to the hook."""
        diagnostic = Diagnostic(kind=kind, message=message, context=context, severity=severity)
        self.diagnostics.append(diagnostic)

        level = logging.WARNING if severity is Severity.WARNING else logging.INFO
        logger.log(level, "%s", diagnostic)

        if self.diagnostic_hook is not None:
            self.diagnostic_hook(diagnostic)
        return diagnostic
