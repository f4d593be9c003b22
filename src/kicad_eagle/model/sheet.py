"""
Native Sheet and Document Models

A Sheet owns one page of placed items. The RootDocument owns the sheet
tree, the shared part library and the diagnostics collected while the
document was imported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Optional, TypeVar, Union

from ..geometry import Layer, Point, Rectangle, merge_boxes
from .component import Component
from .elements import BusEntry, Junction, Label, Marker, SheetSymbol, Text, Wire
from .part import PartLibrary

if TYPE_CHECKING:
    from ..importer.session import Diagnostic

SheetItem = Union[Wire, Junction, Label, Text, BusEntry, Marker, Component, SheetSymbol]

T = TypeVar("T")

# A4 landscape, mils
A4_WIDTH = 11693
A4_HEIGHT = 8268


@dataclass
class PageInfo:
    """Paper of one sheet."""

    paper: str = "A4"
    width: int = A4_WIDTH
    height: int = A4_HEIGHT

    @property
    def size(self) -> Point:
        return Point(self.width, self.height)

    @property
    def center(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def set_user_size(self, width: int, height: int) -> None:
        self.paper = "User"
        self.width = width
        self.height = height


@dataclass
class Sheet:
    """One schematic page and the items placed on it."""

    name: str = ""
    file_name: str = ""
    page: PageInfo = field(default_factory=PageInfo)
    items: list[SheetItem] = field(default_factory=list)
    timestamp: int = 0
    path: str = "/"

    def add(self, item: SheetItem) -> None:
        self.items.append(item)

    def remove(self, item: SheetItem) -> None:
        # Identity, not equality: two wires may compare equal
        for i, existing in enumerate(self.items):
            if existing is item:
                del self.items[i]
                return
        raise ValueError("item is not on this sheet")

    def items_of(self, kind: type[T]) -> list[T]:
        return [item for item in self.items if isinstance(item, kind)]

    def wires(self, layer: Optional[Layer] = None) -> list[Wire]:
        return [w for w in self.items_of(Wire) if layer is None or w.layer == layer]

    @property
    def junctions(self) -> list[Junction]:
        return self.items_of(Junction)

    @property
    def labels(self) -> list[Label]:
        return self.items_of(Label)

    @property
    def texts(self) -> list[Text]:
        return self.items_of(Text)

    @property
    def bus_entries(self) -> list[BusEntry]:
        return self.items_of(BusEntry)

    @property
    def markers(self) -> list[Marker]:
        return self.items_of(Marker)

    @property
    def components(self) -> list[Component]:
        return self.items_of(Component)

    @property
    def sheet_symbols(self) -> list[SheetSymbol]:
        return self.items_of(SheetSymbol)

    def find_component(self, reference: str) -> Optional[Component]:
        for comp in self.components:
            if comp.reference == reference:
                return comp
        return None

    def bounding_box(self) -> Optional[Rectangle]:
        """Box around every placed item; None for an empty sheet."""
        return merge_boxes(item.bounding_box() for item in self.items)

    def move_items(self, dx: int, dy: int) -> None:
        for item in self.items:
            item.move(dx, dy)


@dataclass
class RootDocument:
    """The imported document.

    ``root`` is the only sheet of a single-sheet import. For multi-sheet
    imports it is a synthetic page holding one SheetSymbol per child sheet.
    """

    root: Sheet
    library: PartLibrary
    diagnostics: list["Diagnostic"] = field(default_factory=list)
    source: str = ""

    @property
    def is_hierarchical(self) -> bool:
        return bool(self.root.sheet_symbols)

    @property
    def sheets(self) -> list[Sheet]:
        """The sheets holding imported content, in source order."""
        if self.is_hierarchical:
            return [symbol.sheet for symbol in self.root.sheet_symbols]
        return [self.root]

    def iter_sheets(self) -> Iterator[Sheet]:
        """Every sheet, root first."""
        yield self.root
        if self.is_hierarchical:
            yield from self.sheets
