"""Tests for the native document model."""

import pytest

from kicad_eagle.geometry import Layer, Point, Rectangle
from kicad_eagle.model import (
    BusEntry,
    Component,
    ComponentField,
    FieldId,
    Label,
    LibField,
    LibPart,
    LibPin,
    LibRectangle,
    Orientation,
    PageInfo,
    PartLibrary,
    PinOrientation,
    Sheet,
    SheetSymbol,
    Wire,
    transform,
)


def resistor():
    part = LibPart(name="R")
    part.add(LibRectangle(unit=1, start=Point(-100, -40), end=Point(100, 40)))
    part.add(LibPin(unit=1, name="1", number="1", position=Point(-200, 0), length=100))
    part.add(
        LibPin(
            unit=1,
            name="2",
            number="2",
            position=Point(200, 0),
            length=100,
            orientation=PinOrientation.LEFT,
        )
    )
    return part


class TestWire:
    """Test wire helpers."""

    def test_axis(self):
        """Horizontal and vertical are exclusive; a point is neither."""
        assert Wire(Point(0, 0), Point(100, 0)).is_horizontal
        assert Wire(Point(0, 0), Point(0, 100)).is_vertical
        dot = Wire(Point(5, 5), Point(5, 5))
        assert dot.is_null
        assert not dot.is_horizontal and not dot.is_vertical

    def test_move(self):
        """Moving shifts both ends."""
        wire = Wire(Point(0, 0), Point(100, 0), Layer.BUS)
        wire.move(10, -10)
        assert (wire.start, wire.end) == (Point(10, -10), Point(110, -10))


class TestBusEntry:
    """Test bus entry shapes."""

    def test_shapes(self):
        """'/' rises to the right, '\\' falls."""
        assert BusEntry(Point(0, 0), "/").end == Point(100, -100)
        assert BusEntry(Point(0, 0), "\\").end == Point(100, 100)

    def test_invalid_shape(self):
        """Only the two diagonal shapes exist."""
        with pytest.raises(ValueError):
            BusEntry(Point(0, 0), "|")

    def test_between(self):
        """An entry can be built from either end."""
        entry = BusEntry.between(Point(100, 0), Point(0, 100))
        assert entry.position == Point(0, 100)
        assert entry.shape == "/"


class TestLibPart:
    """Test part definitions."""

    def test_default_fields(self):
        """Every part has the four mandatory fields."""
        part = LibPart(name="X")
        assert set(part.fields) == set(FieldId)
        assert part.reference.id is FieldId.REFERENCE
        assert FieldId.FOOTPRINT.label == "Footprint"

    def test_pins(self):
        """Pins are found by unit and number."""
        part = resistor()
        assert [p.number for p in part.pins(1)] == ["1", "2"]
        assert part.pins(2) == []
        assert part.get_pin("2").end == Point(100, 0)
        assert part.get_pin("9") is None

    def test_bounding_box(self):
        """The body box covers shapes and pins."""
        assert resistor().bounding_box(1) == Rectangle(-200, -40, 200, 40)
        assert resistor().bounding_box(2) is None

    def test_pin_orientation_vectors(self):
        """UP points toward negative Y."""
        assert PinOrientation.UP.vector() == Point(0, -1)
        assert PinOrientation.DOWN.vector() == Point(0, 1)


class TestPartLibrary:
    """Test the shared library."""

    def test_collection(self):
        """Parts are stored by name."""
        library = PartLibrary(name="lib")
        library.add(resistor())
        assert "R" in library
        assert len(library) == 1
        assert [p.name for p in library] == ["R"]
        assert library.get("C") is None


class TestComponent:
    """Test placed units."""

    def test_orientation_from_degrees(self):
        """Only exact quarter turns map to an orientation."""
        assert Orientation.from_degrees(270.0) is Orientation.DEG_270
        assert Orientation.from_degrees(45) is None

    def test_transform_matrices(self):
        """Rotation is counterclockwise on a Y-down page."""
        assert transform(Orientation.DEG_0) == (1, 0, 0, 1)
        assert transform(Orientation.DEG_90) == (0, 1, -1, 0)
        assert transform(Orientation.DEG_0, mirror=True) == (-1, 0, 0, 1)

    @pytest.mark.parametrize(
        "orientation,mirror,expected",
        [
            (Orientation.DEG_0, False, Point(1200, 1000)),
            (Orientation.DEG_90, False, Point(1000, 800)),
            (Orientation.DEG_180, False, Point(800, 1000)),
            (Orientation.DEG_270, False, Point(1000, 1200)),
            (Orientation.DEG_0, True, Point(800, 1000)),
        ],
    )
    def test_pin_positions(self, orientation, mirror, expected):
        """Pin 2 at +200 X ends up where the rotation puts it."""
        comp = Component(
            lib_id="R",
            part=resistor(),
            unit=1,
            position=Point(1000, 1000),
            orientation=orientation,
            mirror=mirror,
        )
        assert comp.pin_positions()["2"] == expected

    def test_move_takes_fields(self):
        """Fields move with their component."""
        comp = Component(lib_id="R", part=resistor(), unit=1, position=Point(0, 0))
        comp.fields[FieldId.REFERENCE] = ComponentField.from_template(
            LibField(id=FieldId.REFERENCE, text="R", position=Point(0, -100)), comp.position
        )
        comp.move(100, 100)
        assert comp.position == Point(100, 100)
        assert comp.fields[FieldId.REFERENCE].position == Point(100, 0)
        assert comp.reference == "R"

    def test_bounding_box_rotated(self):
        """The box follows the rotation."""
        comp = Component(
            lib_id="R",
            part=resistor(),
            unit=1,
            position=Point(0, 0),
            orientation=Orientation.DEG_90,
        )
        assert comp.bounding_box() == Rectangle(-40, -200, 40, 200)


class TestSheet:
    """Test sheets and documents."""

    def test_remove_by_identity(self):
        """Removing takes the very item, not an equal one."""
        first = Wire(Point(0, 0), Point(100, 0))
        second = Wire(Point(0, 0), Point(100, 0))
        sheet = Sheet()
        sheet.add(first)
        sheet.add(second)

        sheet.remove(second)

        assert sheet.items[0] is first
        assert len(sheet.items) == 1
        with pytest.raises(ValueError):
            sheet.remove(second)

    def test_typed_views(self):
        """Items are filtered by type and layer."""
        sheet = Sheet()
        sheet.add(Wire(Point(0, 0), Point(100, 0)))
        sheet.add(Wire(Point(0, 0), Point(0, 100), Layer.BUS))
        sheet.add(Label("A", Point(0, 0)))
        assert len(sheet.wires()) == 2
        assert len(sheet.wires(Layer.BUS)) == 1
        assert [lbl.text for lbl in sheet.labels] == ["A"]

    def test_bounding_box(self):
        """The sheet box merges every item; an empty sheet has none."""
        sheet = Sheet()
        assert sheet.bounding_box() is None
        sheet.add(Wire(Point(0, 0), Point(100, 0)))
        sheet.add(Label("A", Point(50, 300)))
        assert sheet.bounding_box() == Rectangle(0, 0, 100, 300)

    def test_page(self):
        """Pages default to A4 and switch to a user size when grown."""
        page = PageInfo()
        assert page.paper == "A4"
        page.set_user_size(20000, 9000)
        assert (page.paper, page.width, page.height) == ("User", 20000, 9000)
        assert page.center == Point(10000, 4500)

    def test_sheet_symbol_names(self):
        """A sheet symbol shows its sheet's names."""
        child = Sheet(name="Power", file_name="Power.sch")
        symbol = SheetSymbol(position=Point(1000, 1000), sheet=child)
        assert (symbol.name, symbol.file_name) == ("Power", "Power.sch")
        assert symbol.bounding_box() == Rectangle(1000, 1000, 2000, 2000)
