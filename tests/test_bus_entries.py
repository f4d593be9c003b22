"""Tests for bus entry synthesis."""

import pytest

from kicad_eagle.geometry import Layer, Point
from kicad_eagle.importer.bus_entries import (
    BUS_ENTRY_NEEDED,
    ENTRY_TABLE,
    Axis,
    add_bus_entries,
)
from kicad_eagle.importer.session import DiagnosticKind
from kicad_eagle.model.elements import BusEntry, Label, Wire
from kicad_eagle.model.sheet import Sheet


def make_sheet(*items):
    sheet = Sheet(name="test")
    for item in items:
        sheet.add(item)
    return sheet


def bus(x1, y1, x2, y2):
    return Wire(Point(x1, y1), Point(x2, y2), Layer.BUS)


def net_wire(x1, y1, x2, y2):
    return Wire(Point(x1, y1), Point(x2, y2), Layer.WIRE)


def snapshot(sheet):
    return [(type(item).__name__, vars(item).copy()) for item in sheet.items]


class TestEntryTable:
    """Test the entry table is geometrically consistent."""

    @pytest.mark.parametrize("key", list(ENTRY_TABLE))
    def test_entry_spans_bus_and_wire(self, key):
        """Every entry runs from the bus probe point to the new wire end."""
        axis, away, side = key
        shape, (ox, oy) = ENTRY_TABLE[key]
        size = 100
        crossing = Point(0, 0)
        entry = BusEntry(position=Point(ox, oy).scaled(size), shape=shape, size=size)

        if axis is Axis.HORIZONTAL:
            on_bus = crossing + Point(0, side * size)
            new_end = crossing + Point(away * size, 0)
        else:
            on_bus = crossing + Point(side * size, 0)
            new_end = crossing + Point(0, away * size)

        assert {entry.position, entry.end} == {on_bus, new_end}


class TestPerpendicularWires:
    """Test axis-aligned wires ending on a bus."""

    def test_vertical_wire_on_horizontal_bus(self, session):
        """A wire rising from a bus gets a '/' entry and is shortened."""
        wire = net_wire(500, 0, 500, -500)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert entry.shape == "/"
        assert entry.position == Point(400, 0)
        assert entry.end == Point(500, -100)
        assert wire.start == Point(500, -100)
        assert wire.end == Point(500, -500)
        assert session.diagnostics == []

    def test_vertical_wire_below_bus(self, session):
        """A wire hanging below the bus gets a '\\' entry."""
        wire = net_wire(500, 500, 500, 0)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert entry.shape == "\\"
        assert entry.position == Point(400, 0)
        assert wire.end == Point(500, 100)

    def test_horizontal_wire_on_vertical_bus(self, session):
        """A wire leaving a vertical bus to the right."""
        wire = net_wire(0, 500, 400, 500)
        sheet = make_sheet(bus(0, 0, 0, 1000), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert entry.shape == "\\"
        assert entry.position == Point(0, 400)
        assert entry.end == Point(100, 500)
        assert wire.start == Point(100, 500)

    def test_bus_continues_one_way_only(self, session):
        """Near the bus end the entry leans toward the side the bus continues."""
        wire = net_wire(1000, 0, 1000, -500)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert {entry.position, entry.end} == {Point(900, 0), Point(1000, -100)}

    def test_labels_follow_wire_end(self, session):
        """Labels on the removed stretch move to the new wire end."""
        wire = net_wire(500, 0, 500, -500)
        label = Label(text="D0", position=Point(500, 0))
        sheet = make_sheet(bus(0, 0, 1000, 0), wire, label)

        add_bus_entries(session, sheet)

        assert label.position == Point(500, -100)

    def test_short_wire_removed(self, session):
        """A wire no longer than one entry is replaced by the entry."""
        wire = net_wire(500, 0, 500, -100)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        assert wire not in sheet.items
        assert sheet.wires(Layer.WIRE) == []
        assert len(sheet.bus_entries) == 1

    def test_custom_entry_size(self, session):
        """The entry size comes from the configuration."""
        session.config.bus_entry_size = 200
        wire = net_wire(500, 0, 500, -500)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert entry.size == 200
        assert wire.start == Point(500, -200)


class TestOtherCases:
    """Test parallel, diagonal and impossible crossings."""

    def test_parallel_wire_untouched(self, session):
        """A wire running along the bus needs no entry."""
        wire = net_wire(200, 0, 600, 0)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        assert sheet.bus_entries == []
        assert wire.start == Point(200, 0)

    def test_wire_away_from_bus_untouched(self, session):
        """Wires not ending on a bus are left alone."""
        wire = net_wire(500, -100, 500, -500)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        assert sheet.bus_entries == []

    def test_no_busses(self, session):
        """A sheet without busses is unchanged."""
        wire = net_wire(0, 0, 100, 0)
        sheet = make_sheet(wire)

        add_bus_entries(session, sheet)

        assert sheet.items == [wire]

    def test_diagonal_wire(self, session):
        """A diagonal wire continues its own direction through the entry."""
        wire = net_wire(500, 0, 800, -300)
        sheet = make_sheet(bus(0, 0, 1000, 0), wire)

        add_bus_entries(session, sheet)

        [entry] = sheet.bus_entries
        assert entry.shape == "/"
        assert entry.position == Point(500, 0)
        assert wire.start == Point(600, -100)

    def test_no_room_flags_marker(self, session):
        """Without room on either side a marker and a diagnostic are left."""
        sheet = make_sheet(bus(0, 0, 50, 0), net_wire(0, 0, 0, -500))

        add_bus_entries(session, sheet)

        assert sheet.bus_entries == []
        [marker] = sheet.markers
        assert marker.position == Point(0, 0)
        assert marker.message == BUS_ENTRY_NEEDED
        assert [d.kind for d in session.diagnostics] == [DiagnosticKind.BUS_ENTRY_NEEDED]

    def test_null_wire_skipped(self, session):
        """A zero-length wire on a bus is ignored."""
        sheet = make_sheet(bus(0, 0, 1000, 0), net_wire(500, 0, 500, 0))

        add_bus_entries(session, sheet)

        assert sheet.bus_entries == []
        assert sheet.markers == []


class TestIdempotence:
    """Test running the pass twice."""

    def test_second_run_changes_nothing(self, session):
        """Shortened wires no longer touch the bus."""
        sheet = make_sheet(
            bus(0, 0, 1000, 0),
            net_wire(500, 0, 500, -500),
            net_wire(200, 300, 200, 0),
            net_wire(700, 0, 900, -200),
        )
        add_bus_entries(session, sheet)
        before = snapshot(sheet)

        add_bus_entries(session, sheet)

        assert snapshot(sheet) == before

    def test_marker_not_duplicated(self, session):
        """A second run does not add a second marker."""
        sheet = make_sheet(bus(0, 0, 50, 0), net_wire(0, 0, 0, -500))

        add_bus_entries(session, sheet)
        add_bus_entries(session, sheet)

        assert len(sheet.markers) == 1
        assert len(session.diagnostics) == 1
