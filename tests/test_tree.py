"""Tests for EAGLE XML document access."""

import pytest
from lxml import etree

from kicad_eagle.eagle.tree import (
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
from kicad_eagle.exceptions import (
    FileNotFoundError,
    MissingAttributeError,
    MissingElementError,
    ParseError,
)

NETS = """<sheet>
<nets>
<net name="A"/>
<!-- ignored -->
<net name="B"/>
<net name="C"/>
</nets>
<busses/>
<nets>
<net name="Z"/>
</nets>
</sheet>"""


class TestElementKind:
    """Test tag decoding."""

    def test_known_tag(self):
        """Known tags decode to their kind."""
        assert ElementKind.of(etree.fromstring("<wire/>")) is ElementKind.WIRE
        assert ElementKind.of(etree.fromstring("<pinref/>")) is ElementKind.PINREF

    def test_unknown_tag(self):
        """Anything else is OTHER."""
        assert ElementKind.of(etree.fromstring("<frame/>")) is ElementKind.OTHER


class TestChildren:
    """Test child iteration and indexing."""

    def test_iter_skips_comments(self):
        """Comments are not yielded."""
        nets = etree.fromstring(NETS)[0]
        names = [child.get("name") for child in iter_children(nets)]
        assert names == ["A", "B", "C"]

    def test_iter_none(self):
        """A missing node has no children."""
        assert list(iter_children(None)) == []

    def test_map_first_wins(self):
        """The first child with a repeated tag is indexed."""
        mapping = map_children(etree.fromstring(NETS))
        assert set(mapping) == {"nets", "busses"}
        assert mapping["nets"][0].get("name") == "A"

    def test_count_children(self):
        """Children are counted by tag."""
        sheet = etree.fromstring(NETS)
        assert count_children(sheet, "nets") == 2
        assert count_children(sheet[0], "net") == 3
        assert count_children(sheet, "instances") == 0

    def test_children_of_absent_container(self):
        """An absent container yields nothing."""
        mapping = map_children(etree.fromstring(NETS))
        assert children_of(mapping, "instances") == []
        assert len(children_of(mapping, "nets")) == 3

    def test_require_child(self):
        """A present child is returned."""
        sheet = etree.fromstring(NETS)
        assert require_child(map_children(sheet), sheet, "busses").tag == "busses"

    def test_require_child_missing(self):
        """A missing child raises with the parent's line."""
        sheet = etree.fromstring(NETS)
        with pytest.raises(MissingElementError) as exc_info:
            require_child(map_children(sheet), sheet, "instances")
        assert exc_info.value.parent == "sheet"
        assert exc_info.value.element == "instances"
        assert exc_info.value.context["line"] == 1

    def test_require_attribute(self):
        """Present attributes are returned, absent ones raise."""
        net = etree.fromstring('<net name="GND"/>')
        assert require_attribute(net, "name") == "GND"
        with pytest.raises(MissingAttributeError, match="class"):
            require_attribute(net, "class")

    def test_node_text(self):
        """Entity references are decoded."""
        assert node_text(etree.fromstring("<text>&gt;NAME</text>")) == ">NAME"
        assert node_text(etree.fromstring("<text/>")) == ""


class TestLoadDocument:
    """Test file loading."""

    def test_load(self, simple_sch):
        """A well-formed file parses to its <eagle> root."""
        root = load_document(simple_sch)
        assert root.tag == "eagle"

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "nope.sch")

    def test_malformed(self, tmp_path):
        """Malformed XML raises ParseError with a line number."""
        bad = tmp_path / "bad.sch"
        bad.write_text("<eagle>\n<drawing>\n</eagle>\n")
        with pytest.raises(ParseError) as exc_info:
            load_document(bad)
        assert "line" in exc_info.value.context
        assert exc_info.value.context["file"] == str(bad)

    def test_external_entity_not_expanded(self, tmp_path):
        """A SYSTEM entity never pulls a local file into the document."""
        secret = tmp_path / "secret.txt"
        secret.write_text("do-not-import-me")
        path = tmp_path / "entity.sch"
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<!DOCTYPE eagle [<!ENTITY leak SYSTEM "{secret.as_uri()}">]>\n'
            "<eagle><drawing><schematic><sheets><sheet><plain>"
            '<text x="0" y="0" size="1.778" layer="97">&leak;</text>'
            "</plain></sheet></sheets></schematic></drawing></eagle>\n"
        )

        root = load_document(path)

        text = root.find(".//text")
        assert "do-not-import-me" not in node_text(text)
        assert b"do-not-import-me" not in etree.tostring(root)


class TestCheckHeader:
    """Test the EAGLE header sniff."""

    def test_eagle_file(self, simple_sch):
        """A real EAGLE header passes."""
        assert check_header(simple_sch) is True

    def test_wrong_doctype(self, tmp_path):
        """Another XML document fails."""
        other = tmp_path / "other.xml"
        other.write_text('<?xml version="1.0"?>\n<!DOCTYPE html>\n<html/>\n')
        assert check_header(other) is False

    def test_short_file(self, tmp_path):
        """A file shorter than three lines fails."""
        short = tmp_path / "short.sch"
        short.write_text('<?xml version="1.0"?>\n')
        assert check_header(short) is False

    def test_missing_file(self, tmp_path):
        """An unreadable file fails instead of raising."""
        assert check_header(tmp_path / "nope.sch") is False
