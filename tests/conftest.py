"""Pytest fixtures for kicad-eagle tests."""

from pathlib import Path

import pytest
from lxml import etree

from kicad_eagle.config import ImportConfig
from kicad_eagle.importer.session import ImportSession

EAGLE_HEADER = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE eagle SYSTEM "eagle.dtd">
<eagle version="7.7.0">
"""

LAYERS = """<layers>
<layer number="91" name="Nets" color="2" fill="1" visible="yes" active="yes"/>
<layer number="92" name="Busses" color="1" fill="1" visible="yes" active="yes"/>
<layer number="94" name="Symbols" color="4" fill="1" visible="yes" active="yes"/>
<layer number="95" name="Names" color="7" fill="1" visible="yes" active="yes"/>
<layer number="96" name="Values" color="7" fill="1" visible="yes" active="yes"/>
<layer number="97" name="Info" color="7" fill="1" visible="yes" active="yes"/>
</layers>"""

# Two-pin resistor, one gate, pins connected to pads 1 and 2
RCL_LIBRARY = """<library name="rcl">
<symbols>
<symbol name="R-US">
<wire x1="-2.54" y1="0" x2="2.54" y2="0" width="0.2032" layer="94"/>
<text x="-3.81" y="1.4986" size="1.778" layer="95">&gt;NAME</text>
<text x="-3.81" y="-3.302" size="1.778" layer="96">&gt;VALUE</text>
<pin name="2" x="5.08" y="0" visible="off" length="short" direction="pas" swaplevel="1" rot="R180"/>
<pin name="1" x="-5.08" y="0" visible="off" length="short" direction="pas" swaplevel="1"/>
</symbol>
</symbols>
<devicesets>
<deviceset name="R-US_" prefix="R" uservalue="yes">
<gates>
<gate name="G$1" symbol="R-US" x="0" y="0"/>
</gates>
<devices>
<device name="0204/7" package="0204/7">
<connects>
<connect gate="G$1" pin="1" pad="1"/>
<connect gate="G$1" pin="2" pad="2"/>
</connects>
</device>
</devices>
</deviceset>
</devicesets>
</library>"""

# Ground symbol: a single supply pin, no package
SUPPLY_LIBRARY = """<library name="supply1">
<symbols>
<symbol name="GND">
<wire x1="-1.905" y1="0" x2="1.905" y2="0" width="0.254" layer="94"/>
<text x="-2.54" y="-2.54" size="1.778" layer="96">&gt;VALUE</text>
<pin name="GND" x="0" y="2.54" visible="off" length="short" direction="sup" rot="R270"/>
</symbol>
</symbols>
<devicesets>
<deviceset name="GND" prefix="SUPPLY">
<gates>
<gate name="1" symbol="GND" x="0" y="0"/>
</gates>
<devices>
<device name="">
</device>
</devices>
</deviceset>
</devicesets>
</library>"""

# Quad NAND: two logic gates plus a power gate
LOGIC_LIBRARY = """<library name="74xx">
<symbols>
<symbol name="NAND">
<wire x1="-2.54" y1="2.54" x2="-2.54" y2="-2.54" width="0.4064" layer="94"/>
<wire x1="-2.54" y1="-2.54" x2="-2.54" y2="2.54" width="0.4064" layer="94" curve="180"/>
<text x="-2.54" y="3.175" size="1.778" layer="95">&gt;NAME</text>
<pin name="I0" x="-7.62" y="2.54" visible="pad" length="middle" direction="in" swaplevel="1"/>
<pin name="I1" x="-7.62" y="-2.54" visible="pad" length="middle" direction="in" swaplevel="1"/>
<pin name="O" x="7.62" y="0" visible="pad" length="middle" direction="out" function="dot" rot="R180"/>
</symbol>
<symbol name="PWRN">
<text x="-0.635" y="-0.635" size="1.778" layer="95">&gt;NAME</text>
<pin name="GND" x="0" y="-7.62" visible="pad" length="middle" direction="pwr" rot="R90"/>
<pin name="VCC" x="0" y="7.62" visible="pad" length="middle" direction="pwr" rot="R270"/>
</symbol>
</symbols>
<devicesets>
<deviceset name="74*00" prefix="IC">
<gates>
<gate name="A" symbol="NAND" x="0" y="0" swaplevel="1"/>
<gate name="B" symbol="NAND" x="0" y="-12.7" swaplevel="1"/>
<gate name="P" symbol="PWRN" x="20.32" y="0" addlevel="request"/>
</gates>
<devices>
<device name="N" package="DIL14">
<connects>
<connect gate="A" pin="I0" pad="1"/>
<connect gate="A" pin="I1" pad="2"/>
<connect gate="A" pin="O" pad="3"/>
<connect gate="B" pin="I0" pad="4"/>
<connect gate="B" pin="I1" pad="5"/>
<connect gate="B" pin="O" pad="6"/>
<connect gate="P" pin="GND" pad="7"/>
<connect gate="P" pin="VCC" pad="14"/>
</connects>
</device>
</devices>
</deviceset>
</devicesets>
</library>"""

SIMPLE_SHEET = """<sheet>
<plain>
<text x="0" y="20.32" size="1.778" layer="97">Power input</text>
<wire x1="0" y1="25.4" x2="25.4" y2="25.4" width="0.1524" layer="97" style="shortdash"/>
</plain>
<instances>
<instance part="R1" gate="G$1" x="10.16" y="10.16"/>
<instance part="GND1" gate="1" x="20.32" y="0"/>
</instances>
<busses>
</busses>
<nets>
<net name="N$1" class="0">
<segment>
<wire x1="15.24" y1="10.16" x2="20.32" y2="10.16" width="0.1524" layer="91"/>
<wire x1="20.32" y1="10.16" x2="20.32" y2="2.54" width="0.1524" layer="91"/>
<pinref part="R1" gate="G$1" pin="2"/>
<pinref part="GND1" gate="1" pin="GND"/>
</segment>
</net>
<net name="VIN" class="0">
<segment>
<wire x1="0" y1="10.16" x2="5.08" y2="10.16" width="0.1524" layer="91"/>
<label x="0" y="10.16" size="1.778" layer="95"/>
<pinref part="R1" gate="G$1" pin="1"/>
</segment>
</net>
</nets>
</sheet>"""

# Single sheet: a resistor to ground with a labelled input
SIMPLE_SCHEMATIC = (
    EAGLE_HEADER
    + "<drawing>\n"
    + LAYERS
    + "\n<schematic>\n<libraries>\n"
    + RCL_LIBRARY
    + SUPPLY_LIBRARY
    + """</libraries>
<parts>
<part name="R1" library="rcl" deviceset="R-US_" device="0204/7" value="10k"/>
<part name="GND1" library="supply1" deviceset="GND" device=""/>
</parts>
<sheets>
"""
    + SIMPLE_SHEET
    + """
</sheets>
</schematic>
</drawing>
</eagle>
"""
)

# Two sheets sharing VCC; LOCAL has two unlabelled segments on sheet 1
MULTI_SHEET_SCHEMATIC = (
    EAGLE_HEADER
    + "<drawing>\n"
    + LAYERS
    + """
<schematic>
<libraries>
</libraries>
<parts>
</parts>
<sheets>
<sheet>
<description>Power</description>
<nets>
<net name="VCC" class="0">
<segment>
<wire x1="0" y1="0" x2="5.08" y2="0" width="0.1524" layer="91"/>
</segment>
</net>
<net name="LOCAL" class="0">
<segment>
<wire x1="0" y1="5.08" x2="5.08" y2="5.08" width="0.1524" layer="91"/>
</segment>
<segment>
<wire x1="10.16" y1="5.08" x2="15.24" y2="5.08" width="0.1524" layer="91"/>
</segment>
</net>
</nets>
</sheet>
<sheet>
<nets>
<net name="VCC" class="0">
<segment>
<wire x1="0" y1="0" x2="2.54" y2="0" width="0.1524" layer="91"/>
<label x="0" y="0" size="1.778" layer="95"/>
</segment>
</net>
</nets>
</sheet>
</sheets>
</schematic>
</drawing>
</eagle>
"""
)

# A vertical net wire ending on a horizontal bus
BUS_SCHEMATIC = (
    EAGLE_HEADER
    + "<drawing>\n"
    + LAYERS
    + """
<schematic>
<sheets>
<sheet>
<busses>
<bus name="D[0..7]">
<segment>
<wire x1="0" y1="0" x2="25.4" y2="0" width="0.762" layer="92"/>
</segment>
</bus>
</busses>
<nets>
<net name="D0" class="0">
<segment>
<wire x1="12.7" y1="0" x2="12.7" y2="12.7" width="0.1524" layer="91"/>
<label x="12.7" y="12.7" size="1.778" layer="95"/>
</segment>
</net>
</nets>
</sheet>
</sheets>
</schematic>
</drawing>
</eagle>
"""
)

# An instance whose part is not in the parts table
UNRESOLVED_SCHEMATIC = (
    EAGLE_HEADER
    + "<drawing>\n"
    + LAYERS
    + """
<schematic>
<parts>
</parts>
<sheets>
<sheet>
<instances>
<instance part="X1" gate="G$1" x="0" y="0"/>
</instances>
</sheet>
</sheets>
</schematic>
</drawing>
</eagle>
"""
)


@pytest.fixture
def rcl_library() -> etree._Element:
    """The resistor library as a parsed <library> element."""
    return etree.fromstring(RCL_LIBRARY)


@pytest.fixture
def supply_library() -> etree._Element:
    """The ground symbol library as a parsed <library> element."""
    return etree.fromstring(SUPPLY_LIBRARY)


@pytest.fixture
def logic_library() -> etree._Element:
    """The NAND gate library as a parsed <library> element."""
    return etree.fromstring(LOGIC_LIBRARY)


@pytest.fixture
def session() -> ImportSession:
    """A fresh import session with default settings and fixed stamps."""
    return ImportSession(Path("test.sch"), ImportConfig(), stamp_base=0x1000)


@pytest.fixture
def simple_sch(tmp_path: Path) -> Path:
    """Create a single-sheet schematic file."""
    sch_file = tmp_path / "simple.sch"
    sch_file.write_text(SIMPLE_SCHEMATIC)
    return sch_file


@pytest.fixture
def multi_sheet_sch(tmp_path: Path) -> Path:
    """Create a two-sheet schematic file."""
    sch_file = tmp_path / "multi.sch"
    sch_file.write_text(MULTI_SHEET_SCHEMATIC)
    return sch_file


@pytest.fixture
def bus_sch(tmp_path: Path) -> Path:
    """Create a schematic with a wire ending on a bus."""
    sch_file = tmp_path / "bus.sch"
    sch_file.write_text(BUS_SCHEMATIC)
    return sch_file


@pytest.fixture
def unresolved_sch(tmp_path: Path) -> Path:
    """Create a schematic placing an unknown part."""
    sch_file = tmp_path / "unresolved.sch"
    sch_file.write_text(UNRESOLVED_SCHEMATIC)
    return sch_file
