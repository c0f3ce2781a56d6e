"""Pytest configuration for htmlbom tests."""
import pytest

from htmlbom.pcb import (
    Drawing, DrawingKind, DrawingLayer, Footprint, HtmlBom, Layer, Pad, RefMap,
    Track, Via, Zone
)


def _bom(bottom_left=(0.0, 0.0), top_right=(100.0, 100.0)) -> HtmlBom:
    """Create an empty document with test metadata."""
    return HtmlBom(
        "Test Title",
        "Test Company",
        "Test Revision",
        "Test Date",
        bottom_left,
        top_right,
    )


def _footprint(fields=("Value 1", "Value 2"), pads=(), mount=True, layer=Layer.FRONT) -> Footprint:
    return Footprint(
        layer=layer,
        pos=(50.0, 50.0),
        angle=45.0,
        bottom_left=(-5.0, -5.0),
        top_right=(5.0, 5.0),
        fields=fields,
        pads=pads,
        mount=mount,
    )


def _fake_compress(text: str) -> str:
    return f"<{len(text)}>"


@pytest.fixture
def make_bom():
    """Factory for documents with test metadata."""
    return _bom


@pytest.fixture
def make_footprint():
    """Factory for footprints at (50, 50), rotated by 45 degrees."""
    return _footprint


@pytest.fixture
def fake_compress():
    """Stand-in compressor keeping the payload readable: "<length>"."""
    return _fake_compress


@pytest.fixture
def empty_bom():
    """Document without any content and a zero-size board."""
    return _bom((0.0, 0.0), (0.0, 0.0))


@pytest.fixture
def full_bom():
    """Document using every entity type and setting."""
    bom = _bom()
    bom.dark_mode = True
    bom.show_silkscreen = False
    bom.show_fabrication = False
    bom.checkboxes = ["Foo", "Bar"]
    bom.fields = ["Field 1", "Field 2"]
    bom.user_header = "<!-- header -->"
    bom.user_footer = "<!-- footer -->"
    bom.user_js = "<!-- js -->"

    bom.drawings.append(Drawing(DrawingKind.POLYGON, DrawingLayer.EDGE, "", 0.1, False))
    bom.drawings.append(Drawing(DrawingKind.POLYGON, DrawingLayer.SILKSCREEN_FRONT, "M 0 0", 0.1, False))
    bom.drawings.append(Drawing(DrawingKind.REFERENCE_TEXT, DrawingLayer.SILKSCREEN_BACK, "", 0.1, False))
    bom.drawings.append(Drawing(DrawingKind.POLYGON, DrawingLayer.FABRICATION_FRONT, "M 0 0", 0.1, False))
    bom.drawings.append(Drawing(DrawingKind.VALUE_TEXT, DrawingLayer.FABRICATION_BACK, "M 0 0", 0.1, False))

    bom.tracks.append(Track(Layer.FRONT, (0.0, 0.0), (100.0, 100.0), 1.0))
    bom.tracks.append(Track(Layer.BACK, (0.0, 0.0), (100.0, 100.0), 1.0, net="net 1"))

    bom.vias.append(Via([Layer.FRONT], (50.0, 50.0), 1.0, 0.5))
    bom.vias.append(Via([Layer.FRONT, Layer.BACK], (50.0, 50.0), 1.0, 0.5, net="net 2"))

    bom.zones.append(Zone(Layer.FRONT, "M 0 0"))
    bom.zones.append(Zone(Layer.BACK, "M 0 0", net="net 3"))

    bom.add_footprint(_footprint(mount=False))
    bom.add_footprint(_footprint(pads=[
        Pad([Layer.FRONT], (0.0, -5.0), 45.0, "M 0 0"),
        Pad(
            [Layer.FRONT, Layer.BACK], (0.0, 5.0), 45.0, "M 0 0",
            drill_size=(0.5, 1.0), net="net 4", pin1=True,
        ),
    ]))

    bom.bom_front.append([RefMap("R1", 0), RefMap("R2", 1)])
    bom.bom_back.append([RefMap("R1", 0), RefMap("R2", 1)])
    bom.bom_both.append([RefMap("R1", 0)])
    bom.bom_both.append([RefMap("R2", 1)])
    return bom
