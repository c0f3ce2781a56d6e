"""Tests for the JSON structures passed to the viewer."""
import pytest

from htmlbom.pcb import (
    Drawing, DrawingKind, DrawingLayer, Layer, Pad, RefMap, Track, Via, Zone
)
from htmlbom.viewer import build_config, build_pcbdata, to_json
from htmlbom.viewer.serialize import DRAWING_BUCKETS, LAYER_KEYS


def test_every_enum_member_is_mapped():
    """Each layer and drawing layer has a defined place in the output."""
    assert set(LAYER_KEYS) == set(Layer)
    assert set(DRAWING_BUCKETS) | {DrawingLayer.EDGE} == set(DrawingLayer)


@pytest.mark.parametrize("kind, expected", [
    (DrawingKind.POLYGON, {"type": "polygon", "width": 0.2}),
    (DrawingKind.REFERENCE_TEXT, {"thickness": 0.2, "ref": 1}),
    (DrawingKind.VALUE_TEXT, {"thickness": 0.2, "val": 1}),
])
def test_drawing(kind, expected):
    drawing = Drawing(kind, DrawingLayer.SILKSCREEN_FRONT, "M 1 2", 0.2, True)
    assert to_json(drawing) == {"svgpath": "M 1 2", "filled": True, **expected}


def test_track_without_net():
    track = Track(Layer.FRONT, (0.0, 1.0), (2.0, 3.0), 0.25)
    assert to_json(track) == {"start": [0.0, 1.0], "end": [2.0, 3.0], "width": 0.25}


def test_track_with_net():
    track = Track(Layer.BACK, (0.0, 1.0), (2.0, 3.0), 0.25, net="GND")
    assert to_json(track)["net"] == "GND"


def test_via():
    """A via is a zero-length track at its center with a drill size."""
    via = Via([Layer.FRONT, Layer.BACK], (5.0, 6.0), 0.8, 0.4, net="VCC")
    assert to_json(via) == {
        "start": [5.0, 6.0],
        "end": [5.0, 6.0],
        "width": 0.8,
        "drillsize": 0.4,
        "net": "VCC",
    }


def test_zone():
    assert to_json(Zone(Layer.FRONT, "M 0 0 L 1 1 Z")) == {"svgpath": "M 0 0 L 1 1 Z"}
    assert to_json(Zone(Layer.FRONT, "", net="GND")) == {"svgpath": "", "net": "GND"}


def test_smd_pad():
    """SMD pads carry no drill information and no placeholders."""
    pad = Pad([Layer.FRONT], (1.0, 2.0), 90.0, "M 0 0")
    assert to_json(pad) == {
        "layers": ["F"],
        "pos": [1.0, 2.0],
        "angle": 90.0,
        "shape": "custom",
        "svgpath": "M 0 0",
        "type": "smd",
    }


def test_through_hole_pad():
    pad = Pad(
        [Layer.FRONT, Layer.BACK], (0.0, 5.0), 45.0, "M 0 0",
        drill_size=(0.5, 1.0), net="net 4", pin1=True,
    )
    obj = to_json(pad)

    assert obj["layers"] == ["F", "B"]
    assert obj["type"] == "th"
    assert obj["drillsize"] == [0.5, 1.0]
    assert obj["drillshape"] == "oblong"
    assert obj["net"] == "net 4"
    assert obj["pin1"] == 1


def test_round_drill_and_no_pin1():
    pad = Pad([Layer.BACK], (0.0, 0.0), 0.0, "", drill_size=(1.0, 1.0))
    obj = to_json(pad)

    assert obj["drillshape"] == "circle"
    assert "pin1" not in obj
    assert "net" not in obj


def test_footprint(make_footprint):
    fp = make_footprint(layer=Layer.BACK, pads=[Pad([Layer.BACK], (0.0, 0.0), 0.0, "")])
    obj = to_json(fp)

    assert obj["bbox"] == {
        "pos": [50.0, 50.0],
        "angle": 45.0,
        "relpos": [-5.0, -5.0],
        "size": [10.0, 10.0],
    }
    assert obj["drawings"] == []
    assert obj["layer"] == "B"
    assert len(obj["pads"]) == 1


def test_refmap():
    assert to_json(RefMap("C3", 7)) == ["C3", 7]


def test_unknown_entity():
    with pytest.raises(TypeError):
        to_json(object())


def test_config(full_bom):
    config = build_config(full_bom.freeze()).model_dump()

    assert list(config) == [
        "board_rotation", "bom_view", "checkboxes", "dark_mode", "fields",
        "highlight_pin1", "kicad_text_formatting", "layer_view",
        "offset_back_rotation", "redraw_on_drag", "show_fabrication",
        "show_pads", "show_silkscreen",
    ]
    assert config["board_rotation"] == 0
    assert config["bom_view"] == "left-right"
    assert config["checkboxes"] == "Foo,Bar"
    assert config["dark_mode"] is True
    assert config["fields"] == ["Field 1", "Field 2"]
    assert config["highlight_pin1"] == "none"
    assert config["kicad_text_formatting"] is False
    assert config["layer_view"] == "FB"
    assert config["offset_back_rotation"] is False
    assert config["redraw_on_drag"] is True
    assert config["show_fabrication"] is False
    assert config["show_pads"] is True
    assert config["show_silkscreen"] is False


def test_pcbdata_empty(empty_bom):
    """An empty document still produces the full structure."""
    data = build_pcbdata(empty_bom.freeze(), "1.0")

    assert data["ibom_version"] == "1.0"
    assert data["edges_bbox"] == {"minx": 0.0, "maxx": 0.0, "miny": 0.0, "maxy": 0.0}
    assert data["edges"] == []
    assert data["drawings"] == {
        "silkscreen": {"F": [], "B": []},
        "fabrication": {"F": [], "B": []},
    }
    assert data["tracks"] == {"F": [], "B": []}
    assert data["zones"] == {"F": [], "B": []}
    assert data["nets"] == []
    assert data["footprints"] == []
    assert data["bom"] == {"F": [], "B": [], "both": [], "skipped": [], "fields": {}}


def test_pcbdata_full(full_bom):
    data = build_pcbdata(full_bom.freeze(), "2.9.0")

    assert data["metadata"] == {
        "title": "Test Title",
        "company": "Test Company",
        "revision": "Test Revision",
        "date": "Test Date",
    }
    assert data["edges_bbox"] == {"minx": 0.0, "maxx": 100.0, "miny": 0.0, "maxy": 100.0}
    assert len(data["edges"]) == 1
    assert data["drawings"]["silkscreen"]["F"][0]["type"] == "polygon"
    assert data["drawings"]["silkscreen"]["B"][0]["ref"] == 1
    assert data["drawings"]["fabrication"]["F"][0]["svgpath"] == "M 0 0"
    assert data["drawings"]["fabrication"]["B"][0]["val"] == 1

    # Tracks of each side come first, then the vias present on that side
    front, back = data["tracks"]["F"], data["tracks"]["B"]
    assert len(front) == 3
    assert "drillsize" not in front[0]
    assert all("drillsize" in item for item in front[1:])
    assert len(back) == 2
    assert back[0]["net"] == "net 1"
    assert back[1]["net"] == "net 2"

    assert data["zones"]["F"] == [{"svgpath": "M 0 0"}]
    assert data["zones"]["B"] == [{"svgpath": "M 0 0", "net": "net 3"}]
    assert data["nets"] == ["net 4"]
    assert len(data["footprints"]) == 2

    bom = data["bom"]
    assert bom["F"] == [[["R1", 0], ["R2", 1]]]
    assert bom["B"] == [[["R1", 0], ["R2", 1]]]
    assert bom["both"] == [[["R1", 0]], [["R2", 1]]]
    assert bom["skipped"] == [0]
    assert bom["fields"] == {"0": ["Value 1", "Value 2"], "1": ["Value 1", "Value 2"]}
