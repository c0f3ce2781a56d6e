"""Conversion of the BOM document into the JSON structures read by ibom.js."""
from typing import Any, Iterable, Literal, Union

from pydantic import BaseModel

from htmlbom.pcb.document import BomDocument
from htmlbom.pcb.models import (
    Drawing, DrawingKind, DrawingLayer, Footprint, Layer, Pad, Point, RefMap,
    Track, Via, Zone,
)

from .aggregate import collect_dnp_ids, collect_nets, detect_layer_view

Entity = Union[Drawing, Track, Via, Zone, Pad, Footprint, RefMap]

# Viewer key of each copper side
LAYER_KEYS = {
    Layer.FRONT: "F",
    Layer.BACK: "B",
}

# (drawings group, side) of each non-edge drawing layer
DRAWING_BUCKETS = {
    DrawingLayer.SILKSCREEN_FRONT: ("silkscreen", "F"),
    DrawingLayer.SILKSCREEN_BACK: ("silkscreen", "B"),
    DrawingLayer.FABRICATION_FRONT: ("fabrication", "F"),
    DrawingLayer.FABRICATION_BACK: ("fabrication", "B"),
}


class ViewerConfig(BaseModel):
    """Settings object assigned to the `config` variable of the page."""
    board_rotation: int = 0
    bom_view: Literal["left-right"] = "left-right"
    checkboxes: str
    dark_mode: bool
    fields: list[str]
    highlight_pin1: Literal["none"] = "none"
    kicad_text_formatting: bool = False
    layer_view: Literal["F", "B", "FB"]
    offset_back_rotation: bool = False
    redraw_on_drag: bool = True
    show_fabrication: bool
    show_pads: bool
    show_silkscreen: bool


def point_to_json(point: Point) -> list[float]:
    return [point[0], point[1]]


def _with_net(obj: dict[str, Any], net: str | None) -> dict[str, Any]:
    if net is not None:
        obj["net"] = net
    return obj


def drawing_to_json(drawing: Drawing) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "svgpath": drawing.svgpath,
        "filled": drawing.filled,
    }
    if drawing.kind is DrawingKind.POLYGON:
        obj["type"] = "polygon"
        obj["width"] = drawing.width
    elif drawing.kind is DrawingKind.REFERENCE_TEXT:
        obj["thickness"] = drawing.width
        obj["ref"] = 1
    elif drawing.kind is DrawingKind.VALUE_TEXT:
        obj["thickness"] = drawing.width
        obj["val"] = 1
    else:
        raise ValueError(f"Unhandled drawing kind: {drawing.kind!r}")
    return obj


def track_to_json(track: Track) -> dict[str, Any]:
    return _with_net({
        "start": point_to_json(track.start),
        "end": point_to_json(track.end),
        "width": track.width,
    }, track.net)


def via_to_json(via: Via) -> dict[str, Any]:
    """Vias are drawn as zero-length tracks with a drill."""
    return _with_net({
        "start": point_to_json(via.pos),
        "end": point_to_json(via.pos),
        "width": via.diameter,
        "drillsize": via.drill_diameter,
    }, via.net)


def zone_to_json(zone: Zone) -> dict[str, Any]:
    return _with_net({"svgpath": zone.svgpath}, zone.net)


def pad_to_json(pad: Pad) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "layers": [LAYER_KEYS[layer] for layer in pad.layers],
        "pos": point_to_json(pad.pos),
        "angle": pad.angle,
        "shape": "custom",
        "svgpath": pad.svgpath,
    }
    if pad.is_through_hole:
        obj["type"] = "th"
        obj["drillsize"] = [pad.drill_size[0], pad.drill_size[1]]
        obj["drillshape"] = pad.drill_shape
    else:
        obj["type"] = "smd"
    _with_net(obj, pad.net)
    if pad.pin1:
        obj["pin1"] = 1
    return obj


def footprint_to_json(footprint: Footprint) -> dict[str, Any]:
    return {
        "bbox": {
            "pos": point_to_json(footprint.pos),
            "angle": footprint.angle,
            "relpos": point_to_json(footprint.bottom_left),
            "size": point_to_json(footprint.size),
        },
        "drawings": [],  # Footprint-local drawings are not supported
        "layer": LAYER_KEYS[footprint.layer],
        "pads": [pad_to_json(pad) for pad in footprint.pads],
    }


def refmap_to_json(refmap: RefMap) -> list[Any]:
    return [refmap.reference, refmap.footprint_id]


def to_json(entity: Entity) -> Any:
    """Serialize any single entity to its viewer representation."""
    if isinstance(entity, Drawing):
        return drawing_to_json(entity)
    elif isinstance(entity, Track):
        return track_to_json(entity)
    elif isinstance(entity, Via):
        return via_to_json(entity)
    elif isinstance(entity, Zone):
        return zone_to_json(entity)
    elif isinstance(entity, Pad):
        return pad_to_json(entity)
    elif isinstance(entity, Footprint):
        return footprint_to_json(entity)
    elif isinstance(entity, RefMap):
        return refmap_to_json(entity)
    raise TypeError(f"Cannot serialize {type(entity).__name__}")


def _rows_to_json(rows: Iterable[Iterable[RefMap]]) -> list[list[Any]]:
    return [[refmap_to_json(refmap) for refmap in row] for row in rows]


def build_config(document: BomDocument) -> ViewerConfig:
    """Build the viewer settings for a document."""
    return ViewerConfig(
        checkboxes=",".join(document.checkboxes),
        dark_mode=document.dark_mode,
        fields=list(document.fields),
        layer_view=detect_layer_view(document.bom_front, document.bom_back),
        show_fabrication=document.show_fabrication,
        show_pads=document.show_pads,
        show_silkscreen=document.show_silkscreen,
    )


def _drawings_json(document: BomDocument) -> tuple[list[dict], dict[str, dict[str, list]]]:
    """Split drawings into the edge list and the silkscreen/fabrication groups."""
    edges = []
    groups: dict[str, dict[str, list]] = {
        "silkscreen": {"F": [], "B": []},
        "fabrication": {"F": [], "B": []},
    }
    for drawing in document.drawings:
        if drawing.layer is DrawingLayer.EDGE:
            edges.append(drawing_to_json(drawing))
            continue
        group, side = DRAWING_BUCKETS[drawing.layer]
        groups[group][side].append(drawing_to_json(drawing))
    return edges, groups


def _tracks_json(document: BomDocument, layer: Layer) -> list[dict]:
    """Tracks of one side followed by every via present on that side."""
    items = [track_to_json(t) for t in document.tracks if t.layer is layer]
    items.extend(via_to_json(v) for v in document.vias if layer in v.layers)
    return items


def build_pcbdata(document: BomDocument, version: str) -> dict[str, Any]:
    """
    Build the payload assigned (compressed) to the `pcbdata` variable.

    Args:
        document: Validated document
        version: Viewer version string stored as ibom_version

    Returns:
        JSON-serializable dictionary
    """
    edges, drawings = _drawings_json(document)
    return {
        "ibom_version": version,
        "metadata": {
            "title": document.title,
            "company": document.company,
            "revision": document.revision,
            "date": document.date,
        },
        "edges_bbox": {
            "minx": document.bottom_left[0],
            "maxx": document.top_right[0],
            "miny": document.bottom_left[1],
            "maxy": document.top_right[1],
        },
        "edges": edges,
        "drawings": drawings,
        "tracks": {
            key: _tracks_json(document, layer) for layer, key in LAYER_KEYS.items()
        },
        "zones": {
            key: [zone_to_json(z) for z in document.zones if z.layer is layer]
            for layer, key in LAYER_KEYS.items()
        },
        "nets": collect_nets(document.footprints),
        "footprints": [footprint_to_json(fp) for fp in document.footprints],
        "bom": {
            "F": _rows_to_json(document.bom_front),
            "B": _rows_to_json(document.bom_back),
            "both": _rows_to_json(document.bom_both),
            "skipped": collect_dnp_ids(document.footprints),
            "fields": {
                str(index): list(fp.fields) for index, fp in enumerate(document.footprints)
            },
        },
    }
