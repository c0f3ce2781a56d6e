"""Build an HtmlBom from a KiCad PCB file using kiutils."""
import logging
import math
import re
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from kiutils.board import Board

from htmlbom.config import DEFAULT_IMPORT_FIELDS
from htmlbom.exceptions import BoardImportError

from .document import HtmlBom
from .models import (
    Drawing, DrawingKind, DrawingLayer, Footprint, Layer, Pad, Point, RefMap,
    Track, Via, Zone
)
from .paths import arc_path, circle_path, line_path, pad_shape_path, polygon_path
from .transform import bounding_box, footprint_to_board, rotate_point

logger = logging.getLogger(__name__)

PointMapper = Callable[[float, float], Point]

# Copper layers mapped to board sides
COPPER_SIDES = {
    "F.Cu": Layer.FRONT,
    "B.Cu": Layer.BACK,
}

# Graphic layers shown by the viewer (KiCad 6 and 7+ names)
DRAWING_LAYERS = {
    "Edge.Cuts": DrawingLayer.EDGE,
    "F.SilkS": DrawingLayer.SILKSCREEN_FRONT,
    "F.Silkscreen": DrawingLayer.SILKSCREEN_FRONT,
    "B.SilkS": DrawingLayer.SILKSCREEN_BACK,
    "B.Silkscreen": DrawingLayer.SILKSCREEN_BACK,
    "F.Fab": DrawingLayer.FABRICATION_FRONT,
    "B.Fab": DrawingLayer.FABRICATION_BACK,
}

# Pad numbers treated as pin 1
PIN1_NAMES = {"1", "A1"}

DEFAULT_LINE_WIDTH = 0.1


def _identity(x: float, y: float) -> Point:
    return x, y


def _natural_key(reference: str) -> list:
    """Sort key placing R2 before R10."""
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", reference)]


def _stroke_width(item, default: float = DEFAULT_LINE_WIDTH) -> float:
    """Line width of a graphic item (stroke in KiCad 7+, width before)."""
    stroke = getattr(item, "stroke", None)
    if stroke is not None and stroke.width:
        return stroke.width
    width = getattr(item, "width", None)
    return width if width else default


def _is_filled(item) -> bool:
    fill = getattr(item, "fill", None)
    return fill in ("solid", "yes", True)


def footprint_properties(fp) -> dict[str, str]:
    """Footprint properties, including reference and value texts of KiCad 6/7 boards."""
    properties = dict(fp.properties or {})
    for item in fp.graphicItems:
        if type(item).__name__ == "FpText" and item.type in ("reference", "value"):
            properties.setdefault(item.type.capitalize(), item.text)
    return properties


def graphic_to_path(item, to_board: PointMapper = _identity) -> tuple[str, list[Point]] | None:
    """
    Convert a kiutils graphic item to an SVG path.

    Args:
        item: Gr*/Fp* line, rect, circle, arc or polygon
        to_board: Maps item coordinates to board coordinates

    Returns:
        (svg path, extreme points) or None for unsupported items
    """
    item_type = type(item).__name__

    if item_type in ("GrLine", "FpLine"):
        start = to_board(item.start.X, item.start.Y)
        end = to_board(item.end.X, item.end.Y)
        return line_path(start, end), [start, end]

    elif item_type in ("GrRect", "FpRect"):
        x1, y1 = item.start.X, item.start.Y
        x2, y2 = item.end.X, item.end.Y
        corners = [to_board(x1, y1), to_board(x2, y1), to_board(x2, y2), to_board(x1, y2)]
        return polygon_path(corners), corners

    elif item_type in ("GrCircle", "FpCircle"):
        center = to_board(item.center.X, item.center.Y)
        radius = math.hypot(item.end.X - item.center.X, item.end.Y - item.center.Y)
        extent = [
            (center[0] - radius, center[1] - radius),
            (center[0] + radius, center[1] + radius),
        ]
        return circle_path(center, radius), extent

    elif item_type in ("GrArc", "FpArc"):
        start = to_board(item.start.X, item.start.Y)
        end = to_board(item.end.X, item.end.Y)
        if not getattr(item, "mid", None):
            return line_path(start, end), [start, end]
        mid = to_board(item.mid.X, item.mid.Y)
        return arc_path(start, mid, end), [start, mid, end]

    elif item_type in ("GrPoly", "FpPoly"):
        points = [to_board(pt.X, pt.Y) for pt in getattr(item, "coordinates", None) or []]
        if not points:
            return None
        return polygon_path(points), points

    return None


def group_bom_rows(entries: Iterable[tuple[str, int, tuple[str, ...]]]) -> list[list[RefMap]]:
    """
    Group (reference, footprint_id, fields) entries into BOM rows.

    Footprints with identical field values share a row. References within a
    row and rows themselves are sorted naturally by reference.
    """
    groups: dict[tuple[str, ...], list[RefMap]] = {}
    for reference, footprint_id, fields in entries:
        groups.setdefault(fields, []).append(RefMap(reference, footprint_id))

    rows = [sorted(row, key=lambda r: _natural_key(r.reference)) for row in groups.values()]
    rows.sort(key=lambda row: _natural_key(row[0].reference))
    return rows


class KiCadImporter:
    """Converts a KiCad board into an HtmlBom."""

    def __init__(self, board: str | Path | Board):
        """
        Load a board.

        Args:
            board: Path to a .kicad_pcb file or an already loaded kiutils Board

        Raises:
            BoardImportError: The file does not exist or cannot be parsed
        """
        if isinstance(board, Board):
            self.pcb_path: Optional[Path] = None
            self.board = board
        else:
            self.pcb_path = Path(board)
            if not self.pcb_path.exists():
                raise BoardImportError(
                    "PCB file not found",
                    file_path=self.pcb_path,
                    suggestions=["Set HTMLBOM_PCB_FILE to an existing .kicad_pcb file"],
                )
            try:
                self.board = Board.from_file(str(self.pcb_path))
            except Exception as e:
                raise BoardImportError(f"Cannot parse PCB file: {e}", file_path=self.pcb_path) from e
            logger.info(f"Loaded {self.pcb_path} ({len(self.board.footprints)} footprints)")

        # Build net lookup
        self._net_names: dict[int, str] = {net.number: net.name for net in self.board.nets}

    def _net_name(self, net_id: Optional[int]) -> Optional[str]:
        return self._net_names.get(net_id or 0) or None

    def metadata(self) -> tuple[str, str, str, str]:
        """(title, company, revision, date) from the title block."""
        tb = getattr(self.board, "titleBlock", None)
        if tb is None:
            return "", "", "", ""
        return tb.title or "", tb.company or "", tb.revision or "", tb.date or ""

    def drawings(self) -> list[Drawing]:
        """Board and footprint graphics on edge, silkscreen and fabrication layers."""
        drawings = []
        for item in self.board.graphicItems:
            drawings.extend(self._drawing(item, _identity))

        for fp in self.board.footprints:
            fp_pos = (fp.position.X, fp.position.Y)
            fp_angle = fp.position.angle or 0.0

            def to_board(x: float, y: float, fp_pos=fp_pos, fp_angle=fp_angle) -> Point:
                return footprint_to_board(x, y, fp_pos, fp_angle)

            for item in fp.graphicItems:
                drawings.extend(self._drawing(item, to_board))
        return drawings

    def _drawing(self, item, to_board: PointMapper) -> list[Drawing]:
        layer = DRAWING_LAYERS.get(getattr(item, "layer", None))
        if layer is None:
            return []
        converted = graphic_to_path(item, to_board)
        if converted is None:
            logger.debug(f"Skipping unsupported graphic {type(item).__name__}")
            return []
        svgpath, _ = converted
        return [Drawing(
            kind=DrawingKind.POLYGON,
            layer=layer,
            svgpath=svgpath,
            width=_stroke_width(item),
            filled=_is_filled(item),
        )]

    def bounds(self) -> tuple[Point, Point]:
        """Board bounding box from Edge.Cuts, or from pads when there is no outline."""
        points: list[Point] = []
        for item in self.board.graphicItems:
            if getattr(item, "layer", None) != "Edge.Cuts":
                continue
            converted = graphic_to_path(item)
            if converted is not None:
                points.extend(converted[1])

        if not points:
            for fp in self.board.footprints:
                for pad in self.footprint(fp)[0].pads:
                    points.append(pad.pos)

        box = bounding_box(points)
        if box is None:
            return (0.0, 0.0), (0.0, 0.0)
        return box

    def _pad_layers(self, layers: Sequence[str]) -> tuple[Layer, ...]:
        """Board sides a pad exists on (*.Cu expands to both)."""
        sides = []
        for name in layers:
            if name == "*.Cu":
                return (Layer.FRONT, Layer.BACK)
            side = COPPER_SIDES.get(name)
            if side is not None and side not in sides:
                sides.append(side)
        return tuple(sides)

    def _pad(self, pad, fp_pos: Point, fp_angle: float) -> Optional[Pad]:
        layers = self._pad_layers(list(pad.layers) if pad.layers else [])
        if not layers:
            logger.debug(f"Skipping pad {pad.number} without copper layers")
            return None

        drill_size = None
        if pad.type in ("thru_hole", "np_thru_hole") and pad.drill and pad.drill.diameter:
            diameter = pad.drill.diameter
            if pad.drill.oval and pad.drill.width:
                drill_size = (diameter, pad.drill.width)
            else:
                drill_size = (diameter, diameter)

        return Pad(
            layers=layers,
            pos=footprint_to_board(pad.position.X, pad.position.Y, fp_pos, fp_angle),
            angle=pad.position.angle or 0.0,
            svgpath=pad_shape_path(
                pad.shape or "rect",
                pad.size.X,
                pad.size.Y,
                getattr(pad, "roundrectRatio", None) or 0.0,
            ),
            drill_size=drill_size,
            net=pad.net.name if pad.net and pad.net.name else None,
            pin1=pad.number in PIN1_NAMES,
        )

    def footprint(self, fp, fields: Sequence[str] = DEFAULT_IMPORT_FIELDS) -> tuple[Footprint, str]:
        """
        Convert a kiutils footprint.

        Returns:
            (footprint, reference designator)
        """
        fp_pos = (fp.position.X, fp.position.Y)
        fp_angle = fp.position.angle or 0.0
        properties = footprint_properties(fp)
        reference = properties.get("Reference", "")

        pads = []
        corners: list[Point] = []
        for kipad in fp.pads:
            pad = self._pad(kipad, fp_pos, fp_angle)
            if pad is None:
                continue
            pads.append(pad)
            local_x, local_y = kipad.position.X, kipad.position.Y

            # Pad extent in the footprint frame; pad angles in the file include the footprint rotation
            w2, h2 = kipad.size.X / 2, kipad.size.Y / 2
            local_angle = -(pad.angle - fp_angle)
            for dx, dy in ((-w2, -h2), (w2, -h2), (w2, h2), (-w2, h2)):
                rx, ry = rotate_point(dx, dy, local_angle)
                corners.append((local_x + rx, local_y + ry))

        box = bounding_box(corners) or ((0.0, 0.0), (0.0, 0.0))

        attributes = getattr(fp, "attributes", None)
        dnp = bool(getattr(attributes, "dnp", False)) or "dnp" in {k.lower() for k in properties}

        footprint = Footprint(
            layer=COPPER_SIDES.get(fp.layer, Layer.FRONT),
            pos=fp_pos,
            angle=fp_angle,
            bottom_left=box[0],
            top_right=box[1],
            fields=tuple(self._field_value(fp, name) for name in fields),
            pads=tuple(pads),
            mount=not dnp,
        )
        return footprint, reference

    def _field_value(self, fp, name: str) -> str:
        if name == "Footprint":
            lib_id = getattr(fp, "libId", None) or getattr(fp, "entryName", None) or ""
            return lib_id.split(":")[-1]
        return footprint_properties(fp).get(name, "")

    def tracks(self) -> tuple[list[Track], list[Via]]:
        """Copper segments on the outer layers and vias."""
        tracks: list[Track] = []
        vias: list[Via] = []
        for item in self.board.traceItems:
            item_type = type(item).__name__

            if item_type == "Segment":
                layer = COPPER_SIDES.get(item.layer)
                if layer is None:
                    continue
                tracks.append(Track(
                    layer=layer,
                    start=(item.start.X, item.start.Y),
                    end=(item.end.X, item.end.Y),
                    width=item.width,
                    net=self._net_name(item.net),
                ))

            elif item_type == "Via":
                layers = self._pad_layers(list(item.layers) if item.layers else [])
                if not layers:
                    continue
                vias.append(Via(
                    layers=layers,
                    pos=(item.position.X, item.position.Y),
                    diameter=item.size,
                    drill_diameter=item.drill,
                    net=self._net_name(item.net),
                ))
        return tracks, vias

    def zones(self) -> list[Zone]:
        """Filled zone polygons, or zone outlines when the board is unfilled."""
        zones = []
        for zone in self.board.zones:
            net = getattr(zone, "netName", None) or None
            outlines = [(p.layer, p.coordinates) for p in getattr(zone, "filledPolygons", None) or []]
            if not outlines:
                outlines = [
                    (layer, polygon.coordinates)
                    for polygon in getattr(zone, "polygons", None) or []
                    for layer in getattr(zone, "layers", None) or []
                ]
            for layer_name, coordinates in outlines:
                layer = COPPER_SIDES.get(layer_name)
                if layer is None or not coordinates:
                    continue
                svgpath = polygon_path([(pt.X, pt.Y) for pt in coordinates])
                zones.append(Zone(layer=layer, svgpath=svgpath, net=net))
        return zones

    def to_bom(self, fields: Sequence[str] = DEFAULT_IMPORT_FIELDS) -> HtmlBom:
        """
        Convert the whole board.

        Args:
            fields: Field columns; "Footprint" is the library footprint name,
                anything else is looked up in the footprint properties

        Returns:
            HtmlBom ready for generate()
        """
        title, company, revision, date = self.metadata()
        bottom_left, top_right = self.bounds()
        bom = HtmlBom(title, company, revision, date, bottom_left, top_right)
        bom.fields = list(fields)
        bom.drawings = self.drawings()
        bom.tracks, bom.vias = self.tracks()
        bom.zones = self.zones()

        front, back = [], []
        for fp in self.board.footprints:
            footprint, reference = self.footprint(fp, fields)
            footprint_id = bom.add_footprint(footprint)

            attributes = getattr(fp, "attributes", None)
            if getattr(attributes, "excludeFromBom", False) or not reference or reference.startswith("#"):
                continue
            entry = (reference, footprint_id, footprint.fields)
            (front if footprint.layer is Layer.FRONT else back).append(entry)

        bom.bom_front = group_bom_rows(front)
        bom.bom_back = group_bom_rows(back)
        bom.bom_both = group_bom_rows(front + back)
        logger.info(
            f"Imported {len(bom.footprints)} footprints, {len(bom.bom_both)} BOM rows, "
            f"{len(bom.tracks)} tracks, {len(bom.vias)} vias, {len(bom.zones)} zones"
        )
        return bom
