from .document import BomDocument, HtmlBom
from .importer import KiCadImporter
from .models import (
    Drawing, DrawingKind, DrawingLayer, Footprint, Layer, Pad, Point, RefMap,
    Track, Via, Zone
)

__all__ = [
    "BomDocument", "HtmlBom", "KiCadImporter",
    "Drawing", "DrawingKind", "DrawingLayer", "Footprint", "Layer", "Pad",
    "Point", "RefMap", "Track", "Via", "Zone",
]
