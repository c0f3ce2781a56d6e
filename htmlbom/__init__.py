"""Interactive HTML BOM generator."""
from .exceptions import (
    BoardImportError, FieldCountMismatchError, HtmlBomError,
    InvalidReferenceError, ValidationError
)
from .pcb import (
    BomDocument, Drawing, DrawingKind, DrawingLayer, Footprint, HtmlBom,
    KiCadImporter, Layer, Pad, RefMap, Track, Via, Zone
)

__all__ = [
    "HtmlBom", "BomDocument", "KiCadImporter",
    "Drawing", "DrawingKind", "DrawingLayer", "Footprint", "Layer", "Pad",
    "RefMap", "Track", "Via", "Zone",
    "HtmlBomError", "ValidationError", "InvalidReferenceError",
    "FieldCountMismatchError", "BoardImportError",
]
