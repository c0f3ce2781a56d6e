"""Data models for PCB elements shown in the interactive BOM."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# (x, y) in mm
Point = tuple[float, float]


class Layer(Enum):
    """Copper side of the board."""
    FRONT = "F"
    BACK = "B"


class DrawingLayer(Enum):
    """Non-copper layer a drawing is rendered on."""
    EDGE = "edge"
    SILKSCREEN_FRONT = "silkscreen_front"
    SILKSCREEN_BACK = "silkscreen_back"
    FABRICATION_FRONT = "fabrication_front"
    FABRICATION_BACK = "fabrication_back"


class DrawingKind(Enum):
    """What a drawing represents."""
    POLYGON = "polygon"
    REFERENCE_TEXT = "ref"  # Component reference designator text
    VALUE_TEXT = "val"  # Component value text


@dataclass(frozen=True)
class Drawing:
    """An outline on the board edge, silkscreen or fabrication layer."""
    kind: DrawingKind
    layer: DrawingLayer
    svgpath: str  # Outline as SVG path (mm)
    width: float  # Line width, or glyph thickness for text kinds (mm)
    filled: bool = False


@dataclass(frozen=True)
class Track:
    """A copper track segment."""
    layer: Layer
    start: Point
    end: Point
    width: float  # Track width (mm)
    net: Optional[str] = None


@dataclass(frozen=True)
class Via:
    """A via connecting copper layers."""
    layers: tuple[Layer, ...]
    pos: Point
    diameter: float  # Outer diameter (mm)
    drill_diameter: float  # Drill hole diameter (mm)
    net: Optional[str] = None

    def __post_init__(self):
        # Accept any iterable of layers but always store a tuple
        object.__setattr__(self, "layers", tuple(self.layers))


@dataclass(frozen=True)
class Zone:
    """A copper fill area."""
    layer: Layer
    svgpath: str  # Zone outline as SVG path (mm)
    net: Optional[str] = None


@dataclass(frozen=True)
class Pad:
    """A footprint pad."""
    layers: tuple[Layer, ...]  # Layers on which the pad exists
    pos: Point  # Absolute position (mm)
    angle: float  # Rotation angle (degrees)
    svgpath: str  # Pad shape as SVG path, relative to pos (mm)
    drill_size: Optional[tuple[float, float]] = None  # (w, h), only for THT pads
    net: Optional[str] = None
    pin1: bool = False

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(self.layers))

    @property
    def is_through_hole(self) -> bool:
        """Pads with a drill are through-hole, all others are SMD."""
        return self.drill_size is not None

    @property
    def drill_shape(self) -> Optional[str]:
        """Viewer drill shape: "oblong" or "circle", None for SMD pads."""
        if self.drill_size is None:
            return None
        width, height = self.drill_size
        return "oblong" if width != height else "circle"


@dataclass(frozen=True)
class Footprint:
    """A placed component."""
    layer: Layer  # Placement side
    pos: Point  # Position (mm)
    angle: float  # Rotation angle (degrees)
    bottom_left: Point  # Bounding box corner, relative to pos (mm)
    top_right: Point  # Bounding box corner, relative to pos (mm)
    fields: tuple[str, ...] = field(default_factory=tuple)  # One value per HtmlBom.fields entry
    pads: tuple[Pad, ...] = field(default_factory=tuple)
    mount: bool = True

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "pads", tuple(self.pads))

    @property
    def size(self) -> Point:
        """Bounding box extent (width, height)."""
        return (
            self.top_right[0] - self.bottom_left[0],
            self.top_right[1] - self.bottom_left[1],
        )


@dataclass(frozen=True)
class RefMap:
    """Maps a reference designator (e.g. "R1") to a footprint ID."""
    reference: str
    footprint_id: int  # As returned by HtmlBom.add_footprint()


# A BOM row groups designators sharing identical field values
BomRow = tuple[RefMap, ...]
