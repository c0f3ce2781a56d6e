"""FastAPI application serving interactive BOM pages."""
import logging
from functools import lru_cache
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from .config import DEFAULT_CHECKBOXES, DEFAULT_HOST, DEFAULT_PCB_FILE, DEFAULT_PORT
from .exceptions import BoardImportError, ValidationError
from .pcb import (
    Drawing, DrawingKind, DrawingLayer, Footprint, HtmlBom, KiCadImporter,
    Layer, Pad, RefMap, Track, Via, Zone
)
from .viewer import HtmlBomGenerator

logger = logging.getLogger(__name__)

BomLoader = Callable[[], HtmlBom]


class DrawingRequest(BaseModel):
    """Request model for a drawing."""
    kind: DrawingKind = DrawingKind.POLYGON
    layer: DrawingLayer
    svgpath: str
    width: float = 0.0
    filled: bool = False


class TrackRequest(BaseModel):
    """Request model for a track segment."""
    layer: Layer
    start: tuple[float, float]
    end: tuple[float, float]
    width: float
    net: Optional[str] = None


class ViaRequest(BaseModel):
    """Request model for a via."""
    layers: list[Layer]
    pos: tuple[float, float]
    diameter: float
    drill_diameter: float
    net: Optional[str] = None


class ZoneRequest(BaseModel):
    """Request model for a zone."""
    layer: Layer
    svgpath: str
    net: Optional[str] = None


class PadRequest(BaseModel):
    """Request model for a footprint pad."""
    layers: list[Layer]
    pos: tuple[float, float]
    angle: float = 0.0
    svgpath: str
    drill_size: Optional[tuple[float, float]] = None  # Only for THT pads
    net: Optional[str] = None
    pin1: bool = False


class FootprintRequest(BaseModel):
    """Request model for a footprint."""
    layer: Layer
    pos: tuple[float, float]
    angle: float = 0.0
    bottom_left: tuple[float, float]
    top_right: tuple[float, float]
    fields: list[str] = Field(default_factory=list)
    pads: list[PadRequest] = Field(default_factory=list)
    mount: bool = True


class RefMapRequest(BaseModel):
    """Request model for one designator of a BOM row."""
    reference: str
    footprint_id: int


class BomRequest(BaseModel):
    """Request model describing a complete BOM document."""
    title: str
    company: str = ""
    revision: str = ""
    date: str = ""
    bottom_left: tuple[float, float] = (0.0, 0.0)
    top_right: tuple[float, float] = (0.0, 0.0)
    dark_mode: bool = False
    show_silkscreen: bool = True
    show_fabrication: bool = True
    show_pads: bool = True
    checkboxes: list[str] = Field(default_factory=lambda: list(DEFAULT_CHECKBOXES))
    fields: list[str] = Field(default_factory=list)
    user_header: str = ""
    user_footer: str = ""
    user_js: str = ""
    drawings: list[DrawingRequest] = Field(default_factory=list)
    tracks: list[TrackRequest] = Field(default_factory=list)
    vias: list[ViaRequest] = Field(default_factory=list)
    zones: list[ZoneRequest] = Field(default_factory=list)
    footprints: list[FootprintRequest] = Field(default_factory=list)
    bom_front: list[list[RefMapRequest]] = Field(default_factory=list)
    bom_back: list[list[RefMapRequest]] = Field(default_factory=list)
    bom_both: list[list[RefMapRequest]] = Field(default_factory=list)

    def to_bom(self) -> HtmlBom:
        """Build the equivalent HtmlBom."""
        bom = HtmlBom(
            self.title, self.company, self.revision, self.date,
            self.bottom_left, self.top_right,
        )
        bom.dark_mode = self.dark_mode
        bom.show_silkscreen = self.show_silkscreen
        bom.show_fabrication = self.show_fabrication
        bom.show_pads = self.show_pads
        bom.checkboxes = list(self.checkboxes)
        bom.fields = list(self.fields)
        bom.user_header = self.user_header
        bom.user_footer = self.user_footer
        bom.user_js = self.user_js
        bom.drawings = [Drawing(**d.model_dump()) for d in self.drawings]
        bom.tracks = [Track(**t.model_dump()) for t in self.tracks]
        bom.vias = [Via(**v.model_dump()) for v in self.vias]
        bom.zones = [Zone(**z.model_dump()) for z in self.zones]
        for fp in self.footprints:
            bom.add_footprint(Footprint(
                **fp.model_dump(exclude={"pads"}),
                pads=[Pad(**p.model_dump()) for p in fp.pads],
            ))
        bom.bom_front = [[RefMap(**r.model_dump()) for r in row] for row in self.bom_front]
        bom.bom_back = [[RefMap(**r.model_dump()) for r in row] for row in self.bom_back]
        bom.bom_both = [[RefMap(**r.model_dump()) for r in row] for row in self.bom_both]
        return bom


def load_default_bom() -> HtmlBom:
    """Import the board configured by HTMLBOM_PCB_FILE."""
    return KiCadImporter(DEFAULT_PCB_FILE).to_bom()


def create_app(load_bom: BomLoader = load_default_bom) -> FastAPI:
    """
    Create the application.

    Args:
        load_bom: Returns the document served by GET routes. Called once,
            on the first request that needs it.
    """
    app = FastAPI(title="Interactive HTML BOM", version="0.1.0")
    board_bom = lru_cache(maxsize=1)(load_bom)

    def generator() -> HtmlBomGenerator:
        return HtmlBomGenerator(board_bom().freeze())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "context": exc.context},
        )

    @app.exception_handler(BoardImportError)
    async def import_error_handler(request: Request, exc: BoardImportError):
        logger.error(str(exc))
        return JSONResponse(
            status_code=503,
            content={"detail": exc.message, "context": exc.context},
        )

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Interactive BOM page for the configured board."""
        return HTMLResponse(generator().generate())

    @app.get("/api/config")
    async def get_config():
        """Viewer settings of the configured board."""
        return generator().config().model_dump()

    @app.get("/api/pcbdata")
    async def get_pcbdata():
        """Uncompressed payload of the configured board."""
        return generator().pcbdata()

    @app.post("/api/generate", response_class=HTMLResponse)
    async def generate(request: BomRequest):
        """Generate a page from a JSON document."""
        return HTMLResponse(request.to_bom().generate())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=DEFAULT_HOST, port=DEFAULT_PORT)
