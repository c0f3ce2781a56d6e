"""BOM document: a mutable draft and the frozen snapshot used for generation."""
from dataclasses import dataclass
from typing import Callable, Optional

from htmlbom.config import DEFAULT_CHECKBOXES

from .models import BomRow, Drawing, Footprint, Point, RefMap, Track, Via, Zone


@dataclass(frozen=True)
class BomDocument:
    """Immutable view of an HtmlBom, consumed by the generator."""
    title: str
    company: str
    revision: str
    date: str
    bottom_left: Point
    top_right: Point
    dark_mode: bool = False
    show_silkscreen: bool = True
    show_fabrication: bool = True
    show_pads: bool = True
    checkboxes: tuple[str, ...] = tuple(DEFAULT_CHECKBOXES)
    fields: tuple[str, ...] = ()
    user_header: str = ""
    user_footer: str = ""
    user_js: str = ""
    drawings: tuple[Drawing, ...] = ()
    tracks: tuple[Track, ...] = ()
    vias: tuple[Via, ...] = ()
    zones: tuple[Zone, ...] = ()
    footprints: tuple[Footprint, ...] = ()
    bom_front: tuple[BomRow, ...] = ()
    bom_back: tuple[BomRow, ...] = ()
    bom_both: tuple[BomRow, ...] = ()

    def bom_rows(self) -> dict[str, tuple[BomRow, ...]]:
        """BOM row collections keyed by their viewer name."""
        return {"F": self.bom_front, "B": self.bom_back, "both": self.bom_both}


class HtmlBom:
    """
    Top-level builder for an interactive HTML BOM.

    Configuration and content are plain public attributes; append to the
    lists directly and call generate() once done. Only footprint IDs in BOM
    rows and the number of fields per footprint are validated, and only at
    generation time.

    Example:
        bom = HtmlBom("My Project", "My Company", "Rev. 1", "1970-01-01",
                      (0.0, 0.0), (100.0, 80.0))
        bom.fields = ["Value", "Footprint"]
        fid = bom.add_footprint(Footprint(...))
        bom.bom_front.append([RefMap("R1", fid)])
        html = bom.generate()
    """

    def __init__(
        self,
        title: str,
        company: str,
        revision: str,
        date: str,
        bottom_left: Point,
        top_right: Point,
    ):
        # Metadata
        self.title = title
        self.company = company
        self.revision = revision
        self.date = date
        self.bottom_left = bottom_left
        self.top_right = top_right

        # Viewer settings
        self.dark_mode = False
        self.show_silkscreen = True
        self.show_fabrication = True
        self.show_pads = True
        self.checkboxes: list[str] = list(DEFAULT_CHECKBOXES)
        self.fields: list[str] = []

        # Raw HTML/JS inserted into the page without escaping
        self.user_header = ""
        self.user_footer = ""
        self.user_js = ""

        # Content
        self.drawings: list[Drawing] = []
        self.tracks: list[Track] = []
        self.vias: list[Via] = []
        self.zones: list[Zone] = []
        self.footprints: list[Footprint] = []
        self.bom_front: list[list[RefMap]] = []
        self.bom_back: list[list[RefMap]] = []
        self.bom_both: list[list[RefMap]] = []

    def add_footprint(self, footprint: Footprint) -> int:
        """
        Add a footprint.

        Returns:
            ID of the added footprint, used to reference it in BOM rows
        """
        self.footprints.append(footprint)
        return len(self.footprints) - 1

    append_footprint = add_footprint

    def freeze(self) -> BomDocument:
        """Snapshot the current state into an immutable BomDocument."""
        return BomDocument(
            title=self.title,
            company=self.company,
            revision=self.revision,
            date=self.date,
            bottom_left=tuple(self.bottom_left),
            top_right=tuple(self.top_right),
            dark_mode=self.dark_mode,
            show_silkscreen=self.show_silkscreen,
            show_fabrication=self.show_fabrication,
            show_pads=self.show_pads,
            checkboxes=tuple(self.checkboxes),
            fields=tuple(self.fields),
            user_header=self.user_header,
            user_footer=self.user_footer,
            user_js=self.user_js,
            drawings=tuple(self.drawings),
            tracks=tuple(self.tracks),
            vias=tuple(self.vias),
            zones=tuple(self.zones),
            footprints=tuple(self.footprints),
            bom_front=tuple(tuple(row) for row in self.bom_front),
            bom_back=tuple(tuple(row) for row in self.bom_back),
            bom_both=tuple(tuple(row) for row in self.bom_both),
        )

    def generate(
        self,
        compress: Optional[Callable[[str], str]] = None,
        template: Optional[str] = None,
    ) -> str:
        """
        Generate the HTML page.

        Args:
            compress: Replacement for the LZ-String compressor (tests)
            template: Replacement for the bundled ibom.html template

        Returns:
            Complete, self-contained HTML document

        Raises:
            InvalidReferenceError: A BOM row references an unknown footprint
            FieldCountMismatchError: A footprint has the wrong number of fields
        """
        from htmlbom.viewer.generator import HtmlBomGenerator

        generator = HtmlBomGenerator(self.freeze(), compress=compress, template=template)
        return generator.generate()
