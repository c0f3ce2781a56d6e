"""HTML document generator for the interactive BOM."""
import logging
from typing import Any, Optional

from htmlbom.pcb.document import BomDocument

from .packer import Compressor, dump_json, lz_compress, pack_config, pack_pcbdata
from .serialize import ViewerConfig, build_config, build_pcbdata
from .template import (
    CONFIG_PLACEHOLDER, PCBDATA_PLACEHOLDER, USER_CSS_PLACEHOLDER,
    USER_FOOTER_PLACEHOLDER, USER_HEADER_PLACEHOLDER, USER_JS_PLACEHOLDER,
    asset_tokens, render_template, viewer_version,
)
from .validate import validate

logger = logging.getLogger(__name__)


class HtmlBomGenerator:
    """Generate the interactive BOM page for a document."""

    def __init__(
        self,
        document: BomDocument,
        compress: Optional[Compressor] = None,
        template: Optional[str] = None,
    ):
        """
        Initialize with a frozen document.

        Args:
            document: Document to render
            compress: Compressor for the payload (default: LZ-String base64)
            template: Template text (default: bundled ibom.html)
        """
        self.document = document
        self.compress = compress or lz_compress
        self.template = template

    def config(self) -> ViewerConfig:
        """Viewer settings. Does not validate the document."""
        return build_config(self.document)

    def pcbdata(self) -> dict[str, Any]:
        """Validated payload document."""
        validate(self.document)
        return build_pcbdata(self.document, viewer_version())

    def generate(self) -> str:
        """
        Generate the HTML document.

        Returns:
            HTML page with all assets and data embedded

        Raises:
            InvalidReferenceError: A BOM row references an unknown footprint
            FieldCountMismatchError: A footprint has the wrong number of fields
        """
        doc = self.document
        logger.debug(
            f"Generating BOM for '{doc.title}': {len(doc.footprints)} footprints, "
            f"{len(doc.drawings)} drawings, {len(doc.tracks)} tracks, "
            f"{len(doc.vias)} vias, {len(doc.zones)} zones"
        )

        pcbdata_json = dump_json(self.pcbdata())
        config_json = self.config().model_dump_json()
        logger.debug(f"Payload is {len(pcbdata_json)} characters before compression")

        tokens = asset_tokens()
        tokens.update({
            CONFIG_PLACEHOLDER: pack_config(config_json),
            PCBDATA_PLACEHOLDER: pack_pcbdata(pcbdata_json, self.compress),
            USER_CSS_PLACEHOLDER: "",  # No user stylesheet
            USER_JS_PLACEHOLDER: doc.user_js,
            USER_HEADER_PLACEHOLDER: doc.user_header,
            USER_FOOTER_PLACEHOLDER: doc.user_footer,
        })
        html = render_template(tokens, self.template)
        logger.info(f"Generated HTML BOM '{doc.title}' ({len(html)} characters)")
        return html
