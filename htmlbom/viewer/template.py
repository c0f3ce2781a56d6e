"""Access to the bundled viewer assets and placeholder substitution."""
from functools import lru_cache
from typing import Mapping

from htmlbom.config import WEB_DIR

TEMPLATE_FILE = "ibom.html"
VERSION_FILE = "version.txt"

# Placeholders filled with a bundled asset, verbatim
ASSET_PLACEHOLDERS = {
    "///CSS///": "ibom.css",
    "///SPLITJS///": "split.js",
    "///LZ-STRING///": "lz-string.js",
    "///POINTER_EVENTS_POLYFILL///": "pep.js",
    "///UTILJS///": "util.js",
    "///RENDERJS///": "render.js",
    "///TABLEUTILJS///": "table-util.js",
    "///IBOMJS///": "ibom.js",
}

# Placeholders filled per document
CONFIG_PLACEHOLDER = "///CONFIG///"
PCBDATA_PLACEHOLDER = "///PCBDATA///"
USER_CSS_PLACEHOLDER = "///USERCSS///"
USER_JS_PLACEHOLDER = "///USERJS///"
USER_HEADER_PLACEHOLDER = "///USERHEADER///"
USER_FOOTER_PLACEHOLDER = "///USERFOOTER///"


@lru_cache(maxsize=None)
def load_asset(name: str) -> str:
    """Read a bundled web asset (undecodable bytes are replaced)."""
    return (WEB_DIR / name).read_bytes().decode("utf-8", errors="replace")


def viewer_version() -> str:
    """
    Version of the bundled viewer, stored in every payload.

    The trailing newline of version.txt is stripped, so ibom_version holds the
    bare tag (e.g. "v2.9.0") rather than the raw file content.
    """
    return load_asset(VERSION_FILE).strip()


def asset_tokens() -> dict[str, str]:
    """Placeholder -> content mapping for all bundled assets."""
    return {token: load_asset(name) for token, name in ASSET_PLACEHOLDERS.items()}


def render_template(tokens: Mapping[str, str], template: str | None = None) -> str:
    """
    Replace placeholders in the viewer template.

    Values are inserted literally without any escaping. Tokens missing from
    the template are ignored.

    Args:
        tokens: Placeholder -> replacement text
        template: Template text, or None for the bundled ibom.html

    Returns:
        Rendered document
    """
    html = load_asset(TEMPLATE_FILE) if template is None else template
    for token, value in tokens.items():
        html = html.replace(token, value)
    return html
