"""Turn serialized documents into the JavaScript statements embedded in the page."""
import json
from typing import Any, Callable

from lzstring import LZString

from htmlbom.config import CONFIG_VARIABLE, PCBDATA_VARIABLE

Compressor = Callable[[str], str]


def lz_compress(text: str) -> str:
    """Compress text the way LZString.decompressFromBase64 expects it."""
    return LZString().compressToBase64(text)


def dump_json(data: Any) -> str:
    """
    Compact JSON text as embedded in the page.

    Output is ASCII only: characters outside the BMP become surrogate pair
    escapes, since LZ-String compresses UTF-16 code units.
    """
    return json.dumps(data, separators=(",", ":"))


def pack_config(config_json: str) -> str:
    """Wrap the config document as `var config = {...}`."""
    return f"var {CONFIG_VARIABLE} = {config_json}"


def pack_pcbdata(pcbdata_json: str, compressor: Compressor = lz_compress) -> str:
    """
    Wrap the compressed payload as a `var pcbdata = ...` statement.

    Args:
        pcbdata_json: Serialized payload document
        compressor: Function producing the base64 LZ-String text

    Returns:
        JavaScript assignment decompressing the payload at page load
    """
    compressed = compressor(pcbdata_json)
    return (
        f"var {PCBDATA_VARIABLE} = "
        f'JSON.parse(LZString.decompressFromBase64("{compressed}"))'
    )
