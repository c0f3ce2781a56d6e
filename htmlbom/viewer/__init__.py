from .generator import HtmlBomGenerator
from .serialize import ViewerConfig, build_config, build_pcbdata, to_json
from .template import render_template
from .validate import validate

__all__ = [
    "HtmlBomGenerator", "ViewerConfig", "build_config", "build_pcbdata",
    "to_json", "render_template", "validate",
]
