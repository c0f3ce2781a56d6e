"""Configuration constants for htmlbom."""
import os
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# Bundled viewer assets (template, scripts, styles, version.txt)
WEB_DIR = Path(__file__).parent / "web"

# Board served by the HTTP app
DEFAULT_PCB_FILE = Path(os.environ.get("HTMLBOM_PCB_FILE", PROJECT_ROOT / "board.kicad_pcb"))

# Server settings
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = int(os.environ.get("HTMLBOM_PORT", "8000"))

# Document defaults
DEFAULT_CHECKBOXES = ["Sourced", "Placed"]

# Field columns filled in by the KiCad importer
DEFAULT_IMPORT_FIELDS = ("Value", "Footprint")

# JavaScript variables read by ibom.js
CONFIG_VARIABLE = "config"
PCBDATA_VARIABLE = "pcbdata"
