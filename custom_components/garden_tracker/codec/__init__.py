"""Garden save-code codec.

Pure functions to upgrade, decode, summarize and encode garden planner save
codes. Nothing in this package touches Home Assistant or performs I/O, and
it imports nothing from the rest of the integration.
"""

from .aggregator import generate_crop_summary, summarize_layout
from .code_tables import CROP_TABLE, FERTILIZER_TABLE, CodeTable
from .decoder import decode
from .encoder import build_planner_url, encode
from .exceptions import (
    ConversionError,
    MalformedSaveCodeError,
    SaveCodeError,
    UnknownCodeError,
    UnknownCropError,
    UnsupportedVersionError,
)
from .parser import extract_save_code, parse
from .version_converter import UPGRADE_STEPS, detect_and_convert, detect_version

__all__ = [
    "CROP_TABLE",
    "FERTILIZER_TABLE",
    "UPGRADE_STEPS",
    "CodeTable",
    "ConversionError",
    "MalformedSaveCodeError",
    "SaveCodeError",
    "UnknownCodeError",
    "UnknownCropError",
    "UnsupportedVersionError",
    "build_planner_url",
    "decode",
    "detect_and_convert",
    "detect_version",
    "encode",
    "extract_save_code",
    "generate_crop_summary",
    "parse",
    "summarize_layout",
]
