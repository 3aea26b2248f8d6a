"""Entry point turning a planner URL or bare save code into a garden."""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from .const import LAYOUT_QUERY_PARAM
from .decoder import decode
from .exceptions import MalformedSaveCodeError
from .models import ParsedGardenData
from .version_converter import detect_and_convert

_LOGGER = logging.getLogger(__name__)


def is_url(raw: str) -> bool:
    """Return True if the input looks like an http(s) URL."""
    return raw.strip().lower().startswith(("http://", "https://"))


def extract_save_code(raw: str) -> str:
    """Return the save code held by a planner URL, or the input itself.

    Raises:
        MalformedSaveCodeError: If the input is empty, or is a URL without
            a ``layout`` query parameter.
    """
    if not raw or not raw.strip():
        raise MalformedSaveCodeError("save code is empty")
    raw = raw.strip()
    if not is_url(raw):
        return raw

    query = parse_qs(urlparse(raw).query)
    values = query.get(LAYOUT_QUERY_PARAM)
    if not values or not values[0].strip():
        raise MalformedSaveCodeError(
            f"URL has no '{LAYOUT_QUERY_PARAM}' parameter", section="url"
        )
    _LOGGER.debug("Extracted save code from URL: %s", values[0])
    return values[0].strip()


def parse(raw: str) -> ParsedGardenData:
    """Parse a planner URL or bare save code of any supported version.

    Raises:
        UnsupportedVersionError: If the version tag is missing or unsupported.
        ConversionError: If a legacy code cannot be upgraded.
        MalformedSaveCodeError: If the code is structurally invalid.
    """
    conversion = detect_and_convert(extract_save_code(raw))
    data = decode(conversion.code)
    data.original_version = conversion.original_version
    return data
