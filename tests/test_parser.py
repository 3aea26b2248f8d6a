"""Tests for parsing planner URLs and save codes."""

import pytest

from custom_components.garden_tracker.codec.exceptions import (
    MalformedSaveCodeError,
    UnsupportedVersionError,
)
from custom_components.garden_tracker.codec.parser import (
    extract_save_code,
    is_url,
    parse,
)

CODE = "v0.4_D-111-111-111_CR-TTT-PPP-RRR"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://palia-garden-planner.vercel.app/", True),
        ("HTTP://example.com", True),
        ("  https://example.com/?layout=x", True),
        ("v0.4_D-1_CR-T", False),
        ("ftp://example.com", False),
    ],
)
def test_is_url(raw, expected):
    """Only http and https inputs are URLs."""
    assert is_url(raw) is expected


def test_extract_save_code_from_url():
    """The layout query parameter holds the code."""
    url = f"https://palia-garden-planner.vercel.app/?layout={CODE}"
    assert extract_save_code(url) == CODE


def test_extract_save_code_url_encoded():
    """Percent-encoded codes are unquoted."""
    url = "https://example.com/planner?foo=1&layout=v0.4_D-1_CR-T%2DP"
    assert extract_save_code(url) == "v0.4_D-1_CR-T-P"


def test_extract_save_code_passes_bare_codes():
    """A bare code is returned stripped."""
    assert extract_save_code(f"  {CODE}\n") == CODE


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_extract_save_code_empty(raw):
    """Empty input is rejected."""
    with pytest.raises(MalformedSaveCodeError):
        extract_save_code(raw)


@pytest.mark.parametrize(
    "url",
    [
        "https://palia-garden-planner.vercel.app/",
        "https://palia-garden-planner.vercel.app/?other=1",
        "https://palia-garden-planner.vercel.app/?layout=",
    ],
)
def test_extract_save_code_url_without_layout(url):
    """A URL without a layout parameter is rejected."""
    with pytest.raises(MalformedSaveCodeError) as excinfo:
        extract_save_code(url)
    assert excinfo.value.section == "url"


def test_parse_url_and_code_agree():
    """A URL and its bare code decode to the same garden."""
    from_url = parse(f"https://palia-garden-planner.vercel.app/?layout={CODE}")
    from_code = parse(CODE)
    assert from_url == from_code
    assert from_url.crop_summary.total_plants == 9


def test_parse_records_original_version():
    """Legacy codes are upgraded and keep their version tag."""
    data = parse("v0.3_D-1_CR-TTT")
    assert data.original_version == "v0.3"
    assert data.version == "v0.4"
    assert data.save_code == "v0.4_D-1_CR-TTT"

    assert parse(CODE).original_version == "v0.4"


@pytest.mark.parametrize(
    "raw", ["v0.4_D-1_CR-T.SPP", "v0.3_D-1_CR-T.SPP", "v0.2_D-1_CROPS-T.SPP"]
)
def test_parse_inline_fertilizers(raw):
    """Inline fertilizers are read from current and legacy codes."""
    data = parse(raw)
    assert data.save_code == "v0.4_D-1_CR-T.SPP"
    assert data.tiles[0][0].crop_type == "Tomato"
    assert data.tiles[0][0].fertilizer_type == "Speedy Gro"
    assert data.tiles[0][1].fertilizer_type is None


def test_parse_keeps_settings():
    """A settings section is carried through parsing."""
    data = parse("v0.4_D-1_CR-TTT_D0")
    assert data.settings == "D0"
    assert data.crop_summary.total_plants == 3


def test_parse_rejects_unknown_version():
    """Codes without a supported version tag are rejected."""
    with pytest.raises(UnsupportedVersionError):
        parse("D-1_CR-T")


def test_parse_v01_code_matches_current():
    """A v0.1 code decodes to the same garden as its current form."""
    legacy = parse("v0.1_D-111-111-111_CROPS-ToToTo-PoPoPo-RiRiRi")
    assert legacy.save_code == CODE
    assert legacy == parse(CODE)
