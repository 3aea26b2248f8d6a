"""Encoder producing current-version save codes from decoded gardens."""

from __future__ import annotations

from urllib.parse import urlencode

from .code_tables import CROP_TABLE, FERTILIZER_TABLE, NONE_CODE
from .const import (
    CROPS_PREFIX,
    CURRENT_VERSION,
    LAYOUT_QUERY_PARAM,
    PLANNER_URL,
    PLOTS_PREFIX,
    ROW_SEPARATOR,
    SAVE_CODE_SEPARATOR,
    SUFFIX_SEPARATOR,
)
from .models import GridTile, ParsedGardenData


def _encode_tile(tile: GridTile) -> str:
    """Encode a tile's crop, with its fertilizer as a ``.`` suffix."""
    if not tile.is_active:
        return NONE_CODE
    code = CROP_TABLE.encode(tile.crop_type) if tile.crop_type else NONE_CODE
    if tile.fertilizer_type:
        code += SUFFIX_SEPARATOR + FERTILIZER_TABLE.encode(tile.fertilizer_type)
    return code


def _encode_rows(tiles: list[list[GridTile]]) -> str:
    """Encode every tile as ``-``-separated code rows.

    Each row stops after its last non-empty tile and trailing empty rows
    are dropped, so the output is the shortest code that decodes back to
    the same grid.
    """
    rows: list[str] = []
    for tile_row in tiles:
        codes = [_encode_tile(tile) for tile in tile_row]
        while codes and codes[-1] == NONE_CODE:
            codes.pop()
        rows.append("".join(codes))
    while rows and not rows[-1]:
        rows.pop()
    return ROW_SEPARATOR.join(rows)


def encode_plot_mask(active_plots: list[list[bool]]) -> str:
    """Encode a plot activity matrix as the ``D-`` section."""
    return PLOTS_PREFIX + ROW_SEPARATOR.join(
        "".join("1" if active else "0" for active in row) for row in active_plots
    )


def encode(data: ParsedGardenData) -> str:
    """Encode a garden as a current-version save code.

    Fertilizers are written inline after their crop (``T.S``) and the
    planner settings, when present, are appended unchanged.

    Raises:
        UnknownCropError: If a tile holds a crop with no code.
        UnknownCodeError: If a tile holds a fertilizer with no code.
    """
    sections = [
        CURRENT_VERSION,
        encode_plot_mask(data.active_plots),
        CROPS_PREFIX + _encode_rows(data.tiles),
    ]
    if data.settings:
        sections.append(data.settings)
    return SAVE_CODE_SEPARATOR.join(sections)


def build_planner_url(code: str) -> str:
    """Return a garden planner link that opens the given save code."""
    return f"{PLANNER_URL}?{urlencode({LAYOUT_QUERY_PARAM: code})}"
