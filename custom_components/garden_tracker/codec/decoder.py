"""Decoder for current-version garden save codes.

A current save code has three to five ``_``-separated sections::

    v0.4_D-111-111-111_CR-T.STT-PPP-RRR_FE-SSS_D0

``D-`` holds up to three rows of plot flags (``1`` active). Every plot
expands to a 3x3 block of tiles. ``CR-`` holds one row of crop codes per
tile row; each crop code may carry its tile's fertilizer as a ``.`` suffix.
Rows may stop early: tiles past the end of a row are empty.

After the crops, an optional ``FE-`` section holds fertilizer codes in the
same shape as the crops; inline suffixes take precedence over it. Any
other trailing section is planner settings, kept verbatim.
"""

from __future__ import annotations

import logging

from .aggregator import dimensions_of, generate_crop_summary
from .code_tables import CROP_TABLE, FERTILIZER_TABLE, NONE_NAME, CodeTable
from .const import (
    CROPS_PREFIX,
    CURRENT_VERSION,
    FERTILIZER_PREFIX,
    MAX_PLOT_COLUMNS,
    MAX_PLOT_ROWS,
    MAX_TILE_ROWS,
    PLOT_SIZE,
    PLOTS_PREFIX,
    ROW_SEPARATOR,
    SAVE_CODE_SEPARATOR,
)
from .exceptions import MalformedSaveCodeError, UnknownCodeError
from .models import GridTile, ParsedGardenData

_LOGGER = logging.getLogger(__name__)

Cell = tuple[str | None, str | None]


def _strip_prefix(section: str, prefix: str, name: str) -> str:
    if not section.startswith(prefix):
        raise MalformedSaveCodeError(
            f"expected '{prefix}' prefix, found '{section[:10]}'", section=name
        )
    return section[len(prefix) :]


def parse_plot_mask(section: str) -> list[list[bool]]:
    """Parse the ``D-`` section into a plot activity matrix.

    Rows shorter than the widest row are padded with inactive plots.
    """
    body = _strip_prefix(section, PLOTS_PREFIX, "plots")
    rows = body.split(ROW_SEPARATOR) if body else []

    if len(rows) > MAX_PLOT_ROWS:
        raise MalformedSaveCodeError(
            f"{len(rows)} plot rows exceed the maximum of {MAX_PLOT_ROWS}",
            section="plots",
        )
    width = max((len(row) for row in rows), default=0)
    if width > MAX_PLOT_COLUMNS:
        raise MalformedSaveCodeError(
            f"{width} plot columns exceed the maximum of {MAX_PLOT_COLUMNS}",
            section="plots",
        )

    return [
        [col < len(row) and row[col] == "1" for col in range(width)] for row in rows
    ]


def expand_plot_mask(active_plots: list[list[bool]]) -> list[list[bool]]:
    """Expand a plot matrix into the tile-level activity mask."""
    return [
        [plot_row[col // PLOT_SIZE] for col in range(len(plot_row) * PLOT_SIZE)]
        for plot_row in active_plots
        for _ in range(PLOT_SIZE)
    ]




def _name(table: CodeTable | None, code: str | None) -> str | None:
    if table is None or code is None:
        return None
    name = table.decode(code)
    return None if name == NONE_NAME else name


def _decode_rows(
    body: str,
    table: CodeTable,
    section: str,
    rows: int,
    columns: int,
    suffix_table: CodeTable | None = None,
) -> list[list[Cell]]:
    """Decode ``-``-separated code rows into a rows x columns grid.

    Each cell is a (name, suffix name) pair. Suffixes are only read when
    ``suffix_table`` is given; otherwise a ``.`` in a row is an unknown code.
    """
    grid: list[list[Cell]] = [[(None, None)] * columns for _ in range(rows)]
    if not body:
        return grid

    code_rows = body.split(ROW_SEPARATOR)
    if len(code_rows) > min(rows, MAX_TILE_ROWS):
        raise MalformedSaveCodeError(
            f"{len(code_rows)} rows given for a grid of {rows} tile rows",
            section=section,
        )

    for r, run in enumerate(code_rows):
        try:
            if suffix_table is None:
                cells = [(code, None) for code in table.scan(run)]
            else:
                cells = table.scan_tiles(run, suffix_table)
        except UnknownCodeError as err:
            raise MalformedSaveCodeError(f"row {r}: {err}", section=section) from err
        if len(cells) > columns:
            raise MalformedSaveCodeError(
                f"row {r} has {len(cells)} tiles, grid has {columns} columns",
                section=section,
            )
        for c, (code, suffix) in enumerate(cells):
            grid[r][c] = (_name(table, code), _name(suffix_table, suffix))
    return grid


def _split_trailing(sections: list[str]) -> tuple[str | None, str | None]:
    """Return the (fertilizer, settings) sections following the crops."""
    rest = list(sections)
    fertilizer_section = None
    if rest and rest[0].startswith(FERTILIZER_PREFIX):
        fertilizer_section = rest.pop(0)
    if len(rest) > 1:
        raise MalformedSaveCodeError(
            f"expected at most one settings section, found {len(rest)}",
            section="settings",
        )
    settings = rest[0] if rest and rest[0] else None
    return fertilizer_section, settings


def decode(code: str) -> ParsedGardenData:
    """Decode a current-version save code into a garden grid.

    Every active tile with a crop starts with ``needs_water=True``: a freshly
    imported garden is assumed unwatered.

    Raises:
        MalformedSaveCodeError: On any structural problem, naming the section.
    """
    if not code or not code.strip():
        raise MalformedSaveCodeError("save code is empty")
    code = code.strip()

    sections = code.split(SAVE_CODE_SEPARATOR)
    if len(sections) < 3:
        raise MalformedSaveCodeError(
            f"expected at least 3 sections, found {len(sections)}"
        )

    version, plot_section, crop_section = sections[:3]
    if version != CURRENT_VERSION:
        raise MalformedSaveCodeError(
            f"expected {CURRENT_VERSION}, found '{version}'", section="version"
        )
    fertilizer_section, settings = _split_trailing(sections[3:])

    active_plots = parse_plot_mask(plot_section)
    mask = expand_plot_mask(active_plots)
    rows = len(mask)
    columns = len(mask[0]) if rows else 0

    crops = _decode_rows(
        _strip_prefix(crop_section, CROPS_PREFIX, "crops"),
        CROP_TABLE,
        "crops",
        rows,
        columns,
        suffix_table=FERTILIZER_TABLE,
    )
    if fertilizer_section is None:
        fertilizers = [[(None, None)] * columns for _ in range(rows)]
    else:
        fertilizers = _decode_rows(
            fertilizer_section[len(FERTILIZER_PREFIX) :],
            FERTILIZER_TABLE,
            "fertilizers",
            rows,
            columns,
        )

    tiles: list[list[GridTile]] = []
    for r in range(rows):
        tile_row = []
        for c in range(columns):
            crop, inline_fertilizer = crops[r][c]
            fertilizer = inline_fertilizer or fertilizers[r][c][0]
            if not mask[r][c]:
                if crop or fertilizer:
                    _LOGGER.debug("Ignoring codes on inactive tile (%d, %d)", r, c)
                tile_row.append(GridTile(row=r, col=c))
                continue
            tile_row.append(
                GridTile(
                    row=r,
                    col=c,
                    crop_type=crop,
                    fertilizer_type=fertilizer,
                    is_active=True,
                    needs_water=crop is not None,
                )
            )
        tiles.append(tile_row)

    dimensions = dimensions_of(tiles)
    summary = generate_crop_summary(tiles)
    _LOGGER.debug(
        "Decoded %dx%d garden with %d planted tiles",
        dimensions.rows,
        dimensions.columns,
        summary.total_plants,
    )
    return ParsedGardenData(
        dimensions=dimensions,
        tiles=tiles,
        active_plots=active_plots,
        crop_summary=summary,
        version=version,
        save_code=code,
        settings=settings,
    )
