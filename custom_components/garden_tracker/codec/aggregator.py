"""Aggregation of a decoded tile grid into crop and watering statistics."""

from __future__ import annotations

from .code_tables import crop_size
from .const import PLOT_SIZE
from .models import (
    CropBreakdown,
    CropSummary,
    Dimensions,
    GridTile,
    LayoutMetadata,
    ParsedGardenData,
)

DOMINANT_CROP_COUNT = 3


def watering_percentage(needing_water: int, total: int) -> float:
    """Return the share of plants needing water, in percent to 2 decimals."""
    if total <= 0:
        return 0
    return round(needing_water / total * 100, 2)


def generate_crop_summary(tiles: list[list[GridTile]]) -> CropSummary:
    """Summarize crops and watering state of a tile grid.

    Counts are per tile: a Blueberry bush covering four tiles counts four
    towards ``total`` and ``total_plants``. The whole-plant estimate is kept
    separately in each breakdown's ``plants``.
    """
    breakdown: dict[str, CropBreakdown] = {}
    for row in tiles:
        for tile in row:
            if not tile.is_active or not tile.crop_type:
                continue
            entry = breakdown.get(tile.crop_type)
            if entry is None:
                size, tiles_per_plant = crop_size(tile.crop_type)
                entry = breakdown[tile.crop_type] = CropBreakdown(
                    size=size, tiles_per_plant=tiles_per_plant
                )
            entry.total += 1
            if tile.needs_water:
                entry.needing_water += 1

    for entry in breakdown.values():
        entry.plants = entry.total // entry.tiles_per_plant

    total = sum(entry.total for entry in breakdown.values())
    needing = sum(entry.needing_water for entry in breakdown.values())
    return CropSummary(
        total_plants=total,
        plants_needing_water=needing,
        watering_percentage=watering_percentage(needing, total),
        crop_breakdown=breakdown,
    )


def dimensions_of(tiles: list[list[GridTile]]) -> Dimensions:
    """Return the tile dimensions of a grid."""
    return Dimensions(rows=len(tiles), columns=len(tiles[0]) if tiles else 0)


def summarize_layout(data: ParsedGardenData) -> LayoutMetadata:
    """Build descriptive metadata for a decoded garden.

    Dominant crops are the most planted crops by tile count, ties broken
    by name.
    """
    plot_count = sum(flag for row in data.active_plots for flag in row)
    ranked = sorted(
        data.crop_summary.crop_breakdown.items(),
        key=lambda item: (-item[1].total, item[0]),
    )
    dominant = [name for name, _ in ranked[:DOMINANT_CROP_COUNT]]

    rows, columns = data.dimensions.rows, data.dimensions.columns
    plant_count = data.crop_summary.total_plants
    if dominant:
        crops_text = ", ".join(dominant)
        description = (
            f"{rows}×{columns} garden with {plot_count} active plots, "
            f"{plant_count} plants ({crops_text})"
        )
    else:
        description = f"{rows}×{columns} garden with {plot_count} active plots, no plants"

    return LayoutMetadata(
        plot_count=plot_count,
        plant_count=plant_count,
        dominant_crops=dominant,
        dimensions=Dimensions(rows=rows, columns=columns),
        description=description,
    )


def plot_tiles(
    data: ParsedGardenData, plot_row: int, plot_col: int
) -> list[list[GridTile]]:
    """Return the 3x3 tile block of one plot."""
    return [
        row[plot_col * PLOT_SIZE : (plot_col + 1) * PLOT_SIZE]
        for row in data.tiles[plot_row * PLOT_SIZE : (plot_row + 1) * PLOT_SIZE]
    ]
