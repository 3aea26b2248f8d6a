"""Tests for crop summaries and layout metadata."""

from custom_components.garden_tracker.codec.aggregator import (
    dimensions_of,
    generate_crop_summary,
    plot_tiles,
    summarize_layout,
    watering_percentage,
)
from custom_components.garden_tracker.codec.decoder import decode
from custom_components.garden_tracker.codec.models import GridTile


def test_watering_percentage():
    """Percentages are rounded and zero for an empty garden."""
    assert watering_percentage(0, 0) == 0
    assert watering_percentage(1, 3) == 33.33
    assert watering_percentage(4, 4) == 100


def test_summary_counts_active_planted_tiles():
    """Inactive and empty tiles are not counted."""
    tiles = [
        [
            GridTile(0, 0, "Tomato", is_active=True, needs_water=True),
            GridTile(0, 1, "Tomato", is_active=True, needs_water=False),
            GridTile(0, 2, "Tomato", is_active=False),
        ],
        [
            GridTile(1, 0, None, is_active=True),
            GridTile(1, 1, "Rice", is_active=True, needs_water=True),
            GridTile(1, 2),
        ],
    ]
    summary = generate_crop_summary(tiles)

    assert summary.total_plants == 3
    assert summary.plants_needing_water == 2
    assert summary.watering_percentage == 66.67
    assert summary.crop_breakdown["Tomato"].total == 2
    assert summary.crop_breakdown["Tomato"].needing_water == 1
    assert summary.plants_needing_water <= summary.total_plants


def test_summary_counts_tiles_not_plants_for_large_crops():
    """A tree or bush counts once per tile; whole plants are reported apart."""
    data = decode("v0.4_D-11_CR-AAABB-AAABB-AAA")
    summary = data.crop_summary

    apple = summary.crop_breakdown["Apple"]
    assert apple.total == 9
    assert apple.size == "tree"
    assert apple.tiles_per_plant == 9
    assert apple.plants == 1

    blueberry = summary.crop_breakdown["Blueberry"]
    assert blueberry.total == 4
    assert blueberry.size == "bush"
    assert blueberry.tiles_per_plant == 4
    assert blueberry.plants == 1

    assert summary.total_plants == 13


def test_summary_of_empty_grid():
    """An empty grid has no plants."""
    summary = generate_crop_summary([])
    assert summary.total_plants == 0
    assert summary.watering_percentage == 0
    assert summary.crop_breakdown == {}


def test_dimensions_of():
    """Dimensions follow the tile grid."""
    assert dimensions_of([]).rows == 0
    dims = dimensions_of(decode("v0.4_D-11_CR-").tiles)
    assert (dims.rows, dims.columns) == (3, 6)


def test_summarize_layout():
    """Metadata ranks the most planted crops first."""
    metadata = summarize_layout(decode("v0.4_D-111-111-111_CR-TRTPWPTRT-TRT-PWP"))

    assert metadata.plot_count == 9
    assert metadata.plant_count == 15
    assert metadata.dominant_crops == ["Tomato", "Potato", "Rice"]
    assert metadata.description == (
        "9×9 garden with 9 active plots, 15 plants (Tomato, Potato, Rice)"
    )


def test_summarize_layout_breaks_ties_by_name():
    """Crops planted equally often are ordered by name."""
    metadata = summarize_layout(decode("v0.4_D-1_CR-TPR"))
    assert metadata.dominant_crops == ["Potato", "Rice", "Tomato"]


def test_summarize_empty_layout():
    """A garden without plants says so."""
    metadata = summarize_layout(decode("v0.4_D-000-000-000_CR-"))
    assert metadata.plot_count == 0
    assert metadata.dominant_crops == []
    assert metadata.description == "9×9 garden with 0 active plots, no plants"


def test_plot_tiles():
    """A plot is the 3x3 block at its position."""
    data = decode("v0.4_D-11_CR-TTTPPP")
    block = plot_tiles(data, 0, 1)
    assert len(block) == 3
    assert [tile.col for tile in block[0]] == [3, 4, 5]
    assert [tile.crop_type for tile in block[0]] == ["Potato"] * 3
