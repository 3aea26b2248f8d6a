"""Validation logic for Garden Tracker."""

from __future__ import annotations

from .codec.models import ParsedGardenData


class GardenValidator:
    """Validates layout and watering operations."""

    def __init__(self, coordinator) -> None:
        """Initialize the GardenValidator.

        Args:
            coordinator: The GardenCoordinator instance.
        """
        self.coordinator = coordinator

    def validate_layout_exists(self, layout_id: str) -> None:
        """Validate that a layout exists in the coordinator."""
        if layout_id not in self.coordinator.layouts:
            raise ValueError(f"Layout {layout_id} does not exist")

    def validate_tile_bounds(self, garden: ParsedGardenData, row: int, col: int) -> None:
        """Validate that a tile position is within the garden grid."""
        max_rows = garden.dimensions.rows
        max_cols = garden.dimensions.columns

        if row < 0 or row >= max_rows:
            raise ValueError(f"Row {row} is outside garden bounds (0-{max_rows - 1})")
        if col < 0 or col >= max_cols:
            raise ValueError(f"Column {col} is outside garden bounds (0-{max_cols - 1})")

    def validate_tile_planted(self, garden: ParsedGardenData, row: int, col: int) -> None:
        """Validate that a tile lies in an active plot and holds a crop."""
        self.validate_tile_bounds(garden, row, col)
        tile = garden.tiles[row][col]
        if not tile.is_active:
            raise ValueError(f"Tile ({row},{col}) is not in an active plot")
        if not tile.crop_type:
            raise ValueError(f"Tile ({row},{col}) has no crop planted")

    def validate_crop_planted(self, garden: ParsedGardenData, crop: str) -> None:
        """Validate that the garden contains at least one tile of a crop."""
        if crop not in garden.crop_summary.crop_breakdown:
            planted = ", ".join(sorted(garden.crop_summary.crop_breakdown)) or "none"
            raise ValueError(f"Crop {crop} is not planted (planted: {planted})")
