"""Models of a decoded garden layout.

These dataclasses represent a garden as the codec sees it: the tile grid,
the plot activity mask and the aggregated crop summary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class GridTile:
    """Represents a single planting tile of the garden grid.

    Attributes:
        row: The 0-based tile row.
        col: The 0-based tile column.
        crop_type: The crop name planted on the tile, or None when empty.
        fertilizer_type: The fertilizer name applied, or None.
        is_active: Whether the tile belongs to an active plot.
        needs_water: Whether the crop on the tile still needs water.
    """

    row: int
    col: int
    crop_type: str | None = None
    fertilizer_type: str | None = None
    is_active: bool = False
    needs_water: bool = False

    def to_dict(self) -> dict:
        """Convert the tile to a dictionary."""
        return asdict(self)


@dataclass
class Dimensions:
    """Tile dimensions of a garden grid."""

    rows: int = 0
    columns: int = 0


@dataclass
class CropBreakdown:
    """Per-crop aggregate of a garden.

    Attributes:
        total: Number of tiles planted with the crop.
        needing_water: Number of those tiles that need water.
        size: Size class of the crop ('single', 'bush' or 'tree').
        tiles_per_plant: Tiles one plant of the crop occupies.
        plants: Whole plants the tiles amount to (total // tiles_per_plant).
    """

    total: int = 0
    needing_water: int = 0
    size: str = "single"
    tiles_per_plant: int = 1
    plants: int = 0


@dataclass
class CropSummary:
    """Watering summary of a whole garden."""

    total_plants: int = 0
    plants_needing_water: int = 0
    watering_percentage: float = 0
    crop_breakdown: dict[str, CropBreakdown] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert the summary to a dictionary."""
        return asdict(self)


@dataclass
class ParsedGardenData:
    """A fully decoded garden layout.

    Attributes:
        dimensions: Tile rows and columns of the grid.
        tiles: Row-major tile grid.
        active_plots: Plot-level activity matrix (one entry per 3x3 plot).
        crop_summary: Aggregated crop and watering statistics.
        version: Version tag of the decoded code (always the current one).
        save_code: The current-format save code that was decoded.
        original_version: Version tag of the input before conversion.
        settings: Planner settings section, kept verbatim, or None.

    Two gardens compare equal when their grids, summaries and settings
    match; the textual save code and the input version are provenance only.
    """

    dimensions: Dimensions
    tiles: list[list[GridTile]]
    active_plots: list[list[bool]]
    crop_summary: CropSummary
    version: str
    save_code: str = field(compare=False)
    original_version: str | None = field(default=None, compare=False)
    settings: str | None = None

    def to_dict(self) -> dict:
        """Convert the garden to a dictionary."""
        return asdict(self)

    def iter_tiles(self):
        """Yield every tile in row-major order."""
        for row in self.tiles:
            yield from row


@dataclass
class ConversionResult:
    """Outcome of upgrading a save code to the current version."""

    code: str
    original_version: str


@dataclass
class LayoutMetadata:
    """Descriptive metadata of a garden layout."""

    plot_count: int
    plant_count: int
    dominant_crops: list[str]
    dimensions: Dimensions
    description: str

    def to_dict(self) -> dict:
        """Convert the metadata to a dictionary."""
        return asdict(self)
