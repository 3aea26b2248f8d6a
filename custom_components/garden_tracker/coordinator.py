"""Data update coordinator for the Garden Tracker integration."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from .codec import build_planner_url, decode, encode, generate_crop_summary, parse
from .codec.aggregator import summarize_layout
from .codec.models import Dimensions, LayoutMetadata, ParsedGardenData
from .codec.parser import is_url
from .const import (
    CONF_RESET_HOUR,
    DEFAULT_LAYOUTS,
    DEFAULT_RESET_HOUR,
    EVENT_WATERING_RESET,
)
from .garden_validator import GardenValidator
from .migration_manager import MigrationManager
from .models import SavedLayout
from .storage_manager import StorageManager
from .utils import watering_day_id

_LOGGER = logging.getLogger(__name__)

UPDATE_INTERVAL = timedelta(minutes=1)


def _blank_watering(dimensions: Dimensions) -> list[list[bool]]:
    """Return an all-unwatered matrix for a grid."""
    return [[False] * dimensions.columns for _ in range(dimensions.rows)]


class GardenCoordinator(DataUpdateCoordinator):
    """Manages saved garden layouts and their watering state.

    Layouts are stored as save codes plus a per-tile watering matrix. The
    decoded garden is rebuilt from the save code on demand, with the
    watering matrix applied on top, so the stored code stays the single
    source of truth for the grid.
    """

    def __init__(
        self,
        hass,
        data: dict | None = None,
        options: dict | None = None,
    ) -> None:
        """Initialize the Garden Coordinator.

        Args:
            hass: The Home Assistant instance.
            data: Initial raw data, typically from storage (optional).
            options: Configuration options from the config entry (optional).
        """
        super().__init__(
            hass,
            _LOGGER,
            name="Garden Tracker Coordinator",
            update_interval=UPDATE_INTERVAL,
        )

        self.hass = hass
        self.layouts: dict[str, SavedLayout] = {}
        self.options = options or {}

        self.migration_manager = MigrationManager(self)
        self.validator = GardenValidator(self)
        self.storage_manager = StorageManager(self, hass)

        for lid, raw in (data or {}).get("layouts", {}).items():
            try:
                if isinstance(raw, SavedLayout):
                    self.layouts[lid] = raw
                else:
                    self.layouts[lid] = SavedLayout.from_dict(raw)
            except (TypeError, AttributeError) as e:
                _LOGGER.warning("Failed to load layout %s: %s", lid, e)

        self.update_data_property()

    @property
    def reset_hour(self) -> int:
        """Palia hour at which watering resets each in-game day."""
        return int(self.options.get(CONF_RESET_HOUR, DEFAULT_RESET_HOUR))

    # =============================================================================
    # DATA UPDATE COORDINATOR OVERRIDE
    # =============================================================================

    async def _async_update_data(self) -> dict[str, Any]:
        """Refresh data, called periodically by the DataUpdateCoordinator.

        Runs the daily watering reset when the Palia clock has passed the
        reset hour since the last refresh.
        """
        reset = self.apply_daily_reset(dt_util.utcnow())
        self.update_data_property()
        if reset:
            await self.async_save()
            self.hass.bus.async_fire(
                EVENT_WATERING_RESET, {"layout_ids": reset, "automatic": True}
            )
        return self.data

    async def async_save(self) -> None:
        """Save the current state of all data to persistent storage."""
        await self.storage_manager.async_save()

    async def async_load(self) -> bool:
        """Load data from persistent storage and handle migrations.

        Returns:
            False when nothing was stored yet.
        """
        loaded = await self.storage_manager.async_load()
        for layout in self.layouts.values():
            self._normalize_watering(layout)
        self.update_data_property()
        return loaded

    def update_data_property(self) -> None:
        """Update the central `self.data` property to reflect the current coordinator state."""
        self.data = {"layouts": self.layouts}

    # =============================================================================
    # LAYOUT MANAGEMENT METHODS
    # =============================================================================

    def get_layout_options(self) -> dict[str, str]:
        """Return layout names keyed by id, for dropdowns."""
        return {lid: layout.name for lid, layout in self.layouts.items()}

    async def async_import_layout(
        self,
        raw: str,
        name: str,
        notes: str = "",
        tags: list[str] | None = None,
        layout_id: str | None = None,
    ) -> SavedLayout:
        """Parse a planner URL or save code and store it as a layout.

        Args:
            raw: A planner URL or a save code of any supported version.
            name: The display name for the layout.
            notes: Free-form notes (optional).
            tags: Free-form tags (optional).
            layout_id: Fixed id for the layout; a random one is generated
                when omitted.

        Returns:
            The newly created SavedLayout.

        Raises:
            SaveCodeError: If the input cannot be parsed.
        """
        garden = parse(raw)
        layout = self._new_layout(garden, name, raw, notes, tags, layout_id)
        self.layouts[layout.id] = layout

        self.update_data_property()
        await self.async_save()
        self.async_set_updated_data(self.data)

        _LOGGER.info(
            "Imported layout %s (%s): %d plants, converted from %s",
            layout.id,
            layout.name,
            garden.crop_summary.total_plants,
            garden.original_version,
        )
        return layout

    def _new_layout(
        self,
        garden: ParsedGardenData,
        name: str,
        raw: str,
        notes: str = "",
        tags: list[str] | None = None,
        layout_id: str | None = None,
    ) -> SavedLayout:
        now = dt_util.now().isoformat()
        return SavedLayout(
            id=layout_id or str(uuid.uuid4()),
            name=name.strip(),
            save_code=garden.save_code,
            original_version=garden.original_version,
            source_url=raw.strip() if is_url(raw) else None,
            created_at=now,
            last_modified=now,
            notes=notes,
            tags=list(tags or []),
            watered=_blank_watering(garden.dimensions),
            last_reset_cycle=watering_day_id(dt_util.utcnow(), self.reset_hour),
        )

    async def async_remove_layout(self, layout_id: str) -> SavedLayout:
        """Remove a saved layout.

        Args:
            layout_id: The ID of the layout to remove.

        Returns:
            The removed layout.
        """
        self.validator.validate_layout_exists(layout_id)
        layout = self.layouts.pop(layout_id)

        self.update_data_property()
        await self.async_save()
        self.async_set_updated_data(self.data)

        _LOGGER.info("Removed layout %s (%s)", layout_id, layout.name)
        return layout

    async def async_seed_default_layouts(self) -> list[str]:
        """Add the built-in example layouts that are not stored yet.

        Returns:
            The ids of the layouts that were added.
        """
        added = []
        for default in DEFAULT_LAYOUTS:
            if default["id"] in self.layouts:
                continue
            garden = parse(default["save_code"])
            self.layouts[default["id"]] = self._new_layout(
                garden, default["name"], default["save_code"], layout_id=default["id"]
            )
            added.append(default["id"])

        if added:
            _LOGGER.info("Seeded %d default layouts", len(added))
            self.update_data_property()
            await self.async_save()
            self.async_set_updated_data(self.data)
        return added

    # =============================================================================
    # GARDEN VIEWS
    # =============================================================================

    def get_garden(self, layout_id: str) -> ParsedGardenData:
        """Return the decoded garden of a layout with watering applied.

        A planted tile needs water until it is marked watered.
        """
        self.validator.validate_layout_exists(layout_id)
        layout = self.layouts[layout_id]
        garden = decode(layout.save_code)

        for tile in garden.iter_tiles():
            tile.needs_water = bool(
                tile.is_active
                and tile.crop_type
                and not self._is_watered(layout, tile.row, tile.col)
            )
        return replace(
            garden,
            crop_summary=generate_crop_summary(garden.tiles),
            original_version=layout.original_version,
        )

    def get_metadata(self, layout_id: str) -> LayoutMetadata:
        """Return descriptive metadata of a layout."""
        return summarize_layout(self.get_garden(layout_id))

    def export_layout(self, layout_id: str) -> dict[str, Any]:
        """Return the canonical save code and planner link of a layout."""
        self.validator.validate_layout_exists(layout_id)
        layout = self.layouts[layout_id]
        code = encode(self.get_garden(layout_id))
        return {
            "layout_id": layout_id,
            "name": layout.name,
            "save_code": code,
            "planner_url": build_planner_url(code),
        }

    # =============================================================================
    # WATERING METHODS
    # =============================================================================

    @staticmethod
    def _is_watered(layout: SavedLayout, row: int, col: int) -> bool:
        try:
            return bool(layout.watered[row][col])
        except IndexError:
            return False

    def _normalize_watering(self, layout: SavedLayout) -> None:
        """Reshape a watering matrix to the dimensions of its garden."""
        dims = decode(layout.save_code).dimensions
        shaped = _blank_watering(dims)
        for r in range(dims.rows):
            for c in range(dims.columns):
                shaped[r][c] = self._is_watered(layout, r, c)
        if shaped != layout.watered:
            _LOGGER.debug("Reshaped watering state of layout %s", layout.id)
        layout.watered = shaped

    async def _async_commit(self, layout: SavedLayout) -> None:
        layout.last_modified = dt_util.now().isoformat()
        self.update_data_property()
        await self.async_save()
        self.async_set_updated_data(self.data)

    async def async_water_tile(
        self, layout_id: str, row: int, col: int, watered: bool | None = None
    ) -> bool:
        """Set or toggle the watering state of one planted tile.

        Args:
            layout_id: The layout the tile belongs to.
            row: 0-based tile row.
            col: 0-based tile column.
            watered: New state; the current state is toggled when omitted.

        Returns:
            The tile's new watering state.
        """
        garden = self.get_garden(layout_id)
        self.validator.validate_tile_planted(garden, row, col)

        layout = self.layouts[layout_id]
        self._normalize_watering(layout)
        if watered is None:
            watered = not layout.watered[row][col]
        layout.watered[row][col] = watered

        await self._async_commit(layout)
        _LOGGER.debug(
            "Tile (%d,%d) of layout %s watered=%s", row, col, layout_id, watered
        )
        return watered

    async def async_water_crop(self, layout_id: str, crop: str, watered: bool) -> int:
        """Set the watering state of every tile of one crop.

        Returns:
            The number of tiles updated.
        """
        garden = self.get_garden(layout_id)
        self.validator.validate_crop_planted(garden, crop)

        layout = self.layouts[layout_id]
        self._normalize_watering(layout)
        count = 0
        for tile in garden.iter_tiles():
            if tile.is_active and tile.crop_type == crop:
                layout.watered[tile.row][tile.col] = watered
                count += 1

        await self._async_commit(layout)
        _LOGGER.debug(
            "Set %d %s tiles of layout %s watered=%s", count, crop, layout_id, watered
        )
        return count

    async def async_water_all(self, layout_id: str, watered: bool) -> int:
        """Set the watering state of every planted tile of a layout.

        Returns:
            The number of tiles updated.
        """
        garden = self.get_garden(layout_id)
        layout = self.layouts[layout_id]
        self._normalize_watering(layout)
        count = 0
        for tile in garden.iter_tiles():
            if tile.is_active and tile.crop_type:
                layout.watered[tile.row][tile.col] = watered
                count += 1

        await self._async_commit(layout)
        return count

    async def async_reset_watering(self, layout_id: str | None = None) -> list[str]:
        """Mark every tile unwatered, for one layout or for all of them.

        Returns:
            The ids of the layouts that were reset.
        """
        if layout_id is not None:
            self.validator.validate_layout_exists(layout_id)
            targets = [layout_id]
        else:
            targets = list(self.layouts)

        for lid in targets:
            layout = self.layouts[lid]
            layout.watered = _blank_watering(decode(layout.save_code).dimensions)
            layout.last_modified = dt_util.now().isoformat()

        self.update_data_property()
        await self.async_save()
        self.async_set_updated_data(self.data)
        _LOGGER.info("Reset watering for %d layouts", len(targets))
        return targets

    def apply_daily_reset(self, now: datetime) -> list[str]:
        """Reset watering of layouts whose last reset predates the current Palia day.

        Args:
            now: The current time.

        Returns:
            The ids of the layouts that were reset.
        """
        cycle = watering_day_id(now, self.reset_hour)
        reset = []
        for lid, layout in self.layouts.items():
            if layout.last_reset_cycle == cycle:
                continue
            layout.watered = [[False] * len(row) for row in layout.watered]
            layout.last_reset_cycle = cycle
            reset.append(lid)

        if reset:
            _LOGGER.info("Daily watering reset (%s) for %d layouts", cycle, len(reset))
        return reset
