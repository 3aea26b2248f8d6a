"""Sensor platform for Garden Tracker.

This file defines the sensor entities for the Garden Tracker integration: an
overview sensor and a watering progress sensor for every saved layout, plus a
single sensor reporting the in-game Palia clock that drives the daily watering
reset.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity
from homeassistant.util import dt as dt_util

from .codec import build_planner_url
from .codec.aggregator import summarize_layout
from .const import DOMAIN
from .coordinator import GardenCoordinator
from .utils import compute_tile_metrics, palia_time, watering_day_id

_LOGGER = logging.getLogger(__name__)


def layout_device_info(layout_id: str, name: str) -> DeviceInfo:
    """Return the device grouping the entities of one layout."""
    return DeviceInfo(
        identifiers={(DOMAIN, layout_id)},
        name=name,
        model="Garden layout",
        manufacturer="Garden Tracker",
    )


def _layout_entities(coordinator: GardenCoordinator, layout_id: str) -> list[Entity]:
    return [
        GardenOverviewSensor(coordinator, layout_id),
        WateringProgressSensor(coordinator, layout_id),
    ]


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Garden Tracker sensor platform from a config entry."""
    coordinator = config_entry.runtime_data.coordinator

    # Track created entities so we can add/remove dynamically
    layout_entities: dict[str, list[Entity]] = {}
    initial_entities: list[Entity] = [PaliaClockSensor(coordinator)]

    for layout_id in coordinator.layouts:
        layout_entities[layout_id] = _layout_entities(coordinator, layout_id)
        initial_entities.extend(layout_entities[layout_id])

    async_add_entities(initial_entities)
    _LOGGER.debug("Added %d initial sensor entities", len(initial_entities))

    async def _handle_coordinator_update_async() -> None:
        """Add new entities and remove missing ones when coordinator changes."""
        await async_sync_layout_entities(
            hass, coordinator, layout_entities, async_add_entities, _layout_entities
        )

    def _listener_callback() -> None:
        """Handle coordinator updates."""
        hass.async_create_task(_handle_coordinator_update_async())

    config_entry.async_on_unload(coordinator.async_add_listener(_listener_callback))


async def async_sync_layout_entities(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    layout_entities: dict[str, list[Entity]],
    async_add_entities: AddEntitiesCallback,
    factory,
) -> None:
    """Sync per-layout entities with the layouts held by the coordinator.

    Args:
        hass: The Home Assistant instance.
        coordinator: The data update coordinator.
        layout_entities: Entities created so far, keyed by layout id.
        async_add_entities: The platform's add callback.
        factory: Callable building the entities of one layout.
    """
    # Add new
    new_entities: list[Entity] = []
    for layout_id in coordinator.layouts:
        if layout_id not in layout_entities:
            layout_entities[layout_id] = factory(coordinator, layout_id)
            new_entities.extend(layout_entities[layout_id])
    if new_entities:
        async_add_entities(new_entities)

    # Remove deleted
    entity_registry = er.async_get(hass)
    for removed_id in set(layout_entities) - set(coordinator.layouts):
        for entity in layout_entities.pop(removed_id):
            if entity.registry_entry:
                entity_registry.async_remove(entity.registry_entry.entity_id)
            await entity.async_remove()


class GardenOverviewSensor(CoordinatorEntity[GardenCoordinator], SensorEntity):
    """A sensor that provides an overview of a single garden layout.

    The state of this sensor is the number of planted tiles. Its attributes
    carry the tile grid, the crop breakdown and the save code, making it the
    primary entity for a dashboard card.
    """

    _attr_icon = "mdi:sprout"
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: GardenCoordinator, layout_id: str) -> None:
        """Initialize the garden overview sensor.

        Args:
            coordinator: The data update coordinator.
            layout_id: The ID of the layout.
        """
        super().__init__(coordinator)
        self.layout_id = layout_id
        layout = coordinator.layouts[layout_id]
        self._attr_name = layout.name
        self._attr_unique_id = f"{DOMAIN}_{layout_id}"
        self._attr_device_info = layout_device_info(layout_id, layout.name)

    @property
    def available(self) -> bool:
        """Return False once the layout has been removed."""
        return super().available and self.layout_id in self.coordinator.layouts

    @property
    def native_value(self) -> int:
        """Return the number of planted tiles in the garden."""
        return self.coordinator.get_garden(self.layout_id).crop_summary.total_plants

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the detailed state attributes for the garden."""
        layout = self.coordinator.layouts[self.layout_id]
        garden = self.coordinator.get_garden(self.layout_id)
        metadata = summarize_layout(garden)
        metrics = compute_tile_metrics(
            garden.dimensions.rows, garden.dimensions.columns
        )

        grid = [
            [
                {
                    "crop": tile.crop_type,
                    "fertilizer": tile.fertilizer_type,
                    "active": tile.is_active,
                    "needs_water": tile.needs_water,
                }
                for tile in row
            ]
            for row in garden.tiles
        ]

        return {
            "layout_id": self.layout_id,
            "rows": garden.dimensions.rows,
            "columns": garden.dimensions.columns,
            "active_plots": garden.active_plots,
            "plot_count": metadata.plot_count,
            "dominant_crops": metadata.dominant_crops,
            "description": metadata.description,
            "crop_breakdown": garden.crop_summary.to_dict()["crop_breakdown"],
            "grid": grid,
            "save_code": layout.save_code,
            "original_version": layout.original_version,
            "source_url": layout.source_url,
            "planner_url": build_planner_url(layout.save_code),
            "notes": layout.notes,
            "tags": layout.tags,
            "created_at": layout.created_at,
            "last_modified": layout.last_modified,
            "tile_size": metrics.tile_size,
            "show_tooltips": metrics.show_tooltips,
        }


class WateringProgressSensor(CoordinatorEntity[GardenCoordinator], SensorEntity):
    """Percentage of planted tiles watered today."""

    _attr_icon = "mdi:watering-can"
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: GardenCoordinator, layout_id: str) -> None:
        """Initialize the watering progress sensor."""
        super().__init__(coordinator)
        self.layout_id = layout_id
        layout = coordinator.layouts[layout_id]
        self._attr_name = f"{layout.name} Watering"
        self._attr_unique_id = f"{DOMAIN}_{layout_id}_watering"
        self._attr_device_info = layout_device_info(layout_id, layout.name)

    @property
    def available(self) -> bool:
        """Return False once the layout has been removed."""
        return super().available and self.layout_id in self.coordinator.layouts

    @property
    def native_value(self) -> float:
        """Return the share of planted tiles already watered."""
        summary = self.coordinator.get_garden(self.layout_id).crop_summary
        if not summary.total_plants:
            return 100.0
        return round(100 - summary.watering_percentage, 2)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return per-crop watering counts."""
        summary = self.coordinator.get_garden(self.layout_id).crop_summary
        return {
            "total_plants": summary.total_plants,
            "plants_needing_water": summary.plants_needing_water,
            "crops": {
                name: {
                    "total": entry.total,
                    "needing_water": entry.needing_water,
                    "watered": entry.total - entry.needing_water,
                }
                for name, entry in summary.crop_breakdown.items()
            },
            "last_reset_cycle": self.coordinator.layouts[
                self.layout_id
            ].last_reset_cycle,
        }


class PaliaClockSensor(CoordinatorEntity[GardenCoordinator], SensorEntity):
    """The in-game clock, refreshed with every coordinator update."""

    _attr_icon = "mdi:clock-outline"

    def __init__(self, coordinator: GardenCoordinator) -> None:
        """Initialize the Palia clock sensor."""
        super().__init__(coordinator)
        self._attr_name = "Palia Time"
        self._attr_unique_id = f"{DOMAIN}_palia_time"

    @property
    def native_value(self) -> str:
        """Return the Palia time as HH:MM."""
        return palia_time(dt_util.utcnow()).clock

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the Palia day, part of day and current watering day."""
        now = dt_util.utcnow()
        current = palia_time(now)
        return {
            "day": current.day_text,
            "part_of_day": current.part_of_day,
            "cycle_id": current.cycle_id,
            "week_id": current.week_id,
            "reset_hour": self.coordinator.reset_hour,
            "watering_day": watering_day_id(now, self.coordinator.reset_hour),
        }
