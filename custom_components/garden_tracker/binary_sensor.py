"""Binary sensors for Garden Tracker."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.binary_sensor import BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import GardenCoordinator
from .sensor import async_sync_layout_entities, layout_device_info

_LOGGER = logging.getLogger(__name__)


def _layout_entities(coordinator: GardenCoordinator, layout_id: str) -> list[Entity]:
    return [NeedsWaterBinarySensor(coordinator, layout_id)]


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Garden Tracker binary sensors from a config entry."""
    coordinator = config_entry.runtime_data.coordinator

    layout_entities: dict[str, list[Entity]] = {
        layout_id: _layout_entities(coordinator, layout_id)
        for layout_id in coordinator.layouts
    }
    entities = [entity for group in layout_entities.values() for entity in group]
    if entities:
        async_add_entities(entities)
        _LOGGER.debug("Added %d needs-water sensors", len(entities))

    async def _handle_coordinator_update_async() -> None:
        await async_sync_layout_entities(
            hass, coordinator, layout_entities, async_add_entities, _layout_entities
        )

    def _listener_callback() -> None:
        hass.async_create_task(_handle_coordinator_update_async())

    config_entry.async_on_unload(coordinator.async_add_listener(_listener_callback))


class NeedsWaterBinarySensor(CoordinatorEntity[GardenCoordinator], BinarySensorEntity):
    """On while any planted tile of the layout still needs water."""

    _attr_icon = "mdi:water-alert"

    def __init__(self, coordinator: GardenCoordinator, layout_id: str) -> None:
        """Initialize the needs-water sensor.

        Args:
            coordinator: The data update coordinator.
            layout_id: The ID of the layout.
        """
        super().__init__(coordinator)
        self.layout_id = layout_id
        layout = coordinator.layouts[layout_id]
        self._attr_name = f"{layout.name} Needs Water"
        self._attr_unique_id = f"{DOMAIN}_{layout_id}_needs_water"
        self._attr_device_info = layout_device_info(layout_id, layout.name)

    @property
    def available(self) -> bool:
        """Return False once the layout has been removed."""
        return super().available and self.layout_id in self.coordinator.layouts

    @property
    def is_on(self) -> bool:
        """Return True while any plant needs water."""
        summary = self.coordinator.get_garden(self.layout_id).crop_summary
        return summary.plants_needing_water > 0

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the crops that still need water."""
        summary = self.coordinator.get_garden(self.layout_id).crop_summary
        return {
            "plants_needing_water": summary.plants_needing_water,
            "crops_needing_water": sorted(
                name
                for name, entry in summary.crop_breakdown.items()
                if entry.needing_water
            ),
        }
