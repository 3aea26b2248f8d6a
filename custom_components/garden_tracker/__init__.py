"""The Garden Tracker integration.

Tracks garden layouts imported from the Palia garden planner and the daily
watering state of their crops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, cast

from homeassistant.components.persistent_notification import (
    async_create as create_notification,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, SupportsResponse
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.typing import ConfigType

from .codec import SaveCodeError
from .const import (
    CONF_INITIAL_LAYOUT,
    CONF_SEED_DEFAULT_LAYOUTS,
    DOMAIN,
    PLATFORMS,
)
from .coordinator import GardenCoordinator
from .services import (
    EXPORT_LAYOUT_SCHEMA,
    IMPORT_LAYOUT_SCHEMA,
    REMOVE_LAYOUT_SCHEMA,
    RESET_WATERING_SCHEMA,
    WATER_ALL_SCHEMA,
    WATER_CROP_SCHEMA,
    WATER_TILE_SCHEMA,
    garden,
    watering,
)

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

_LOGGER = logging.getLogger(__name__)

SERVICES_WITH_RESPONSE = ["export_layout"]


@dataclass
class GardenRuntimeData:
    """Runtime data for the Garden Tracker integration."""

    coordinator: GardenCoordinator


type GardenConfigEntry = ConfigEntry[GardenRuntimeData]


def _register_services(hass: HomeAssistant, coordinator: GardenCoordinator) -> None:
    """Register services for the Garden Tracker integration."""
    services = [
        (
            "import_layout",
            partial(garden.handle_import_layout, hass, coordinator),
            IMPORT_LAYOUT_SCHEMA,
        ),
        (
            "remove_layout",
            partial(garden.handle_remove_layout, hass, coordinator),
            REMOVE_LAYOUT_SCHEMA,
        ),
        (
            "export_layout",
            partial(garden.handle_export_layout, hass, coordinator),
            EXPORT_LAYOUT_SCHEMA,
        ),
        (
            "water_tile",
            partial(watering.handle_water_tile, hass, coordinator),
            WATER_TILE_SCHEMA,
        ),
        (
            "water_crop",
            partial(watering.handle_water_crop, hass, coordinator),
            WATER_CROP_SCHEMA,
        ),
        (
            "water_all",
            partial(watering.handle_water_all, hass, coordinator),
            WATER_ALL_SCHEMA,
        ),
        (
            "reset_watering",
            partial(watering.handle_reset_watering, hass, coordinator),
            RESET_WATERING_SCHEMA,
        ),
    ]

    for service_name, handler, schema in services:
        if service_name in SERVICES_WITH_RESPONSE:
            hass.services.async_register(
                DOMAIN,
                service_name,
                cast(Any, handler),
                schema=schema,
                supports_response=SupportsResponse.ONLY,
            )
        else:
            hass.services.async_register(
                DOMAIN, service_name, cast(Any, handler), schema=schema
            )


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up the Garden Tracker component."""
    return True


async def _async_import_initial_layout(
    hass: HomeAssistant, entry: GardenConfigEntry, coordinator: GardenCoordinator
) -> None:
    """Import the layout entered in the config flow, then forget it."""
    raw = entry.data.get(CONF_INITIAL_LAYOUT)
    if not raw:
        return

    try:
        await coordinator.async_import_layout(raw, name=entry.title)
    except SaveCodeError as err:
        _LOGGER.error("Failed to import initial layout: %s", err)
        create_notification(
            hass,
            f"Failed to import initial layout: {err}",
            title="Garden Tracker Error",
        )

    data = {k: v for k, v in entry.data.items() if k != CONF_INITIAL_LAYOUT}
    hass.config_entries.async_update_entry(entry, data=data)


async def async_setup_entry(hass: HomeAssistant, entry: GardenConfigEntry) -> bool:
    """Set up Garden Tracker from a config entry."""
    _LOGGER.debug("Setting up Garden Tracker integration for entry %s", entry.entry_id)

    coordinator = GardenCoordinator(hass, options=dict(entry.options))
    fresh = not await coordinator.async_load()

    await _async_import_initial_layout(hass, entry, coordinator)
    if fresh and entry.options.get(CONF_SEED_DEFAULT_LAYOUTS, True):
        await coordinator.async_seed_default_layouts()

    entry.runtime_data = GardenRuntimeData(coordinator=coordinator)
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    # Register all custom services
    _LOGGER.debug("Registering services for domain %s", DOMAIN)
    _register_services(hass, coordinator)

    # Forward entry setup to platforms
    _LOGGER.debug("Setting up platforms: %s", PLATFORMS)
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Perform the first refresh, which also runs a pending watering reset
    await coordinator.async_config_entry_first_refresh()

    return True


async def async_unload_entry(hass: HomeAssistant, entry: GardenConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.debug("Unloading config entry %s for Garden Tracker", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        _async_remove_services(hass)
        _LOGGER.info("Unloaded Garden Tracker for entry %s", entry.entry_id)
        return True

    _LOGGER.error("Failed to unload platforms for entry %s", entry.entry_id)
    return False


def _async_remove_services(hass: HomeAssistant) -> None:
    """Remove services for the Garden Tracker integration."""
    services = [
        "import_layout",
        "remove_layout",
        "export_layout",
        "water_tile",
        "water_crop",
        "water_all",
        "reset_watering",
    ]
    for service in services:
        hass.services.async_remove(DOMAIN, service)


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    await hass.config_entries.async_reload(entry.entry_id)
