"""Services related to watering."""

import logging

from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError

from ..const import EVENT_WATERING_RESET
from ..coordinator import GardenCoordinator

_LOGGER = logging.getLogger(__name__)


async def handle_water_tile(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle water tile service call."""
    try:
        await coordinator.async_water_tile(
            call.data["layout_id"],
            call.data["row"],
            call.data["col"],
            watered=call.data.get("watered"),
        )
    except ValueError as err:
        _LOGGER.error("Failed to water tile: %s", err)
        raise ServiceValidationError(str(err)) from err


async def handle_water_crop(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle water crop service call."""
    try:
        count = await coordinator.async_water_crop(
            call.data["layout_id"], call.data["crop"], call.data["watered"]
        )
    except ValueError as err:
        _LOGGER.error("Failed to water crop: %s", err)
        raise ServiceValidationError(str(err)) from err

    _LOGGER.debug("Updated %d %s tiles", count, call.data["crop"])


async def handle_water_all(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle water all service call."""
    try:
        await coordinator.async_water_all(call.data["layout_id"], call.data["watered"])
    except ValueError as err:
        _LOGGER.error("Failed to water garden: %s", err)
        raise ServiceValidationError(str(err)) from err


async def handle_reset_watering(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle reset watering service call."""
    try:
        layout_ids = await coordinator.async_reset_watering(call.data.get("layout_id"))
    except ValueError as err:
        _LOGGER.error("Failed to reset watering: %s", err)
        raise ServiceValidationError(str(err)) from err

    hass.bus.async_fire(
        EVENT_WATERING_RESET, {"layout_ids": layout_ids, "automatic": False}
    )
