"""Services related to garden layouts."""

import logging

from homeassistant.components.persistent_notification import (
    async_create as create_notification,
)
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError

from ..codec import SaveCodeError
from ..const import EVENT_LAYOUT_IMPORTED, EVENT_LAYOUT_REMOVED
from ..coordinator import GardenCoordinator

_LOGGER = logging.getLogger(__name__)


async def handle_import_layout(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle import layout service call."""
    try:
        layout = await coordinator.async_import_layout(
            call.data["layout"],
            name=call.data["name"],
            notes=call.data.get("notes", ""),
            tags=call.data.get("tags"),
        )
    except SaveCodeError as err:
        _LOGGER.error("Failed to import layout: %s", err)
        create_notification(
            hass,
            f"Failed to import layout '{call.data['name']}': {err}",
            title="Garden Tracker Error",
        )
        raise ServiceValidationError(f"Invalid save code: {err}") from err

    _LOGGER.info("Layout %s imported successfully via service call", layout.id)
    hass.bus.async_fire(
        EVENT_LAYOUT_IMPORTED,
        {
            "layout_id": layout.id,
            "name": layout.name,
            "original_version": layout.original_version,
        },
    )


async def handle_remove_layout(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> None:
    """Handle remove layout service call."""
    layout_id = call.data["layout_id"]
    try:
        layout = await coordinator.async_remove_layout(layout_id)
    except ValueError as err:
        _LOGGER.error("Failed to remove layout %s: %s", layout_id, err)
        raise ServiceValidationError(str(err)) from err

    hass.bus.async_fire(
        EVENT_LAYOUT_REMOVED, {"layout_id": layout_id, "name": layout.name}
    )


async def handle_export_layout(
    hass: HomeAssistant,
    coordinator: GardenCoordinator,
    call: ServiceCall,
) -> dict:
    """Handle export layout service call.

    Returns the canonical save code of the layout and a planner link that
    opens it.
    """
    layout_id = call.data["layout_id"]
    try:
        return coordinator.export_layout(layout_id)
    except ValueError as err:
        _LOGGER.error("Failed to export layout %s: %s", layout_id, err)
        raise ServiceValidationError(str(err)) from err
