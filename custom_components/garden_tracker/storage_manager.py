"""Storage manager for Garden Tracker."""

from __future__ import annotations

import logging

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .const import STORAGE_KEY, STORAGE_VERSION
from .models import SavedLayout

_LOGGER = logging.getLogger(__name__)


class StorageManager:
    """Manages data persistence for the Garden Tracker."""

    def __init__(self, coordinator, hass: HomeAssistant) -> None:
        """Initialize the StorageManager.

        Args:
            coordinator: The GardenCoordinator instance.
            hass: The Home Assistant instance.
        """
        self.coordinator = coordinator
        self.hass = hass
        self.store = Store(hass, STORAGE_VERSION, STORAGE_KEY)

    async def async_save(self) -> None:
        """Save all layouts to persistent storage."""
        await self.store.async_save(
            {
                "layouts": {
                    lid: layout.to_dict()
                    for lid, layout in self.coordinator.layouts.items()
                },
            }
        )

    async def async_load(self) -> bool:
        """Load layouts from persistent storage and handle migrations.

        Returns:
            False when nothing was stored yet.
        """
        data = await self.store.async_load()
        if not data:
            _LOGGER.info("No stored data found, starting fresh")
            return False

        _LOGGER.debug("Raw storage data keys = %s", list(data.keys()))
        data = self.coordinator.migration_manager.migrate_legacy_payload(data)

        self._load_layouts(data)
        self.coordinator.migration_manager.upgrade_legacy_save_codes()

        # Save migrated data back to storage
        await self.async_save()
        _LOGGER.info("Saved migrated data to storage")
        return True

    def _load_layouts(self, data: dict) -> None:
        """Load layouts from storage data."""
        layouts: dict[str, SavedLayout] = {}
        for lid, raw in data.get("layouts", {}).items():
            try:
                layouts[lid] = SavedLayout.from_dict(raw)
            except (TypeError, AttributeError) as e:
                _LOGGER.warning("Failed to load layout %s: %s", lid, e)
        self.coordinator.layouts = layouts
        _LOGGER.info("Loaded %d layouts", len(layouts))
