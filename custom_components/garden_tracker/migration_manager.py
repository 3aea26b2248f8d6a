"""Migration manager for Garden Tracker."""

from __future__ import annotations

import logging
from typing import Any

from .codec import SaveCodeError, decode, detect_and_convert, parse
from .codec.parser import is_url
from .codec.const import CURRENT_VERSION
from .utils import format_timestamp

_LOGGER = logging.getLogger(__name__)

LEGACY_LAYOUT_ID = "migrated_layout"
LEGACY_LAYOUT_NAME = "Imported garden"


class MigrationManager:
    """Manages data migrations for the Garden Tracker."""

    def __init__(self, coordinator) -> None:
        """Initialize the MigrationManager.

        Args:
            coordinator: The GardenCoordinator instance.
        """
        self.coordinator = coordinator

    def migrate_legacy_payload(self, data: dict[str, Any]) -> dict[str, Any]:
        """Convert a browser tracker payload into the layouts storage shape.

        Payloads already holding ``layouts`` are returned unchanged. A
        payload with an ``originalLayoutUrl`` becomes one saved layout whose
        watering state comes from its tracked crops.

        Args:
            data: The raw stored payload.

        Returns:
            A payload with a ``layouts`` mapping.
        """
        if "layouts" in data:
            return data
        if "trackedCrops" not in data:
            return {"layouts": {}}

        raw = data.get("originalLayoutUrl")
        if not raw:
            _LOGGER.warning(
                "Legacy payload has no garden layout, skipping %d tracked crops",
                len(data.get("trackedCrops") or []),
            )
            return {"layouts": {}}

        try:
            garden = parse(raw)
        except SaveCodeError as err:
            _LOGGER.warning("Could not migrate legacy garden layout: %s", err)
            return {"layouts": {}}

        watered_crops = self._legacy_watered_crops(data)
        watered = [
            [
                bool(tile.is_active and tile.crop_type in watered_crops)
                for tile in row
            ]
            for row in garden.tiles
        ]
        saved_at = format_timestamp(data.get("lastSaved"))

        layout = {
            "id": LEGACY_LAYOUT_ID,
            "name": LEGACY_LAYOUT_NAME,
            "save_code": garden.save_code,
            "original_version": garden.original_version,
            "source_url": raw if is_url(raw) else None,
            "watered": watered,
        }
        if saved_at:
            layout["created_at"] = saved_at
            layout["last_modified"] = saved_at

        _LOGGER.info(
            "Migrated legacy garden layout with %d watered crop types",
            len(watered_crops),
        )
        return {"layouts": {LEGACY_LAYOUT_ID: layout}}

    @staticmethod
    def _legacy_watered_crops(data: dict[str, Any]) -> set[str]:
        """Return crop names marked watered in a legacy payload."""
        watered: set[str] = set()
        for crop in data.get("trackedCrops") or []:
            if isinstance(crop, dict) and crop.get("isWatered"):
                watered.add(crop.get("cropType"))

        state = data.get("cropWateringState") or {}
        for name, is_watered in (state.get("watered") or {}).items():
            if is_watered:
                watered.add(name)
        return watered

    def upgrade_legacy_save_codes(self) -> None:
        """Upgrade stored layouts whose save code predates the current version.

        Layouts whose code cannot be upgraded or decoded are dropped with a
        warning.
        """
        layouts = self.coordinator.layouts
        for layout_id, layout in list(layouts.items()):
            try:
                result = detect_and_convert(layout.save_code)
                decode(result.code)
            except SaveCodeError as err:
                _LOGGER.warning(
                    "Dropping layout %s (%s): invalid save code: %s",
                    layout_id,
                    layout.name,
                    err,
                )
                layouts.pop(layout_id, None)
                continue

            if result.original_version == CURRENT_VERSION:
                continue
            layout.original_version = layout.original_version or result.original_version
            layout.save_code = result.code
            _LOGGER.info(
                "Upgraded layout %s from %s to %s",
                layout_id,
                result.original_version,
                CURRENT_VERSION,
            )
