"""Service handlers for Garden Tracker."""

from ..service_schemas import (
    EXPORT_LAYOUT_SCHEMA,
    IMPORT_LAYOUT_SCHEMA,
    REMOVE_LAYOUT_SCHEMA,
    RESET_WATERING_SCHEMA,
    WATER_ALL_SCHEMA,
    WATER_CROP_SCHEMA,
    WATER_TILE_SCHEMA,
)
from . import garden, watering

__all__ = [
    "EXPORT_LAYOUT_SCHEMA",
    "IMPORT_LAYOUT_SCHEMA",
    "REMOVE_LAYOUT_SCHEMA",
    "RESET_WATERING_SCHEMA",
    "WATER_ALL_SCHEMA",
    "WATER_CROP_SCHEMA",
    "WATER_TILE_SCHEMA",
    "garden",
    "watering",
]
