"""Service schemas for Garden Tracker."""

from __future__ import annotations

import voluptuous as vol
from homeassistant.helpers import config_validation as cv

# Layout services
IMPORT_LAYOUT_SCHEMA = vol.Schema(
    {
        vol.Required("layout"): cv.string,
        vol.Required("name"): cv.string,
        vol.Optional("notes", default=""): cv.string,
        vol.Optional("tags", default=[]): vol.All(cv.ensure_list, [cv.string]),
    },
)

REMOVE_LAYOUT_SCHEMA = vol.Schema(
    {
        vol.Required("layout_id"): cv.string,
    },
)

EXPORT_LAYOUT_SCHEMA = vol.Schema(
    {
        vol.Required("layout_id"): cv.string,
    },
)

# Watering services
WATER_TILE_SCHEMA = vol.Schema(
    {
        vol.Required("layout_id"): cv.string,
        vol.Required("row"): cv.positive_int,
        vol.Required("col"): cv.positive_int,
        vol.Optional("watered"): cv.boolean,
    },
)

WATER_CROP_SCHEMA = vol.Schema(
    {
        vol.Required("layout_id"): cv.string,
        vol.Required("crop"): cv.string,
        vol.Optional("watered", default=True): cv.boolean,
    },
)

WATER_ALL_SCHEMA = vol.Schema(
    {
        vol.Required("layout_id"): cv.string,
        vol.Optional("watered", default=True): cv.boolean,
    },
)

RESET_WATERING_SCHEMA = vol.Schema(
    {
        vol.Optional("layout_id"): cv.string,
    },
)
