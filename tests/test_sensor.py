"""Tests for the Garden Tracker sensors."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant

from custom_components.garden_tracker.const import DOMAIN
from custom_components.garden_tracker.coordinator import GardenCoordinator
from custom_components.garden_tracker.sensor import (
    GardenOverviewSensor,
    PaliaClockSensor,
    WateringProgressSensor,
    async_sync_layout_entities,
    layout_device_info,
)

CODE = "v0.4_D-111-111-111_CR-TRTPWPTRT-TRT-PWP"


@pytest.fixture
async def coordinator(hass: HomeAssistant, mock_store) -> GardenCoordinator:
    """A coordinator with one layout."""
    coordinator = GardenCoordinator(hass)
    await coordinator.async_import_layout(
        CODE, "Main", notes="by the river", tags=["crops"], layout_id="main"
    )
    return coordinator


def test_layout_device_info():
    """Each layout is its own device."""
    info = layout_device_info("main", "Main")
    assert info["identifiers"] == {(DOMAIN, "main")}
    assert info["name"] == "Main"


async def test_overview_sensor(coordinator: GardenCoordinator):
    """The overview state counts planted tiles."""
    sensor = GardenOverviewSensor(coordinator, "main")

    assert sensor.unique_id == f"{DOMAIN}_main"
    assert sensor.name == "Main"
    assert sensor.native_value == 15

    attrs = sensor.extra_state_attributes
    assert attrs["layout_id"] == "main"
    assert attrs["rows"] == 9
    assert attrs["columns"] == 9
    assert attrs["plot_count"] == 9
    assert attrs["dominant_crops"] == ["Tomato", "Potato", "Rice"]
    assert attrs["description"].startswith("9×9 garden with 9 active plots")
    assert attrs["crop_breakdown"]["Tomato"]["total"] == 6
    assert attrs["grid"][0][0] == {
        "crop": "Tomato",
        "fertilizer": None,
        "active": True,
        "needs_water": True,
    }
    assert attrs["save_code"] == CODE
    assert attrs["planner_url"].endswith(CODE)
    assert attrs["notes"] == "by the river"
    assert attrs["tags"] == ["crops"]
    assert attrs["tile_size"] == 48
    assert attrs["show_tooltips"] is True


async def test_overview_sensor_unavailable_after_removal(
    coordinator: GardenCoordinator,
):
    """Sensors of removed layouts become unavailable."""
    sensor = GardenOverviewSensor(coordinator, "main")
    assert sensor.available is True

    await coordinator.async_remove_layout("main")
    assert sensor.available is False


async def test_watering_progress_sensor(coordinator: GardenCoordinator):
    """Progress rises as tiles are watered."""
    sensor = WateringProgressSensor(coordinator, "main")

    assert sensor.unique_id == f"{DOMAIN}_main_watering"
    assert sensor.native_unit_of_measurement == PERCENTAGE
    assert sensor.native_value == 0

    await coordinator.async_water_crop("main", "Tomato", True)
    assert sensor.native_value == 40.0

    attrs = sensor.extra_state_attributes
    assert attrs["total_plants"] == 15
    assert attrs["plants_needing_water"] == 9
    assert attrs["crops"]["Tomato"] == {"total": 6, "needing_water": 0, "watered": 6}
    assert attrs["last_reset_cycle"] == coordinator.layouts["main"].last_reset_cycle


async def test_watering_progress_empty_garden(coordinator: GardenCoordinator):
    """A garden without plants is fully watered."""
    await coordinator.async_import_layout(
        "v0.4_D-000-000-000_CR-", "Empty", layout_id="empty"
    )
    assert WateringProgressSensor(coordinator, "empty").native_value == 100


async def test_palia_clock_sensor(coordinator: GardenCoordinator):
    """The clock sensor reports HH:MM and the watering day."""
    sensor = PaliaClockSensor(coordinator)

    assert sensor.unique_id == f"{DOMAIN}_palia_time"
    hours, minutes = sensor.native_value.split(":")
    assert 0 <= int(hours) < 24
    assert 0 <= int(minutes) < 60

    attrs = sensor.extra_state_attributes
    assert attrs["reset_hour"] == 6
    assert attrs["watering_day"].startswith("day-")
    assert attrs["part_of_day"] in ("Night", "Evening", "Day", "Morning")


async def test_sync_layout_entities(hass: HomeAssistant, coordinator):
    """New layouts get entities and removed layouts lose them."""
    stale = MagicMock()
    stale.registry_entry = None
    stale.async_remove = AsyncMock()
    layout_entities = {"main": [MagicMock()], "gone": [stale]}
    add_entities = MagicMock()

    await coordinator.async_import_layout("v0.4_D-1_CR-T", "Second", layout_id="second")
    await async_sync_layout_entities(
        hass,
        coordinator,
        layout_entities,
        add_entities,
        lambda coord, layout_id: [GardenOverviewSensor(coord, layout_id)],
    )

    add_entities.assert_called_once()
    added = add_entities.call_args[0][0]
    assert [entity.layout_id for entity in added] == ["second"]
    assert set(layout_entities) == {"main", "second"}
    stale.async_remove.assert_awaited_once()
