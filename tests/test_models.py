"""Tests for the Garden Tracker data models."""

from custom_components.garden_tracker.codec.models import CropSummary, GridTile
from custom_components.garden_tracker.models import SavedLayout


def test_grid_tile_to_dict():
    """Tiles serialize with snake_case keys."""
    tile = GridTile(0, 3, "Rice", "Speedy Gro", True, False)
    assert tile.to_dict() == {
        "row": 0,
        "col": 3,
        "crop_type": "Rice",
        "fertilizer_type": "Speedy Gro",
        "is_active": True,
        "needs_water": False,
    }


def test_saved_layout_from_dict_migrates_keys():
    """Layouts stored with camelCase keys still load."""
    layout = SavedLayout.from_dict(
        {
            "id": "abc",
            "name": "Main",
            "saveCode": "v0.4_D-1_CR-T",
            "createdAt": "2024-01-01T00:00:00",
            "lastModified": "2024-01-02T00:00:00",
            "originalLayoutUrl": "https://example.com/?layout=v0.4_D-1_CR-T",
            "unknown": 1,
        }
    )
    assert layout.save_code == "v0.4_D-1_CR-T"
    assert layout.created_at == "2024-01-01T00:00:00"
    assert layout.last_modified == "2024-01-02T00:00:00"
    assert layout.source_url == "https://example.com/?layout=v0.4_D-1_CR-T"
    assert layout.tags == []
    assert layout.watered == []


def test_saved_layout_round_trip():
    """A stored layout loads back unchanged."""
    layout = SavedLayout(
        id="abc",
        name="Main",
        save_code="v0.4_D-1_CR-T",
        original_version="v0.2",
        notes="north field",
        tags=["rice"],
        watered=[[True, False, False]],
        last_reset_cycle="day-4",
    )
    assert SavedLayout.from_dict(layout.to_dict()) == layout


def test_crop_summary_defaults():
    """A new summary is empty."""
    summary = CropSummary()
    assert summary.to_dict() == {
        "total_plants": 0,
        "plants_needing_water": 0,
        "watering_percentage": 0,
        "crop_breakdown": {},
    }
