"""Tests for the GardenValidator."""

from unittest.mock import MagicMock

import pytest

from custom_components.garden_tracker.codec import decode
from custom_components.garden_tracker.garden_validator import GardenValidator


@pytest.fixture
def validator() -> GardenValidator:
    """Fixture for a validator over a coordinator with one layout."""
    coordinator = MagicMock()
    coordinator.layouts = {"main": MagicMock()}
    return GardenValidator(coordinator)


@pytest.fixture
def garden():
    """A 6x6 garden whose lower right plot is inactive."""
    return decode("v0.4_D-11-10_CR-TTTN")


def test_validate_layout_exists(validator: GardenValidator):
    """Unknown layout ids are rejected."""
    validator.validate_layout_exists("main")
    with pytest.raises(ValueError, match="Layout missing does not exist"):
        validator.validate_layout_exists("missing")


@pytest.mark.parametrize(
    "row,col,message",
    [
        (-1, 0, "Row -1 is outside garden bounds \\(0-5\\)"),
        (6, 0, "Row 6 is outside garden bounds \\(0-5\\)"),
        (0, 6, "Column 6 is outside garden bounds \\(0-5\\)"),
    ],
)
def test_validate_tile_bounds(validator, garden, row, col, message):
    """Positions outside the grid are rejected."""
    with pytest.raises(ValueError, match=message):
        validator.validate_tile_bounds(garden, row, col)


def test_validate_tile_bounds_accepts_corners(validator, garden):
    """The first and last tiles are in bounds."""
    validator.validate_tile_bounds(garden, 0, 0)
    validator.validate_tile_bounds(garden, 5, 5)


def test_validate_tile_planted(validator, garden):
    """Only planted tiles of active plots can be watered."""
    validator.validate_tile_planted(garden, 0, 2)

    with pytest.raises(ValueError, match="has no crop planted"):
        validator.validate_tile_planted(garden, 0, 3)
    with pytest.raises(ValueError, match="not in an active plot"):
        validator.validate_tile_planted(garden, 4, 4)


def test_validate_crop_planted(validator, garden):
    """Crops missing from the garden are rejected with the planted list."""
    validator.validate_crop_planted(garden, "Tomato")
    with pytest.raises(ValueError, match=r"Crop Rice is not planted \(planted: Tomato\)"):
        validator.validate_crop_planted(garden, "Rice")
