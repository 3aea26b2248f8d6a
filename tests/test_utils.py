"""Tests for the utility functions of the Garden Tracker integration.

Covers timestamp parsing, the Palia clock, the watering day id used for
daily resets, and grid preview sizing.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from custom_components.garden_tracker.utils import (
    PST_UTC_SUNDAY_OFFSET,
    compute_tile_metrics,
    format_timestamp,
    palia_time,
    parse_timestamp,
    watering_day_id,
)

PST_EPOCH = datetime.fromtimestamp(PST_UTC_SUNDAY_OFFSET, tz=timezone.utc)


# ----------------------------
# parse_timestamp tests
# ----------------------------
@pytest.mark.parametrize(
    "input_value,expected",
    [
        (None, None),
        (True, None),
        ("garbage", None),
        (1700000000000, datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)),
        ("2024-05-01T10:00:00", datetime(2024, 5, 1, 10, 0)),
        (date(2024, 5, 1), datetime(2024, 5, 1)),
    ],
)
def test_parse_timestamp(input_value, expected):
    """Test parse_timestamp with the input types the stores may hold."""
    assert parse_timestamp(input_value) == expected


def test_format_timestamp():
    """Epoch milliseconds are formatted as ISO strings."""
    assert format_timestamp(1700000000000) == "2023-11-14T22:13:20+00:00"
    assert format_timestamp(None) is None


# ----------------------------
# Palia clock tests
# ----------------------------
def test_palia_time_at_week_anchor():
    """Sunday midnight PST is midnight in game."""
    now = palia_time(PST_EPOCH)
    assert now.clock == "00:00"
    assert now.part_of_day == "Night"
    assert now.day_of_week == 6
    assert now.cycle_of_day == 3
    assert now.cycle_id == "cycle-0"
    assert now.week_id == "week--1"
    assert now.day_text == "Day 7 Cycle 04"


@pytest.mark.parametrize(
    "seconds,clock,part",
    [
        (150, "01:00", "Night"),
        (450, "03:00", "Morning"),
        (900, "06:00", "Day"),
        (2700, "18:00", "Evening"),
        (3150, "21:00", "Night"),
    ],
)
def test_palia_time_runs_24_times_faster(seconds, clock, part):
    """One real minute is 24 game minutes."""
    now = palia_time(PST_EPOCH + timedelta(seconds=seconds))
    assert now.clock == clock
    assert now.part_of_day == part


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "day--1"), (899, "day--1"), (900, "day-0"), (4499, "day-0"), (4500, "day-1")],
)
def test_watering_day_id(seconds, expected):
    """The id advances when the game clock passes the reset hour."""
    assert watering_day_id(PST_EPOCH + timedelta(seconds=seconds), 6) == expected


def test_watering_day_id_changes_every_real_hour():
    """Each real hour holds exactly one in-game day."""
    start = PST_EPOCH + timedelta(minutes=20)
    ids = {watering_day_id(start + timedelta(hours=h), 0) for h in range(5)}
    assert len(ids) == 5


# ----------------------------
# compute_tile_metrics tests
# ----------------------------
def test_tile_metrics_large_screen():
    """A 9x9 garden uses the largest tile on a desktop."""
    metrics = compute_tile_metrics(9, 9)
    assert metrics.tile_size == 48
    assert metrics.grid_width == 432
    assert metrics.grid_height == 432
    assert metrics.show_tooltips is True


def test_tile_metrics_small_screen():
    """Phones shrink the tiles to the viewport."""
    metrics = compute_tile_metrics(
        9, 9, "sm", viewport_width=375, viewport_height=667
    )
    assert metrics.tile_size == 29
    assert metrics.show_tooltips is True


def test_tile_metrics_minimum_tile():
    """Tiles never shrink below the screen class minimum."""
    metrics = compute_tile_metrics(
        9, 9, "sm", viewport_width=200, viewport_height=200
    )
    assert metrics.tile_size == 12
    assert metrics.show_tooltips is False


def test_tile_metrics_explicit_container():
    """An explicit container overrides the preset."""
    assert compute_tile_metrics(9, 9, "lg", max_width=90, max_height=90).tile_size == 16


def test_tile_metrics_medium_screen():
    """The medium class caps the tile at 40 pixels."""
    assert compute_tile_metrics(9, 9, "md").tile_size == 40


def test_tile_metrics_unknown_class():
    """Unknown screen classes fall back to the large preset."""
    assert compute_tile_metrics(9, 9, "xl") == compute_tile_metrics(9, 9, "lg")


def test_tile_metrics_empty_grid():
    """An empty grid has no size."""
    metrics = compute_tile_metrics(0, 0)
    assert metrics.tile_size == 48
    assert metrics.grid_width == 0
