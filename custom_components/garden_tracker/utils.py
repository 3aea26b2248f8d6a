"""Utility functions for timestamps, Palia time and grid preview sizing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone

from dateutil import parser

TimestampInput = str | int | float | datetime | date | None

# Palia's clock is anchored at Sunday PST; one in-game day lasts one real hour.
PST_UTC_SUNDAY_OFFSET = 60 * 60 * (8 + 3 * 24)
PALIA_SPEEDUP = 24
SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY
WEEK_START_OFFSET = 21 * 60 * 60

# Grid preview sizing per screen class: container caps and tile size limits
SCREEN_PRESETS: dict[str, dict[str, float]] = {
    "sm": {
        "padding": 32,
        "width_cap": 350,
        "height_ratio": 0.4,
        "height_cap": 300,
        "max_tile": 32,
        "min_tile": 12,
        "tooltip_min": 20,
    },
    "md": {
        "padding": 64,
        "width_cap": 600,
        "height_ratio": 0.5,
        "height_cap": 450,
        "max_tile": 40,
        "min_tile": 16,
        "tooltip_min": 24,
    },
    "lg": {
        "width": 800,
        "height": 600,
        "max_tile": 48,
        "min_tile": 16,
        "tooltip_min": 24,
    },
}


def parse_timestamp(value: TimestampInput) -> datetime | None:
    """Parse various timestamp inputs into a datetime object.

    Integers and floats are epoch milliseconds, the unit the browser
    tracker stored.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return parser.isoparse(value)
        except (ValueError, TypeError):
            return None
    return None


def format_timestamp(value: TimestampInput) -> str | None:
    """Format a timestamp input as an ISO string."""
    dt = parse_timestamp(value)
    if dt is None:
        return None
    return dt.isoformat()


@dataclass
class PaliaTime:
    """A moment on the in-game clock."""

    hours: int
    minutes: int
    day_of_week: int
    cycle_of_day: int
    cycle_id: str
    week_id: str

    @property
    def clock(self) -> str:
        """Return the time as HH:MM."""
        return f"{self.hours:02d}:{self.minutes:02d}"

    @property
    def day_text(self) -> str:
        """Return the label used by the game, e.g. 'Day 3 Cycle 07'."""
        return f"Day {self.day_of_week + 1} Cycle {self.cycle_of_day + 1:02d}"

    @property
    def part_of_day(self) -> str:
        """Return Night, Evening, Day or Morning."""
        if self.hours >= 21 or self.hours < 3:
            return "Night"
        if self.hours >= 18:
            return "Evening"
        if self.hours >= 6:
            return "Day"
        return "Morning"


def _pst_seconds(now: datetime) -> float:
    return now.timestamp() - PST_UTC_SUNDAY_OFFSET


def palia_time(now: datetime) -> PaliaTime:
    """Convert a real-world moment to Palia time."""
    real_pst = _pst_seconds(now)
    time_of_day = (real_pst * PALIA_SPEEDUP) % SECONDS_PER_DAY
    total_minutes = math.floor(time_of_day / 60)

    cycle_this_week = ((real_pst - WEEK_START_OFFSET) % SECONDS_PER_WEEK) / 3600
    week_number = math.floor((real_pst - WEEK_START_OFFSET) / SECONDS_PER_WEEK)

    return PaliaTime(
        hours=total_minutes // 60,
        minutes=total_minutes % 60,
        day_of_week=math.floor(cycle_this_week / 24),
        cycle_of_day=math.floor(cycle_this_week) % 24,
        cycle_id=f"cycle-{math.floor(real_pst / 3600)}",
        week_id=f"week-{week_number}",
    )


def watering_day_id(now: datetime, reset_hour: int) -> str:
    """Return an id that changes each time the Palia clock passes reset_hour.

    Watering resets once per in-game day, so the id advances every real
    hour at the minute the in-game clock reaches ``reset_hour``.
    """
    palia_seconds = _pst_seconds(now) * PALIA_SPEEDUP - reset_hour * 3600
    return f"day-{math.floor(palia_seconds / SECONDS_PER_DAY)}"


@dataclass
class TileMetrics:
    """Size of a grid preview."""

    tile_size: int
    container_width: float
    container_height: float
    grid_width: int
    grid_height: int
    show_tooltips: bool


def compute_tile_metrics(
    rows: int,
    columns: int,
    screen_size: str = "lg",
    max_width: float | None = None,
    max_height: float | None = None,
    viewport_width: float = 1280,
    viewport_height: float = 800,
) -> TileMetrics:
    """Compute the tile size that fits a rows x columns grid on screen.

    Args:
        rows: Tile rows of the garden.
        columns: Tile columns of the garden.
        screen_size: Screen class, one of 'sm', 'md' or 'lg'.
        max_width: Explicit container width; used with max_height.
        max_height: Explicit container height; used with max_width.
        viewport_width: Window width, for the 'sm' and 'md' classes.
        viewport_height: Window height, for the 'sm' and 'md' classes.

    Returns:
        The tile size clamped to the screen class limits, and the
        resulting container and grid sizes.
    """
    preset = SCREEN_PRESETS.get(screen_size, SCREEN_PRESETS["lg"])

    if max_width and max_height:
        width, height = max_width, max_height
    elif "width" in preset:
        width, height = preset["width"], preset["height"]
    else:
        width = min(viewport_width - preset["padding"], preset["width_cap"])
        height = min(viewport_height * preset["height_ratio"], preset["height_cap"])

    optimal = min(
        math.floor(width / max(columns, 1)),
        math.floor(height / max(rows, 1)),
        int(preset["max_tile"]),
    )
    tile_size = max(optimal, int(preset["min_tile"]))

    return TileMetrics(
        tile_size=tile_size,
        container_width=width,
        container_height=height,
        grid_width=columns * tile_size,
        grid_height=rows * tile_size,
        show_tooltips=tile_size >= preset["tooltip_min"],
    )
