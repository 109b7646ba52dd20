"""Time/slot conversions for the weekly grid.

`range_label` and `row_labels` give the text a renderer shows on event
blocks and down the time column.
"""

import math

from weekplan.models.constants import ROWS, SLOT_MIN, START_MIN


def clamp(value, low, high):
    return max(low, min(high, value))


def minutes_to_label(minutes_from_midnight: int) -> str:
    """Format minutes since midnight as 'HH:MM'."""
    hours, minutes = divmod(int(minutes_from_midnight), 60)
    return f"{hours:02d}:{minutes:02d}"


def duration_to_slots(duration_min: int) -> int:
    """Number of slots needed to hold a duration (rounded up)."""
    return math.ceil(duration_min / SLOT_MIN)


def time_to_slot(hhmm: str) -> int:
    """Convert 'HH:MM' to the enclosing slot index, clamped into the grid.

    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    slot = (h * 60 + m - START_MIN) // SLOT_MIN
    return clamp(slot, 0, ROWS - 1)


def slot_start_minutes(slot: int) -> int:
    return START_MIN + slot * SLOT_MIN


def range_label(start_slot: int, slots: int) -> str:
    """'HH:MM - HH:MM' label for a slot range."""
    start = slot_start_minutes(start_slot)
    end = start + slots * SLOT_MIN
    return f"{minutes_to_label(start)} - {minutes_to_label(end)}"


def row_labels() -> list:
    """Labels for the time column: 'HH:MM' on whole hours, blank otherwise."""
    slots_per_hour = 60 // SLOT_MIN
    return [
        minutes_to_label(slot_start_minutes(row)) if row % slots_per_hour == 0 else ""
        for row in range(ROWS)
    ]


