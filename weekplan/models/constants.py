"""Constants for weekplan.

This module centralizes the grid dimensions and default values used throughout the application.
"""

# Grid window (minutes since midnight)
START_MIN = 8 * 60  # 08:00
END_MIN = 22 * 60  # 22:00
SLOT_MIN = 10  # 10-minute slots
ROWS = (END_MIN - START_MIN) // SLOT_MIN
DAYS = 7

# Layout
TIME_COLUMN_PX = 60
BLOCK_INSET_PX = 2
DEFAULT_SLOT_HEIGHT = 28
MIN_SLOT_HEIGHT = 12
MAX_SLOT_HEIGHT = 80

# Snapshot wire format
SNAPSHOT_VERSION = 1

# Form defaults
DEFAULT_TODO_DURATION_MIN = 60
DEFAULT_COURSE_DURATION_MIN = 90
DEFAULT_COURSE_START = "10:00"
COURSE_FALLBACK_DURATION_MIN = 60  # blank or zero course duration

# Backlog seeded on first run (no stored snapshot)
DEFAULT_TODOS = [
    ("Write report: research methods", 90),
    ("Reply to email", 30),
    ("Programming assignment Lab1", 120),
]
