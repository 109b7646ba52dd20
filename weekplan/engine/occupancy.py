"""Occupancy matrix for the weekly grid.

A DAYS x ROWS boolean matrix recording which slots are filled by committed
events. Pure state: callers (ScheduleStore) keep it in sync with the event
registry.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from weekplan.models.constants import DAYS, ROWS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotRange:
    """Half-open slot range [start, end) on one day."""

    day: int
    start: int
    end: int

    @classmethod
    def of(cls, day: int, start: int, length: int) -> "SlotRange":
        return cls(day=day, start=start, end=start + length)

    @property
    def length(self) -> int:
        return self.end - self.start

    def covers(self, day: int, slot: int) -> bool:
        return day == self.day and self.start <= slot < self.end


class OccupancyMatrix:
    """Boolean slot matrix with range-level read and write operations."""

    def __init__(self, days: int = DAYS, rows: int = ROWS):
        self.days = days
        self.rows = rows
        self._cells: List[List[bool]] = [[False] * rows for _ in range(days)]

    def in_bounds(self, day: int, start: int, length: int) -> bool:
        return 0 <= day < self.days and start >= 0 and length >= 1 and start + length <= self.rows

    def is_free(self, day: int, start: int, length: int, ignore: Optional[SlotRange] = None) -> bool:
        """True iff every slot in the range is unoccupied.

        Slots covered by `ignore` count as free. Out-of-bounds ranges are never free.
        """
        if not self.in_bounds(day, start, length):
            return False
        row = self._cells[day]
        for slot in range(start, start + length):
            if row[slot] and not (ignore is not None and ignore.covers(day, slot)):
                return False
        return True

    def apply(self, day: int, start: int, length: int, value: bool) -> None:
        """Set every slot in the range to `value`.

        Callers validate first; an out-of-bounds range raises before any slot is touched.
        """
        if not self.in_bounds(day, start, length):
            raise ValueError(f"Slot range out of bounds: day={day} start={start} length={length}")
        row = self._cells[day]
        for slot in range(start, start + length):
            row[slot] = value

    def clear(self) -> None:
        for row in self._cells:
            for slot in range(self.rows):
                row[slot] = False

    def occupied(self) -> Set[Tuple[int, int]]:
        """All occupied (day, slot) pairs."""
        return {
            (day, slot)
            for day, row in enumerate(self._cells)
            for slot, filled in enumerate(row)
            if filled
        }
