"""Placement validation.

`can_place` is the single overlap-prevention predicate: every commit path
(backlog drop, move, course placement, resize) calls it before mutating
the occupancy matrix or the event registry.
"""

from typing import Optional

from weekplan.engine.occupancy import OccupancyMatrix, SlotRange


def can_place(
    occupancy: OccupancyMatrix,
    day: int,
    start: int,
    length: int,
    ignore: Optional[SlotRange] = None,
) -> bool:
    """Decide whether a (day, start, length) range may be committed.

    Args:
        occupancy: Current occupancy matrix (read only)
        day: Day column
        start: First slot of the candidate range
        length: Number of slots
        ignore: Range treated as free (the block's own footprint during move/resize)

    Returns:
        False on any out-of-range index or any occupied slot outside `ignore`, True otherwise
    """
    for value in (day, start, length):
        if not isinstance(value, int) or isinstance(value, bool):
            return False
    return occupancy.is_free(day, start, length, ignore)
