"""Grid geometry: pixel coordinates <-> (day, slot) indices.

Layout metrics are read from a provider on every call because the grid
container may be resized or zoomed between calls.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from weekplan.models.constants import BLOCK_INSET_PX, DAYS, ROWS, TIME_COLUMN_PX


@dataclass(frozen=True)
class LayoutMetrics:
    """Current layout of the grid container (pixels)."""

    origin_x: float  # left edge of the grid in pointer coordinates
    origin_y: float  # top edge of the grid in pointer coordinates
    client_width: float  # full grid width, time column included
    row_height: float
    time_column_width: float = TIME_COLUMN_PX

    @property
    def column_width(self) -> float:
        return (self.client_width - self.time_column_width) / DAYS


@dataclass(frozen=True)
class SlotCoordinate:
    day: int
    slot: int


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float


MetricsProvider = Callable[[], Optional[LayoutMetrics]]


class GridGeometry:
    """Maps between pointer positions and grid indices."""

    def __init__(self, metrics_provider: MetricsProvider, rows: int = ROWS):
        self._metrics_provider = metrics_provider
        self.rows = rows

    def metrics(self) -> Optional[LayoutMetrics]:
        """Current metrics, or None while the grid is not laid out."""
        metrics = self._metrics_provider()
        if metrics is None or metrics.column_width <= 0 or metrics.row_height <= 0:
            return None
        return metrics

    def indices_from_point(self, x: float, y: float) -> Optional[SlotCoordinate]:
        """Return the (day, slot) under a pointer, or None outside the interactive area."""
        metrics = self.metrics()
        if metrics is None:
            return None
        inner_x = x - metrics.origin_x - metrics.time_column_width
        if inner_x < 0:
            return None
        day = math.floor(inner_x / metrics.column_width)
        slot = math.floor((y - metrics.origin_y) / metrics.row_height)
        if day < 0 or day >= DAYS or slot < 0 or slot >= self.rows:
            return None
        return SlotCoordinate(day=day, slot=slot)

    def cell_rect(self, day: int, slot: int) -> Optional[Rect]:
        """Rectangle of one cell, relative to the grid's top-left corner."""
        metrics = self.metrics()
        if metrics is None:
            return None
        return Rect(
            left=metrics.time_column_width + day * metrics.column_width,
            top=slot * metrics.row_height,
            width=metrics.column_width,
            height=metrics.row_height,
        )

    def block_rect(self, day: int, start_slot: int, slots: int) -> Optional[Rect]:
        """Rectangle of a placed block, inset from its cell edges."""
        cell = self.cell_rect(day, start_slot)
        if cell is None:
            return None
        return Rect(
            left=cell.left + BLOCK_INSET_PX,
            top=cell.top + BLOCK_INSET_PX,
            width=cell.width - 2 * BLOCK_INSET_PX,
            height=cell.height * slots - 2 * BLOCK_INSET_PX,
        )

    def slots_from_pointer(self, day: int, start_slot: int, y: float) -> Optional[int]:
        """Block length implied by dragging its bottom edge to pointer height `y`.

        Measured from the block's top edge, rounded to the nearest row, at least one slot.
        """
        metrics = self.metrics()
        block = self.block_rect(day, start_slot, 1)
        if metrics is None or block is None:
            return None
        delta_y = y - (metrics.origin_y + block.top)
        return max(1, math.floor(delta_y / metrics.row_height + 0.5))
