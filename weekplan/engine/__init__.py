"""Slot-occupancy and placement engine for weekplan."""

from weekplan.engine.occupancy import OccupancyMatrix, SlotRange
from weekplan.engine.placement import can_place
from weekplan.engine.registry import EventRegistry
from weekplan.engine.geometry import GridGeometry, LayoutMetrics, SlotCoordinate, Rect
from weekplan.engine.store import ScheduleStore
from weekplan.engine.interaction import DragController, ResizeController, DragPayload, DragSource, Highlight

__all__ = [
    "OccupancyMatrix",
    "SlotRange",
    "can_place",
    "EventRegistry",
    "GridGeometry",
    "LayoutMetrics",
    "SlotCoordinate",
    "Rect",
    "ScheduleStore",
    "DragController",
    "ResizeController",
    "DragPayload",
    "DragSource",
    "Highlight",
]
