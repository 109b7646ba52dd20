"""Data models for weekplan."""

from weekplan.models.event import Event, EventKind, Todo
from weekplan.models.snapshot import Snapshot, UIState

__all__ = [
    "Event",
    "EventKind",
    "Todo",
    "Snapshot",
    "UIState",
]
