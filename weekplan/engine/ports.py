"""Interfaces to the collaborators around the placement engine.

The engine notifies a renderer about event and backlog changes, reports
user-facing messages, and hands full-state snapshots to a persistence port.
None of these are allowed to fail a committed mutation.
"""

import logging
from typing import List, Optional, Protocol

from weekplan.models.event import Event, Todo

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Draws the grid. Stateless with respect to the engine."""

    def event_placed(self, event: Event) -> None: ...

    def event_updated(self, event: Event) -> None: ...

    def event_removed(self, event: Event) -> None: ...

    def event_preview(self, event: Event) -> None: ...

    def highlight(self, day: int, start_slot: int, slots: int, valid: bool) -> None: ...

    def clear_highlight(self) -> None: ...

    def backlog_changed(self, todos: List[Todo]) -> None: ...

    def layout_changed(self, slot_height: float) -> None: ...


class UserMessages(Protocol):
    """User-visible messages."""

    def warn(self, message: str) -> None:
        """Non-blocking warning banner."""

    def alert(self, message: str) -> None:
        """Message acknowledging a rejected user action."""


class PersistencePort(Protocol):
    """Stores and retrieves full-state snapshots (wire dicts).

    `save` is fire-and-forget and never raises; `load` returns None when
    nothing usable is stored.
    """

    def save(self, snapshot: dict) -> None: ...

    def load(self) -> Optional[dict]: ...


class NullRenderer:
    """Renderer that draws nothing (headless use and tests)."""

    def event_placed(self, event: Event) -> None:
        pass

    def event_updated(self, event: Event) -> None:
        pass

    def event_removed(self, event: Event) -> None:
        pass

    def event_preview(self, event: Event) -> None:
        pass

    def highlight(self, day: int, start_slot: int, slots: int, valid: bool) -> None:
        pass

    def clear_highlight(self) -> None:
        pass

    def backlog_changed(self, todos: List[Todo]) -> None:
        pass

    def layout_changed(self, slot_height: float) -> None:
        pass


class LoggingMessages:
    """UserMessages that writes to the log."""

    def warn(self, message: str) -> None:
        logger.warning(message)

    def alert(self, message: str) -> None:
        logger.info(message)


class MemoryPersistence:
    """PersistencePort keeping the last saved snapshot in memory."""

    def __init__(self, snapshot: Optional[dict] = None):
        self.snapshot = snapshot
        self.save_count = 0

    def save(self, snapshot: dict) -> None:
        self.snapshot = snapshot
        self.save_count += 1

    def load(self) -> Optional[dict]:
        return self.snapshot
