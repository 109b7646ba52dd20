"""Drag and resize interaction state machines.

Each controller holds at most one in-flight gesture. `begin` is refused
while a gesture is active, and `update`/`commit` without an active gesture
are ignored (they return None) so stray pointer events cannot mutate state.
Live feedback never touches the occupancy matrix or the registry; only
`commit` does, through ScheduleStore.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from weekplan.engine.geometry import GridGeometry
from weekplan.engine.occupancy import SlotRange
from weekplan.engine.store import ScheduleStore
from weekplan.engine.timeslots import duration_to_slots
from weekplan.models.event import Event, EventKind, Todo

logger = logging.getLogger(__name__)


class DragSource(str, Enum):
    """Where the dragged block came from."""
    BACKLOG = "backlog"
    EVENT = "event"


@dataclass(frozen=True)
class DragPayload:
    """The block currently being dragged."""

    title: str
    duration_min: int
    slots: int
    source: DragSource
    event_id: Optional[int] = None
    from_range: Optional[SlotRange] = None  # ignored while validating drop targets


@dataclass(frozen=True)
class Highlight:
    """Candidate footprint under the pointer."""

    day: int
    start: int
    slots: int
    valid: bool


class DragController:
    """Idle -> Dragging -> Idle, for backlog items and placed tasks."""

    def __init__(self, store: ScheduleStore, geometry: GridGeometry):
        self.store = store
        self.geometry = geometry
        self._payload: Optional[DragPayload] = None

    @property
    def active(self) -> bool:
        return self._payload is not None

    @property
    def payload(self) -> Optional[DragPayload]:
        return self._payload

    def begin_from_backlog(self, title: str, duration_min: int) -> bool:
        """Start dragging a backlog item."""
        if self.active:
            logger.debug("Ignoring drag start: a drag is already in flight")
            return False
        if duration_min <= 0:
            return False
        self._payload = DragPayload(
            title=title,
            duration_min=duration_min,
            slots=duration_to_slots(duration_min),
            source=DragSource.BACKLOG,
        )
        return True

    def begin_from_event(self, event_id: int) -> bool:
        """Start dragging a placed task. Courses are not draggable."""
        if self.active:
            logger.debug("Ignoring drag start: a drag is already in flight")
            return False
        event = self.store.find_event(event_id)
        if event is None or event.type != EventKind.TASK:
            return False
        self._payload = DragPayload(
            title=event.title,
            duration_min=event.duration_min,
            slots=event.slots,
            source=DragSource.EVENT,
            event_id=event.id,
            from_range=self.store.footprint(event),
        )
        return True

    def update(self, x: float, y: float) -> Optional[Highlight]:
        """Drag-over the grid: highlight the candidate footprint. Advisory only."""
        if self._payload is None:
            return None
        renderer = self.store.renderer
        renderer.clear_highlight()
        target = self.geometry.indices_from_point(x, y)
        if target is None:
            return None
        payload = self._payload
        valid = self.store.can_place(target.day, target.slot, payload.slots, payload.from_range)
        renderer.highlight(target.day, target.slot, payload.slots, valid)
        return Highlight(day=target.day, start=target.slot, slots=payload.slots, valid=valid)

    def leave(self) -> None:
        """Pointer left the grid."""
        self.store.renderer.clear_highlight()

    def commit(self, x: float, y: float) -> Optional[Event]:
        """Drop on the grid. Returns the placed/moved event, or None if rejected."""
        if self._payload is None:
            return None
        payload = self._finish()
        target = self.geometry.indices_from_point(x, y)
        if target is None:
            return None
        if not self.store.can_place(target.day, target.slot, payload.slots, payload.from_range):
            logger.debug(f"Drop of '{payload.title}' rejected at day={target.day} slot={target.slot}")
            return None
        if payload.source == DragSource.EVENT:
            return self.store.move_event(payload.event_id, target.day, target.slot)
        return self.store.schedule_todo(payload.title, payload.duration_min, target.day, target.slot)

    def accepts_backlog_drop(self) -> bool:
        """Only blocks dragged off the grid can be dropped on the backlog."""
        return self._payload is not None and self._payload.source == DragSource.EVENT

    def commit_to_backlog(self) -> Optional[Todo]:
        """Drop on the backlog: unschedule the dragged task."""
        if not self.accepts_backlog_drop():
            return None
        payload = self._finish()
        return self.store.return_to_backlog(payload.event_id)

    def cancel(self) -> bool:
        """Drag ended without a drop. Returns True if a drag was discarded."""
        was_active = self._payload is not None
        self._finish()
        return was_active

    def _finish(self) -> Optional[DragPayload]:
        payload = self._payload
        self._payload = None
        self.store.renderer.clear_highlight()
        return payload


@dataclass
class ResizeOperation:
    """An in-flight resize of one task."""

    event_id: int
    day: int
    start: int
    original_slots: int
    candidate_slots: int

    @property
    def ignore_range(self) -> SlotRange:
        return SlotRange.of(self.day, self.start, self.original_slots)


class ResizeController:
    """Idle -> Resizing -> Idle, for placed tasks."""

    def __init__(self, store: ScheduleStore, geometry: GridGeometry):
        self.store = store
        self.geometry = geometry
        self._operation: Optional[ResizeOperation] = None

    @property
    def active(self) -> bool:
        return self._operation is not None

    @property
    def operation(self) -> Optional[ResizeOperation]:
        return self._operation

    def begin(self, event_id: int) -> bool:
        """Press on a task's resize handle."""
        if self.active:
            logger.debug("Ignoring resize start: a resize is already in flight")
            return False
        event = self.store.find_event(event_id)
        if event is None or event.type != EventKind.TASK:
            return False
        self._operation = ResizeOperation(
            event_id=event.id,
            day=event.day,
            start=event.start_slot,
            original_slots=event.slots,
            candidate_slots=event.slots,
        )
        return True

    def update(self, y: float) -> Optional[int]:
        """Pointer moved to height `y`. Returns the current (last valid) candidate length."""
        op = self._operation
        if op is None:
            return None
        slots = self.geometry.slots_from_pointer(op.day, op.start, y)
        if slots is not None:
            self.propose(slots)
        return op.candidate_slots

    def propose(self, slots: int) -> bool:
        """Offer a candidate length; kept only if valid with the original footprint ignored."""
        op = self._operation
        if op is None:
            return False
        slots = max(1, slots)
        if not self.store.can_place(op.day, op.start, slots, op.ignore_range):
            return False
        op.candidate_slots = slots
        event = self.store.find_event(op.event_id)
        if event is not None:
            self.store.renderer.event_preview(event.model_copy(update={"slots": slots}))
        return True

    def commit(self) -> Optional[Event]:
        """Release: commit the last valid candidate length."""
        op = self._operation
        if op is None:
            return None
        self._operation = None
        return self.store.resize_event(op.event_id, op.candidate_slots)

    def cancel(self) -> bool:
        """Abandon the resize and redraw the committed event."""
        op = self._operation
        if op is None:
            return False
        self._operation = None
        event = self.store.find_event(op.event_id)
        if event is not None:
            self.store.renderer.event_updated(event)
        return True
