"""ScheduleStore: owned planner state and every committed mutation.

All changes to the occupancy matrix, the event registry and the backlog go
through this class so that the occupancy matrix always equals the union of
the footprints of the registered events. Each commit validates with
`can_place`, mutates in memory, notifies the renderer, then hands a full
snapshot to the persistence port.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from weekplan.engine.backup import MalformedBackupError, export_backup, parse_backup
from weekplan.engine.occupancy import OccupancyMatrix, SlotRange
from weekplan.engine.placement import can_place
from weekplan.engine.ports import (
    LoggingMessages,
    MemoryPersistence,
    NullRenderer,
    PersistencePort,
    Renderer,
    UserMessages,
)
from weekplan.engine.registry import EventRegistry
from weekplan.engine.timeslots import clamp, duration_to_slots, range_label, time_to_slot
from weekplan.models.constants import (
    COURSE_FALLBACK_DURATION_MIN,
    DEFAULT_COURSE_DURATION_MIN,
    DEFAULT_COURSE_START,
    DEFAULT_SLOT_HEIGHT,
    DEFAULT_TODOS,
    MAX_SLOT_HEIGHT,
    MIN_SLOT_HEIGHT,
    ROWS,
    SNAPSHOT_VERSION,
)
from weekplan.models.event import Event, EventKind, Todo
from weekplan.models.snapshot import Snapshot, UIState

logger = logging.getLogger(__name__)

PLACEMENT_CONFLICT_MESSAGE = "This time slot conflicts with an existing event or is out of range"
INVALID_TIME_MESSAGE = "Invalid start time"
IMPORT_FAILED_MESSAGE = "Import failed: invalid JSON format"


class ScheduleStore:
    """Planner state: occupancy matrix, event registry, backlog and UI preferences."""

    def __init__(
        self,
        persistence: Optional[PersistencePort] = None,
        renderer: Optional[Renderer] = None,
        messages: Optional[UserMessages] = None,
        rows: int = ROWS,
    ):
        self.occupancy = OccupancyMatrix(rows=rows)
        self.registry = EventRegistry()
        self.slot_height: float = DEFAULT_SLOT_HEIGHT
        self._todos: List[Todo] = []
        self._persistence = persistence if persistence is not None else MemoryPersistence()
        self._renderer = renderer if renderer is not None else NullRenderer()
        self._messages = messages if messages is not None else LoggingMessages()

    # Queries

    @property
    def events(self) -> List[Event]:
        return self.registry.events

    @property
    def todos(self) -> List[Todo]:
        return list(self._todos)

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def persistence(self) -> PersistencePort:
        return self._persistence

    def find_event(self, event_id: int) -> Optional[Event]:
        return self.registry.find_by_id(event_id)

    def can_place(self, day: int, start: int, length: int, ignore: Optional[SlotRange] = None) -> bool:
        return can_place(self.occupancy, day, start, length, ignore)

    @staticmethod
    def footprint(event: Event) -> SlotRange:
        return SlotRange.of(event.day, event.start_slot, event.slots)

    # Event commits

    def place_event(self, kind: EventKind, title: str, day: int, start: int, slots: int) -> Optional[Event]:
        """Create an event if its range is free. Returns None when rejected."""
        if not self.can_place(day, start, slots):
            logger.debug(f"Rejected {kind} '{title}' at day={day} start={start} slots={slots}")
            return None
        self.occupancy.apply(day, start, slots, True)
        event = self.registry.create(kind, title, day, start, slots)
        logger.debug(f"Placed {kind} '{title}' on day {day} at {range_label(start, slots)}")
        self._renderer.event_placed(event)
        self.save()
        return event

    def place_course(
        self,
        title: str,
        day: int,
        start: str = DEFAULT_COURSE_START,
        duration_min: int = DEFAULT_COURSE_DURATION_MIN,
    ) -> Optional[Event]:
        """Place a fixed course from form input ('HH:MM' start, duration in minutes)."""
        try:
            start_slot = time_to_slot(start or "08:00")
        except ValueError:
            self._messages.alert(INVALID_TIME_MESSAGE)
            return None
        slots = duration_to_slots(duration_min or COURSE_FALLBACK_DURATION_MIN)
        event = self.place_event(EventKind.COURSE, title.strip(), day, start_slot, slots)
        if event is None:
            self._messages.alert(PLACEMENT_CONFLICT_MESSAGE)
        return event

    def schedule_todo(self, title: str, duration: int, day: int, start: int) -> Optional[Event]:
        """Turn a backlog item into a task event.

        The first backlog item matching title and duration is removed. If none
        matches, the task is still placed and the backlog is left unchanged.
        """
        slots = duration_to_slots(duration)
        if not self.can_place(day, start, slots):
            logger.debug(f"Rejected todo '{title}' at day={day} start={start} slots={slots}")
            return None
        self.occupancy.apply(day, start, slots, True)
        event = self.registry.create(EventKind.TASK, title, day, start, slots)
        logger.debug(f"Scheduled '{title}' on day {day} at {range_label(start, slots)}")
        self._renderer.event_placed(event)
        if self._pop_todo(title, duration) is None:
            logger.debug(f"No backlog item matched '{title}' ({duration} min)")
        self.save()
        return event

    def move_event(self, event_id: int, day: int, start: int) -> Optional[Event]:
        """Move an event, validating against the grid with its own footprint ignored."""
        event = self.registry.find_by_id(event_id)
        if event is None:
            return None
        old = self.footprint(event)
        if not self.can_place(day, start, event.slots, ignore=old):
            logger.debug(f"Rejected move of event {event_id} to day={day} start={start}")
            return None
        self.occupancy.apply(old.day, old.start, old.length, False)
        self.occupancy.apply(day, start, event.slots, True)
        updated = self.registry.update(event_id, day=day, start_slot=start)
        self._renderer.event_updated(updated)
        self.save()
        return updated

    def resize_event(self, event_id: int, slots: int) -> Optional[Event]:
        """Change an event's length, keeping day and start."""
        event = self.registry.find_by_id(event_id)
        if event is None:
            return None
        old = self.footprint(event)
        if not self.can_place(event.day, event.start_slot, slots, ignore=old):
            logger.debug(f"Rejected resize of event {event_id} to {slots} slots")
            return None
        self.occupancy.apply(old.day, old.start, old.length, False)
        self.occupancy.apply(event.day, event.start_slot, slots, True)
        updated = self.registry.update(event_id, slots=slots)
        self._renderer.event_updated(updated)
        self.save()
        return updated

    def remove_event(self, event_id: int) -> Optional[Event]:
        """Free an event's footprint and delete it. No-op for unknown ids."""
        event = self._remove(event_id)
        if event is not None:
            self.save()
        return event

    def return_to_backlog(self, event_id: int) -> Optional[Todo]:
        """Remove a task event and put it back in the backlog with its current duration."""
        event = self.registry.find_by_id(event_id)
        if event is None or event.type != EventKind.TASK:
            return None
        self._remove(event_id)
        todo = Todo(title=event.title, duration=event.duration_min)
        self._todos.append(todo)
        self._renderer.backlog_changed(self.todos)
        self.save()
        return todo

    def _remove(self, event_id: int) -> Optional[Event]:
        event = self.registry.find_by_id(event_id)
        if event is None:
            return None
        self.occupancy.apply(event.day, event.start_slot, event.slots, False)
        self.registry.remove_by_id(event_id)
        self._renderer.event_removed(event)
        return event

    # Backlog

    def add_todo(self, title: str, duration: int) -> Optional[Todo]:
        title = (title or "").strip()
        if not title or not duration or duration <= 0:
            return None
        todo = Todo(title=title, duration=duration)
        self._todos.append(todo)
        self._renderer.backlog_changed(self.todos)
        self.save()
        return todo

    def remove_todo(self, title: str, duration: int) -> Optional[Todo]:
        """Remove the first backlog item with this title and duration."""
        todo = self._pop_todo(title, duration)
        if todo is not None:
            self.save()
        return todo

    def _pop_todo(self, title: str, duration: int) -> Optional[Todo]:
        for index, todo in enumerate(self._todos):
            if todo.title == title and todo.duration == duration:
                del self._todos[index]
                self._renderer.backlog_changed(self.todos)
                return todo
        return None

    # UI

    def set_slot_height(self, px: float) -> float:
        """Set the vertical zoom (pixels per slot), clamped to the allowed range."""
        self.slot_height = clamp(px, MIN_SLOT_HEIGHT, MAX_SLOT_HEIGHT)
        self._renderer.layout_changed(self.slot_height)
        self.save()
        return self.slot_height

    # Snapshots

    def snapshot(self) -> Snapshot:
        return Snapshot(
            version=SNAPSHOT_VERSION,
            next_id=self.registry.next_id,
            events=self.registry.events,
            todos=self.todos,
            ui=UIState(slot_h=self.slot_height),
        )

    def save(self) -> None:
        """Hand the current state to the persistence port. Never raises."""
        try:
            self._persistence.save(self.snapshot().to_wire())
        except Exception as e:
            logger.error(f"Failed to save planner state: {type(e).__name__}: {str(e)}")

    def load(self, data: Optional[dict] = None) -> bool:
        """Rehydrate from a snapshot dict, or from the persistence port when none is given.

        A missing or unversioned snapshot seeds the default backlog instead.

        Returns:
            True if stored state was restored, False if defaults were seeded
        """
        if data is None:
            try:
                data = self._persistence.load()
            except Exception as e:
                logger.error(f"Failed to load planner state: {type(e).__name__}: {str(e)}")
                data = None
        if not isinstance(data, dict) or not data.get("version"):
            logger.info("No stored planner state; seeding default backlog")
            self._seed_defaults()
            return False
        self.restore(_lenient_snapshot(data))
        return True

    def restore(self, snapshot: Snapshot) -> None:
        """Replace all state from a snapshot, rebuilding occupancy from the event list.

        Events that are out of bounds, overlap an earlier event or reuse an id are dropped.
        """
        if snapshot.ui is not None:
            self.slot_height = clamp(snapshot.ui.slot_h, MIN_SLOT_HEIGHT, MAX_SLOT_HEIGHT)
            self._renderer.layout_changed(self.slot_height)

        for event in self.registry.events:
            self._renderer.event_removed(event)
        self.occupancy.clear()

        kept: List[Event] = []
        seen_ids = set()
        for event in snapshot.events:
            if event.id in seen_ids or not self.can_place(event.day, event.start_slot, event.slots):
                logger.warning(f"Dropping stored event {event.id} '{event.title}': conflicting or out of range")
                continue
            self.occupancy.apply(event.day, event.start_slot, event.slots, True)
            seen_ids.add(event.id)
            kept.append(event)
        self.registry.restore(kept, snapshot.next_id)
        self._todos = list(snapshot.todos)

        for event in kept:
            self._renderer.event_placed(event)
        self._renderer.backlog_changed(self.todos)
        logger.debug(f"Restored {len(kept)} events and {len(self._todos)} todos (next id {self.registry.next_id})")

    def _seed_defaults(self) -> None:
        self._todos = [Todo(title=title, duration=duration) for title, duration in DEFAULT_TODOS]
        self._renderer.backlog_changed(self.todos)
        self.save()

    # Backup

    def export_backup(self) -> str:
        return export_backup(self.snapshot())

    def import_backup(self, text: str) -> bool:
        """Replace state with a backup. Rejected wholesale when malformed or self-overlapping."""
        try:
            snapshot = parse_backup(text)
            _check_placeable(snapshot.events, self.occupancy.rows)
        except MalformedBackupError as e:
            logger.warning(f"Rejected backup import: {e}")
            self._messages.alert(IMPORT_FAILED_MESSAGE)
            return False
        self.restore(snapshot.model_copy(update={"ui": UIState(slot_h=self.slot_height)}))
        self.save()
        return True


def _check_placeable(events: List[Event], rows: int) -> None:
    scratch = OccupancyMatrix(rows=rows)
    ids = set()
    for event in events:
        if event.id in ids or not can_place(scratch, event.day, event.start_slot, event.slots):
            raise MalformedBackupError(f"Event {event.id} overlaps another event or is out of range")
        scratch.apply(event.day, event.start_slot, event.slots, True)
        ids.add(event.id)


def _lenient_snapshot(data: dict) -> Snapshot:
    """Build a Snapshot from stored data, skipping individual entries that fail validation."""
    events = []
    for raw in _stored_list(data, "events"):
        try:
            events.append(Event.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid stored event: {e.error_count()} errors")
    todos = []
    for raw in _stored_list(data, "todos"):
        try:
            todos.append(Todo.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid stored todo: {e.error_count()} errors")
    ui = None
    raw_ui = data.get("ui")
    if isinstance(raw_ui, dict) and isinstance(raw_ui.get("slotH"), (int, float)):
        ui = UIState(slot_h=raw_ui["slotH"])
    next_id = data.get("nextId")
    version = data["version"]
    return Snapshot(
        version=version if isinstance(version, int) else SNAPSHOT_VERSION,
        next_id=next_id if isinstance(next_id, int) else None,
        events=events,
        todos=todos,
        ui=ui,
    )


def _stored_list(data: dict, key: str) -> list:
    value = data.get(key)
    if isinstance(value, list):
        return value
    if value is not None:
        logger.warning(f"Ignoring stored '{key}': expected a list, got {type(value).__name__}")
    return []
