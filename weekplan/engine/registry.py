"""Event registry: the ordered collection of placed events.

The registry owns the canonical copy of every Event. It does not touch the
occupancy matrix or persist anything; ScheduleStore sequences those steps.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from weekplan.models.event import Event, EventKind

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ("day", "start_slot", "slots")


class EventRegistry:
    """Ordered events keyed by a monotonically increasing integer id."""

    def __init__(self, next_id: int = 1):
        self._events: List[Event] = []
        self._next_id = max(1, next_id)

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def events(self) -> List[Event]:
        return list(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def create(self, kind: EventKind, title: str, day: int, start: int, length: int) -> Event:
        """Append a new event with the next identifier."""
        event = Event(
            id=self._next_id,
            type=kind,
            title=title,
            day=day,
            start_slot=start,
            slots=length,
        )
        self._next_id += 1
        self._events.append(event)
        logger.debug(f"Created event {event.id} ({event.type}) day={day} start={start} slots={length}")
        return event

    def find_by_id(self, event_id: int) -> Optional[Event]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def remove_by_id(self, event_id: int) -> Optional[Event]:
        """Remove an event. No-op (returns None) if the id is unknown."""
        for index, event in enumerate(self._events):
            if event.id == event_id:
                del self._events[index]
                logger.debug(f"Removed event {event_id}")
                return event
        return None

    def update(self, event_id: int, **patch) -> Optional[Event]:
        """Replace day/start_slot/slots of an existing event, keeping its position in order.

        Returns:
            The updated Event, or None if the id is unknown

        Raises:
            ValueError: If the patch names a field other than day, start_slot or slots
        """
        unknown = set(patch) - set(_MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update event fields: {sorted(unknown)}")
        for index, event in enumerate(self._events):
            if event.id == event_id:
                updated = Event.model_validate({**event.model_dump(), **patch})
                self._events[index] = updated
                logger.debug(f"Updated event {event_id}: {patch}")
                return updated
        return None

    def restore(self, events: Iterable[Event], next_id: Optional[int] = None) -> None:
        """Replace all events, e.g. after loading a snapshot.

        The id counter resumes from the stored `next_id`, but never below the
        highest restored id plus one.
        """
        self._events = list(events)
        floor = max((event.id for event in self._events), default=0) + 1
        self._next_id = max(floor, next_id or 0)
