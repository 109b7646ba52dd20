"""Tests for the event registry (identifier assignment, lookup, removal)."""

import pytest

from weekplan.engine.registry import EventRegistry
from weekplan.models.event import Event, EventKind


def _event(event_id, day=0, start=0, slots=1):
    return Event(id=event_id, type=EventKind.TASK, title=f"E{event_id}", day=day, start_slot=start, slots=slots)


class TestEventRegistry:
    """Test EventRegistry operations."""

    def test_ids_strictly_increase(self):
        registry = EventRegistry()
        ids = [registry.create(EventKind.TASK, f"T{i}", 0, i, 1).id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]
        assert registry.next_id == 6

    def test_ids_are_not_reused_after_removal(self):
        registry = EventRegistry()
        first = registry.create(EventKind.TASK, "A", 0, 0, 1)
        registry.remove_by_id(first.id)
        second = registry.create(EventKind.TASK, "B", 0, 0, 1)
        assert second.id == first.id + 1

    def test_find_by_id(self):
        registry = EventRegistry()
        created = registry.create(EventKind.COURSE, "Algorithms", 1, 12, 9)
        assert registry.find_by_id(created.id) == created
        assert registry.find_by_id(999) is None

    def test_remove_is_idempotent(self):
        registry = EventRegistry()
        created = registry.create(EventKind.TASK, "A", 0, 0, 1)
        assert registry.remove_by_id(created.id) == created
        assert registry.remove_by_id(created.id) is None
        assert len(registry) == 0

    def test_update_keeps_order_and_identity(self):
        registry = EventRegistry()
        a = registry.create(EventKind.TASK, "A", 0, 0, 1)
        b = registry.create(EventKind.TASK, "B", 0, 5, 1)

        updated = registry.update(a.id, day=3, start_slot=40)

        assert updated.id == a.id
        assert updated.title == "A"
        assert (updated.day, updated.start_slot, updated.slots) == (3, 40, 1)
        assert [e.id for e in registry] == [a.id, b.id]

    def test_update_unknown_id_returns_none(self):
        assert EventRegistry().update(42, slots=3) is None

    def test_update_rejects_immutable_fields(self):
        registry = EventRegistry()
        a = registry.create(EventKind.TASK, "A", 0, 0, 1)
        with pytest.raises(ValueError):
            registry.update(a.id, title="Renamed")

    def test_restore_resumes_after_highest_id(self):
        """Reload with ids {3, 7, 5} continues at 8."""
        registry = EventRegistry()
        registry.restore([_event(3, start=0), _event(7, start=2), _event(5, start=4)])
        assert registry.next_id == 8
        assert registry.create(EventKind.TASK, "New", 1, 0, 1).id == 8

    def test_restore_never_goes_below_highest_id(self):
        registry = EventRegistry()
        registry.restore([_event(3), _event(7, start=2)], next_id=4)
        assert registry.next_id == 8

    def test_restore_keeps_larger_stored_next_id(self):
        registry = EventRegistry()
        registry.restore([_event(3)], next_id=20)
        assert registry.next_id == 20

    def test_restore_empty_starts_at_one(self):
        registry = EventRegistry(next_id=9)
        registry.restore([])
        assert registry.next_id == 1
