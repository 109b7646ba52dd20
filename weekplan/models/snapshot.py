"""Snapshot (persisted state) models for weekplan.

Wire contract (JSON):

    {version, nextId, events: [{id, type, title, day, startSlot, slots}],
     todos: [{title, duration}], ui: {slotH}}
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from weekplan.models.constants import DEFAULT_SLOT_HEIGHT, SNAPSHOT_VERSION
from weekplan.models.event import Event, Todo


class UIState(BaseModel):
    """Persisted UI preferences."""

    slot_h: float = Field(DEFAULT_SLOT_HEIGHT, alias="slotH", description="Pixel height of one slot row")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class Snapshot(BaseModel):
    """Full planner state handed to the persistence collaborator."""

    version: int = Field(SNAPSHOT_VERSION, description="Snapshot format version")
    next_id: Optional[int] = Field(None, alias="nextId", description="Next identifier to assign")
    events: List[Event] = Field(default_factory=list)
    todos: List[Todo] = Field(default_factory=list)
    ui: Optional[UIState] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True

    def to_wire(self) -> dict:
        """Return the JSON-ready dict using wire field names."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
