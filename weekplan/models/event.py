"""Event and Todo data models for weekplan."""

from enum import Enum
from pydantic import BaseModel, Field

from weekplan.models.constants import DAYS, SLOT_MIN


class EventKind(str, Enum):
    """Kind of block placed on the grid."""
    TASK = "task"
    COURSE = "course"


class Event(BaseModel):
    """Event represents a block committed to the weekly grid.

    Field names follow Python conventions; the wire format uses the aliases
    (`startSlot`), so dump with `by_alias=True` when persisting.
    """

    id: int = Field(..., ge=1, description="Unique, monotonically assigned identifier")
    type: EventKind = Field(..., description="Kind of block (task or course)")
    title: str = Field(..., description="Display title")
    day: int = Field(..., ge=0, lt=DAYS, description="Day column (0..6)")
    start_slot: int = Field(..., ge=0, alias="startSlot", description="First occupied slot")
    slots: int = Field(..., ge=1, description="Number of occupied slots")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        populate_by_name = True

    @property
    def duration_min(self) -> int:
        return self.slots * SLOT_MIN


class Todo(BaseModel):
    """Backlog item that has not been placed on the grid yet."""

    title: str = Field(..., description="Todo title")
    duration: int = Field(..., gt=0, description="Duration in minutes")
