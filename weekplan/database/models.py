"""SQLAlchemy database models for weekplan."""

from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, JSON

from weekplan.database.database import Base

# The server stores exactly one planner state.
STATE_ROW_ID = 1


class PlannerStateDB(Base):
    """Database model for the stored planner snapshot."""

    __tablename__ = "planner_state"

    id = Column(Integer, primary_key=True, default=STATE_ROW_ID)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
