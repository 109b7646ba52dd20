"""Repository for planner state database operations."""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from weekplan.database.models import PlannerStateDB, STATE_ROW_ID

logger = logging.getLogger(__name__)


class StateRepository:
    """Repository for the single stored planner snapshot."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Optional[dict]:
        """Get the stored snapshot, or None if nothing was saved yet."""
        row = self.db.query(PlannerStateDB).filter(PlannerStateDB.id == STATE_ROW_ID).first()
        return dict(row.payload) if row else None

    def save(self, state: dict) -> dict:
        """Create or replace the stored snapshot (upsert)."""
        row = self.db.query(PlannerStateDB).filter(PlannerStateDB.id == STATE_ROW_ID).first()
        try:
            if row:
                row.payload = state
                row.updated_at = datetime.utcnow()
            else:
                row = PlannerStateDB(id=STATE_ROW_ID, payload=state)
                self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Saved planner state ({len(state.get('events', []))} events)")
            return dict(row.payload)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to save planner state: {type(e).__name__}: {str(e)}")
            raise
