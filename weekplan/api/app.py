"""FastAPI state server for weekplan.

Stores the planner snapshot posted by clients and returns it on request.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from weekplan.database.database import get_db, init_db
from weekplan.database.state_repository import StateRepository
from weekplan.models.constants import SNAPSHOT_VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="weekplan API",
    description="State storage for the weekly planner",
    version="0.1.0",
    lifespan=lifespan,
)


def normalize_state(state: dict) -> dict:
    """Fill in missing top-level fields so junk is never stored."""
    normalized = dict(state)
    if "version" not in normalized:
        normalized["version"] = SNAPSHOT_VERSION
    if not isinstance(normalized.get("events"), list):
        normalized["events"] = []
    if not isinstance(normalized.get("todos"), list):
        normalized["todos"] = []
    return normalized


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/api/state")
def load_state(db: Session = Depends(get_db)) -> Any:
    """Return the stored snapshot, or 204 when none has been saved."""
    try:
        state = StateRepository(db).get()
    except Exception as e:
        logger.error(f"Failed to read state: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to read state")
    if state is None:
        return Response(status_code=204)
    return state


@app.post("/api/state", status_code=204)
async def save_state(request: Request, db: Session = Depends(get_db)) -> Response:
    """Store a snapshot posted by a client."""
    try:
        state = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid state")
    if not isinstance(state, dict):
        raise HTTPException(status_code=400, detail="Invalid state")

    try:
        await run_in_threadpool(StateRepository(db).save, normalize_state(state))
    except Exception as e:
        logger.error(f"Failed to write state: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to write state")
    return Response(status_code=204)
