"""Pytest fixtures and configuration for weekplan tests."""

import os

# Must be set before weekplan.database is imported (engine is created at import time).
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from weekplan.database.database import Base, get_db
from weekplan.database import models  # noqa: F401
from weekplan.engine.geometry import GridGeometry, LayoutMetrics
from weekplan.engine.interaction import DragController, ResizeController
from weekplan.engine.ports import MemoryPersistence
from weekplan.engine.store import ScheduleStore


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Grid layout used by geometry/interaction tests: 100px day columns, 10px rows.
TIME_COLUMN = 60
COLUMN_WIDTH = 100
ROW_HEIGHT = 10


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def persistence():
    """In-memory persistence port that records saved snapshots."""
    return MemoryPersistence()


@pytest.fixture
def renderer():
    """Mock renderer; assert on the notifications it receives."""
    return MagicMock()


@pytest.fixture
def messages():
    """Mock user-message port."""
    return MagicMock()


@pytest.fixture
def store(persistence, renderer, messages):
    """Empty ScheduleStore (no default backlog)."""
    return ScheduleStore(persistence=persistence, renderer=renderer, messages=messages)


@pytest.fixture
def layout():
    """Mutable layout holder so tests can zoom or resize the grid between calls."""
    return {
        "metrics": LayoutMetrics(
            origin_x=0,
            origin_y=0,
            client_width=TIME_COLUMN + 7 * COLUMN_WIDTH,
            row_height=ROW_HEIGHT,
        )
    }


@pytest.fixture
def geometry(layout):
    return GridGeometry(lambda: layout["metrics"])


@pytest.fixture
def cell_center():
    """Pointer position at the centre of a (day, slot) cell in the default layout."""
    def _center(day, slot):
        return (TIME_COLUMN + day * COLUMN_WIDTH + COLUMN_WIDTH / 2, slot * ROW_HEIGHT + ROW_HEIGHT / 2)
    return _center


@pytest.fixture
def drag(store, geometry):
    return DragController(store, geometry)


@pytest.fixture
def resize(store, geometry):
    return ResizeController(store, geometry)


def occupancy_from_events(events):
    """Union of event footprints as a set of (day, slot)."""
    return {
        (event.day, slot)
        for event in events
        for slot in range(event.start_slot, event.start_slot + event.slots)
    }


@pytest.fixture
def assert_consistent(store):
    """Assert the occupancy matrix equals the union of registered event footprints."""
    def _check():
        assert store.occupancy.occupied() == occupancy_from_events(store.events)
    return _check


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from weekplan.api.app import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
