"""
Pytest configuration and fixtures

Every test gets its own in-memory SQLite database and a tracking session
driven by a manual clock, so nothing depends on wall time or leaks between
tests.
"""
import os

# Use in-memory sqlite; must be set before motra.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from helpers import T0
from motra.api.deps import get_tracking_session
from motra.db import Base, get_db, make_engine
from motra.main import app
from motra.repositories.workouts import SqlWorkoutStore
from motra.tracking.location import PermissionStatus, PushLocationProvider
from motra.tracking.replay import ManualClock
from motra.tracking.session import TrackingSession
from motra.tracking.tracker import WorkoutTracker


@pytest.fixture
def clock():
    return ManualClock(T0)


@pytest.fixture
def provider():
    return PushLocationProvider(PermissionStatus.authorized)


@pytest.fixture
def tracker(provider, clock):
    return WorkoutTracker(provider, clock=clock)


@pytest.fixture
def db_session():
    engine = make_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def store(db_session):
    return SqlWorkoutStore(db_session)


@pytest.fixture
def session(clock):
    """Tracking session with no ticker thread; tests call tick() themselves."""
    return TrackingSession(
        PushLocationProvider(),
        lambda p: WorkoutTracker(p, clock=clock),
        tick_interval_s=None,
    )


@pytest.fixture
def client(db_session, session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tracking_session] = lambda: session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
