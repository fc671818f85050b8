from fastapi import Depends, Request
from sqlalchemy.orm import Session

from motra.db import get_db
from motra.repositories.workouts import SqlWorkoutStore
from motra.tracking.session import TrackingSession


def get_store(db: Session = Depends(get_db)) -> SqlWorkoutStore:
    return SqlWorkoutStore(db)


def get_tracking_session(request: Request) -> TrackingSession:
    # created once in motra.main and kept on the app, not a module global
    return request.app.state.tracking_session
