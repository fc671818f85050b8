from fastapi import APIRouter, Depends

from motra.api.deps import get_store, get_tracking_session
from motra.repositories.workouts import SqlWorkoutStore
from motra.schemas.tracking import (
    FinishRequest,
    PermissionRead,
    PermissionUpdate,
    SampleAck,
    SampleIn,
    StartRead,
    StatsRead,
)
from motra.schemas.workout import WorkoutRead
from motra.tracking.session import TrackingSession

router = APIRouter(prefix="/tracking", tags=["tracking"])


def _stats_read(session: TrackingSession) -> StatsRead:
    tracker = session.tracker
    return StatsRead.from_stats(
        tracker.stats,
        state=tracker.state,
        start_time=tracker.start_time,
        route_points=len(tracker.route),
    )


@router.get("/permission", response_model=PermissionRead)
def get_permission(session: TrackingSession = Depends(get_tracking_session)):
    return PermissionRead(
        status=session.provider.permission_status(),
        pending_start=session.tracker.pending_start,
    )


@router.put("/permission", response_model=PermissionRead)
def set_permission(
    payload: PermissionUpdate,
    session: TrackingSession = Depends(get_tracking_session),
):
    """Report the device's permission decision; a deferred start runs now."""
    session.set_permission(payload.status)
    return PermissionRead(
        status=session.provider.permission_status(),
        pending_start=session.tracker.pending_start,
    )


@router.post("/start", response_model=StartRead)
def start_tracking(session: TrackingSession = Depends(get_tracking_session)):
    outcome = session.start()
    return StartRead(outcome=outcome, state=session.state)


@router.post("/samples", response_model=SampleAck)
def push_samples(
    payload: list[SampleIn],
    session: TrackingSession = Depends(get_tracking_session),
):
    """
    Deliver location samples in the order they were taken.

    Samples that arrive while the session is not tracking are dropped, not
    queued; the response says how many were used.
    """
    accepted = 0
    for item in payload:
        if session.push_sample(item.to_sample()):
            accepted += 1
    return SampleAck(
        accepted=accepted,
        dropped=len(payload) - accepted,
        distance_m=session.tracker.stats.distance_m,
    )


@router.get("/stats", response_model=StatsRead)
def get_stats(session: TrackingSession = Depends(get_tracking_session)):
    return _stats_read(session)


@router.post("/pause", response_model=StatsRead)
def pause_tracking(session: TrackingSession = Depends(get_tracking_session)):
    session.pause()
    return _stats_read(session)


@router.post("/resume", response_model=StatsRead)
def resume_tracking(session: TrackingSession = Depends(get_tracking_session)):
    session.resume()
    return _stats_read(session)


@router.post("/stop", response_model=StatsRead)
def stop_tracking(session: TrackingSession = Depends(get_tracking_session)):
    session.stop()
    return _stats_read(session)


@router.post("/finish", response_model=WorkoutRead)
def finish_workout(
    payload: FinishRequest,
    session: TrackingSession = Depends(get_tracking_session),
    store: SqlWorkoutStore = Depends(get_store),
):
    """
    Finalize the stopped session and save it.

    Safe to retry after a failed save (503). A retry must send the same
    exercise_type and notes as the first call, otherwise it is a 409.
    """
    record = session.finish(payload.exercise_type, store, notes=payload.notes)
    return WorkoutRead.from_record(record)


@router.post("/reset", response_model=StatsRead)
def reset_session(session: TrackingSession = Depends(get_tracking_session)):
    session.reset()
    return _stats_read(session)
