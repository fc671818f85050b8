import os
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile

from motra.api.deps import get_store
from motra.core.config import settings
from motra.core.geo import route_bounds, route_geojson
from motra.core.time_utils import local_day_start
from motra.files.fit import parse_fit_samples
from motra.files.gpx import parse_gpx_samples, workout_to_gpx
from motra.repositories.workouts import SqlWorkoutStore
from motra.schemas.workout import RoutePointRead, TrackRead, WorkoutNotesUpdate, WorkoutRead
from motra.tracking.records import ExerciseType
from motra.tracking.replay import replay_workout

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("/", response_model=list[WorkoutRead])
def list_workouts(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    exercise_type: Optional[ExerciseType] = Query(None),
    store: SqlWorkoutStore = Depends(get_store),
):
    """
    List workouts, most recent first, optionally filtered by local
    [start_date, end_date] and exercise type.

      GET /workouts?start_date=2025-01-06&end_date=2025-01-12&exercise_type=running
    """
    start = local_day_start(start_date, settings.timezone) if start_date else None
    end = local_day_start(end_date + timedelta(days=1), settings.timezone) if end_date else None
    records = store.fetch_all(exercise_type=exercise_type, start=start, end=end)
    return [WorkoutRead.from_record(r) for r in records]


@router.post("/import", response_model=WorkoutRead)
def import_workout(
    file: UploadFile = File(...),
    exercise_type: ExerciseType = Form(ExerciseType.running),
    notes: Optional[str] = Form(None),
    store: SqlWorkoutStore = Depends(get_store),
):
    """Create a workout from a GPX or FIT file by replaying its track."""
    filename = file.filename or "import"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in [".gpx", ".fit"]:
        raise HTTPException(status_code=400, detail="Only .gpx or .fit files are supported")

    data = file.file.read()
    if ext == ".gpx":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="GPX file must be UTF-8 encoded")
        samples = parse_gpx_samples(text)
    else:
        samples = parse_fit_samples(data)

    record = replay_workout(
        samples,
        exercise_type,
        notes=notes,
        body_weight_kg=settings.body_weight_kg,
        min_sample_distance_m=settings.min_sample_distance_m,
    )
    store.save(record)
    return WorkoutRead.from_record(record)


@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: str, store: SqlWorkoutStore = Depends(get_store)):
    return WorkoutRead.from_record(store.get(workout_id))


@router.put("/{workout_id}/notes", response_model=WorkoutRead)
def update_workout_notes(
    workout_id: str,
    payload: WorkoutNotesUpdate,
    store: SqlWorkoutStore = Depends(get_store),
):
    return WorkoutRead.from_record(store.update_notes(workout_id, payload.notes))


@router.delete("/{workout_id}")
def delete_workout(workout_id: str, store: SqlWorkoutStore = Depends(get_store)):
    store.delete(workout_id)
    return {"message": "Workout deleted"}


@router.get("/{workout_id}/route", response_model=list[RoutePointRead])
def get_workout_route(workout_id: str, store: SqlWorkoutStore = Depends(get_store)):
    record = store.get(workout_id)
    return [RoutePointRead.from_point(p) for p in record.route]


@router.get("/{workout_id}/track", response_model=TrackRead)
def get_workout_track(workout_id: str, store: SqlWorkoutStore = Depends(get_store)):
    record = store.get(workout_id)
    coords = [(p.latitude, p.longitude) for p in record.route]
    return TrackRead(
        geojson=route_geojson(coords),
        bounds=route_bounds(coords),
        points_count=len(coords),
    )


@router.get("/{workout_id}/gpx")
def export_workout_gpx(workout_id: str, store: SqlWorkoutStore = Depends(get_store)):
    record = store.get(workout_id)
    filename = f"{record.exercise_type.value}-{record.start_time.date().isoformat()}.gpx"
    return Response(
        content=workout_to_gpx(record),
        media_type="application/gpx+xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
