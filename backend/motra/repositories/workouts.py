"""
Workout record store.

WorkoutStore is the boundary the tracking and tier code talk to; the
SQLAlchemy implementation below is the only production backend. Database
errors surface as RepositoryError so callers never see driver exceptions.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from motra.core.exceptions import RepositoryError, WorkoutNotFoundError
from motra.models.route_point import WorkoutRoutePoint
from motra.models.workout import Workout
from motra.tracking.records import ExerciseType, WorkoutRecord
from motra.tracking.samples import GeoSample, RoutePoint

logger = logging.getLogger(__name__)


class WorkoutStore(Protocol):
    def save(self, record: WorkoutRecord) -> None: ...

    def fetch_all(self) -> list[WorkoutRecord]:
        """All workouts, most recent start time first."""
        ...

    def get(self, workout_id: str) -> WorkoutRecord: ...

    def delete(self, workout_id: str) -> None: ...

    def update_notes(self, workout_id: str, notes: str | None) -> WorkoutRecord: ...


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_record(row: Workout, with_route: bool = True) -> WorkoutRecord:
    route: tuple[RoutePoint, ...] = ()
    if with_route:
        route = tuple(
            RoutePoint(
                id=p.id,
                sample=GeoSample(
                    latitude=p.latitude,
                    longitude=p.longitude,
                    altitude_m=p.altitude_m,
                    timestamp_ms=p.timestamp_ms,
                    speed_mps=p.speed_mps,
                ),
            )
            for p in row.route_points
        )
    return WorkoutRecord(
        id=row.id,
        exercise_type=ExerciseType(row.exercise_type),
        start_time=_as_utc(row.start_time),
        end_time=_as_utc(row.end_time),
        duration_seconds=row.duration_seconds,
        distance_m=row.distance_m,
        calories_kcal=row.calories_kcal,
        pace_s_per_km=row.pace_s_per_km,
        notes=row.notes,
        route=route,
    )


class SqlWorkoutStore:
    def __init__(self, db: Session):
        self.db = db

    def save(self, record: WorkoutRecord) -> None:
        row = Workout(
            id=record.id,
            exercise_type=record.exercise_type.value,
            start_time=_as_utc(record.start_time),
            end_time=_as_utc(record.end_time),
            duration_seconds=record.duration_seconds,
            distance_m=record.distance_m,
            calories_kcal=record.calories_kcal,
            pace_s_per_km=record.pace_s_per_km,
            notes=record.notes,
        )
        row.route_points = [
            WorkoutRoutePoint(
                id=p.id,
                seq=i,
                latitude=p.latitude,
                longitude=p.longitude,
                altitude_m=p.altitude_m,
                timestamp_ms=p.timestamp_ms,
                speed_mps=p.speed_mps,
            )
            for i, p in enumerate(record.route)
        ]
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(f"could not save workout {record.id}") from exc
        logger.info("Saved workout %s (%d route points)", record.id, len(record.route))

    def fetch_all(
        self,
        exercise_type: ExerciseType | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        with_route: bool = False,
    ) -> list[WorkoutRecord]:
        """Workouts ordered by start time, most recent first.

        Routes are left empty unless ``with_route`` is set; totals and tiers
        only need the summary columns.
        """
        query = self.db.query(Workout)
        if exercise_type is not None:
            query = query.filter(Workout.exercise_type == exercise_type.value)
        if start is not None:
            query = query.filter(Workout.start_time >= _as_utc(start))
        if end is not None:
            query = query.filter(Workout.start_time < _as_utc(end))
        if with_route:
            query = query.options(selectinload(Workout.route_points))
        try:
            rows = query.order_by(Workout.start_time.desc()).all()
        except SQLAlchemyError as exc:
            raise RepositoryError("could not fetch workouts") from exc
        return [_to_record(row, with_route=with_route) for row in rows]

    def _row(self, workout_id: str) -> Workout:
        try:
            row = self.db.query(Workout).filter(Workout.id == workout_id).first()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"could not fetch workout {workout_id}") from exc
        if row is None:
            raise WorkoutNotFoundError(workout_id)
        return row

    def get(self, workout_id: str) -> WorkoutRecord:
        return _to_record(self._row(workout_id))

    def delete(self, workout_id: str) -> None:
        row = self._row(workout_id)
        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(f"could not delete workout {workout_id}") from exc
        logger.info("Deleted workout %s", workout_id)

    def update_notes(self, workout_id: str, notes: str | None) -> WorkoutRecord:
        row = self._row(workout_id)
        row.notes = notes
        try:
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(f"could not update workout {workout_id}") from exc
        return _to_record(row)
