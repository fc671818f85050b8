"""Seed the local record store with a few months of demo workouts.

Each workout is a synthetic out-and-back route replayed through the tracker,
so stats, tiers and history look like they would for real recordings.
"""
from datetime import datetime, time, timedelta, timezone
import random

from motra.db import Base, SessionLocal, engine
from motra.core.constants import METERS_PER_KM
from motra.core.time_utils import datetime_to_epoch_ms
from motra.models.route_point import WorkoutRoutePoint  # noqa: F401
from motra.models.workout import Workout
from motra.repositories.workouts import SqlWorkoutStore
from motra.tracking.records import ExerciseType
from motra.tracking.replay import replay_workout
from motra.tracking.samples import GeoSample

# Seoul, Yeouido park
START_LAT = 37.5285
START_LON = 126.9327
METERS_PER_DEG_LAT = 111_195.0

# (type, min km, max km, speed m/s)
PLAN = {
    1: (ExerciseType.running, 5.0, 8.0, 3.0),
    3: (ExerciseType.cycling, 20.0, 35.0, 6.5),
    5: (ExerciseType.walking, 3.0, 6.0, 1.4),
    6: (ExerciseType.running, 10.0, 18.0, 2.8),
}


def synthetic_route(start: datetime, distance_m: float, speed_mps: float, step_s: int = 5) -> list[GeoSample]:
    """Out-and-back line due north, one sample every ``step_s`` seconds."""
    half = distance_m / 2
    samples = []
    t = 0
    covered = 0.0
    while covered <= distance_m:
        offset = covered if covered <= half else distance_m - covered
        samples.append(
            GeoSample(
                latitude=START_LAT + offset / METERS_PER_DEG_LAT,
                longitude=START_LON,
                altitude_m=12.0,
                timestamp_ms=datetime_to_epoch_ms(start + timedelta(seconds=t)),
                speed_mps=speed_mps,
            )
        )
        t += step_s
        covered += speed_mps * step_s
    return samples


def clear_workouts(db) -> None:
    for row in db.query(Workout).all():
        db.delete(row)
    db.commit()


def seed_demo_workouts(db, weeks: int = 12) -> None:
    store = SqlWorkoutStore(db)
    today = datetime.now(timezone.utc).date()
    start_day = today - timedelta(weeks=weeks)

    count = 0
    for offset in range((today - start_day).days):
        day = start_day + timedelta(days=offset)
        plan = PLAN.get(day.weekday())
        if plan is None:
            continue
        exercise_type, min_km, max_km, speed = plan
        distance_m = random.uniform(min_km, max_km) * METERS_PER_KM
        start = datetime.combine(day, time(7, 0), tzinfo=timezone.utc)
        record = replay_workout(
            synthetic_route(start, distance_m, speed),
            exercise_type,
            notes="seed",
        )
        store.save(record)
        count += 1

    print(f"Seeded {count} demo workouts")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_workouts(db)
        seed_demo_workouts(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
