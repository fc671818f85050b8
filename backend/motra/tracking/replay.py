"""Run recorded samples through the live tracking engine.

Imported files go through the same tracker as a live session, so an imported
workout gets exactly the distance, pace and calories a live one would.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from motra.core.constants import DEFAULT_BODY_WEIGHT_KG
from motra.tracking.location import PermissionStatus, PushLocationProvider
from motra.tracking.records import ExerciseType, WorkoutRecord
from motra.tracking.samples import GeoSample
from motra.tracking.tracker import WorkoutTracker


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


def replay_workout(
    samples: Iterable[GeoSample],
    exercise_type: ExerciseType | str,
    notes: str | None = None,
    body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG,
    min_sample_distance_m: float | None = None,
) -> WorkoutRecord:
    """Replay samples in timestamp order and return the finalized record.

    The session starts at the first sample and stops at the last one; the
    clock follows the sample timestamps.
    """
    ordered = sorted(samples, key=lambda s: s.timestamp_ms)
    if not ordered:
        raise ValueError("no samples to replay")

    clock = ManualClock(ordered[0].timestamp)
    provider = PushLocationProvider(PermissionStatus.authorized)
    tracker = WorkoutTracker(
        provider,
        clock=clock,
        body_weight_kg=body_weight_kg,
        min_sample_distance_m=min_sample_distance_m,
    )
    tracker.start()
    for sample in ordered:
        clock.now = sample.timestamp
        tracker.tick()
        provider.push(sample)
    tracker.stop()
    return tracker.finalize(exercise_type, notes)
