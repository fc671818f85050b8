from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from motra.core.constants import METERS_PER_KM
from motra.core.time_utils import format_duration, format_pace
from motra.tracking.samples import RoutePoint


class ExerciseType(str, Enum):
    running = "running"
    cycling = "cycling"
    walking = "walking"
    hiking = "hiking"


@dataclass(slots=True)
class WorkoutStats:
    """Live statistics for the session in progress.

    pace_s_per_km and calories_kcal are only ever written by the tracker from
    distance_m and elapsed_seconds.
    """

    distance_m: float = 0.0
    current_speed_mps: float = 0.0
    pace_s_per_km: float = 0.0
    elapsed_seconds: float = 0.0
    calories_kcal: float = 0.0

    @property
    def distance_km(self) -> float:
        return self.distance_m / METERS_PER_KM

    @property
    def pace_display(self) -> str:
        return format_pace(self.pace_s_per_km)

    @property
    def elapsed_display(self) -> str:
        return format_duration(self.elapsed_seconds)

    def copy(self) -> WorkoutStats:
        return dataclasses.replace(self)


@dataclass(frozen=True, slots=True)
class WorkoutRecord:
    """A completed workout, as handed to the record store."""

    exercise_type: ExerciseType
    start_time: datetime
    end_time: datetime
    duration_seconds: float
    distance_m: float
    calories_kcal: float
    pace_s_per_km: float
    notes: str | None = None
    route: tuple[RoutePoint, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def distance_km(self) -> float:
        return self.distance_m / METERS_PER_KM
