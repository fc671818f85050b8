from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from motra.tracking.location import PermissionStatus
from motra.tracking.metrics import speed_kmh
from motra.tracking.records import ExerciseType, WorkoutStats
from motra.tracking.samples import GeoSample
from motra.tracking.tracker import StartOutcome, TrackingState


class SampleIn(BaseModel):
    """One location reading as pushed by the device.

    Coordinates are range-checked and NaN/inf rejected here, before they can
    reach the route.
    """

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    altitude_m: float = Field(0.0, allow_inf_nan=False)
    timestamp_ms: int
    speed_mps: float = Field(-1.0, allow_inf_nan=False)  # negative = unknown

    def to_sample(self) -> GeoSample:
        return GeoSample(
            latitude=self.latitude,
            longitude=self.longitude,
            altitude_m=self.altitude_m,
            timestamp_ms=self.timestamp_ms,
            speed_mps=self.speed_mps,
        )


class SampleAck(BaseModel):
    accepted: int
    dropped: int
    distance_m: float


class PermissionUpdate(BaseModel):
    status: PermissionStatus


class PermissionRead(BaseModel):
    status: PermissionStatus
    pending_start: bool


class StartRead(BaseModel):
    outcome: StartOutcome
    state: TrackingState


class StatsRead(BaseModel):
    """Live numbers for the recording screen."""

    state: TrackingState
    start_time: Optional[datetime] = None
    distance_m: float
    distance_km: float
    current_speed_mps: float
    speed_kmh: float
    pace_s_per_km: float
    pace: str  # e.g. "5:30" or "--:--"
    elapsed_seconds: float
    elapsed: str  # e.g. "12:34"
    calories_kcal: float
    route_points: int

    @classmethod
    def from_stats(
        cls,
        stats: WorkoutStats,
        state: TrackingState,
        start_time: Optional[datetime],
        route_points: int,
    ) -> "StatsRead":
        return cls(
            state=state,
            start_time=start_time,
            distance_m=stats.distance_m,
            distance_km=round(stats.distance_km, 2),
            current_speed_mps=stats.current_speed_mps,
            speed_kmh=round(speed_kmh(stats.current_speed_mps), 1),
            pace_s_per_km=stats.pace_s_per_km,
            pace=stats.pace_display,
            elapsed_seconds=stats.elapsed_seconds,
            elapsed=stats.elapsed_display,
            calories_kcal=stats.calories_kcal,
            route_points=route_points,
        )


class FinishRequest(BaseModel):
    exercise_type: ExerciseType = ExerciseType.running
    notes: Optional[str] = None
