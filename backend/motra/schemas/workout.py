from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from motra.core.time_utils import format_pace, seconds_to_hhmmss
from motra.tracking.records import ExerciseType, WorkoutRecord
from motra.tracking.samples import RoutePoint


class WorkoutRead(BaseModel):
    """Schema returned to the frontend when reading a workout."""

    id: str
    exercise_type: ExerciseType
    start_time: datetime
    end_time: datetime
    duration_seconds: float
    duration: str  # "HH:MM:SS"
    distance_m: float
    distance_km: float
    calories_kcal: float
    pace_s_per_km: float
    pace: str  # e.g. "5:30" or "--:--"
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: WorkoutRecord) -> "WorkoutRead":
        return cls(
            id=record.id,
            exercise_type=record.exercise_type,
            start_time=record.start_time,
            end_time=record.end_time,
            duration_seconds=record.duration_seconds,
            duration=seconds_to_hhmmss(record.duration_seconds),
            distance_m=record.distance_m,
            distance_km=round(record.distance_km, 2),
            calories_kcal=record.calories_kcal,
            pace_s_per_km=record.pace_s_per_km,
            pace=format_pace(record.pace_s_per_km),
            notes=record.notes,
        )


class WorkoutNotesUpdate(BaseModel):
    notes: Optional[str] = None


class RoutePointRead(BaseModel):
    id: str
    latitude: float
    longitude: float
    altitude_m: float
    timestamp_ms: int
    speed_mps: float

    @classmethod
    def from_point(cls, point: RoutePoint) -> "RoutePointRead":
        return cls(
            id=point.id,
            latitude=point.latitude,
            longitude=point.longitude,
            altitude_m=point.altitude_m,
            timestamp_ms=point.timestamp_ms,
            speed_mps=point.speed_mps,
        )


class TrackRead(BaseModel):
    geojson: Optional[dict] = None  # LineString
    bounds: Optional[dict] = None  # {minLat, minLon, maxLat, maxLon}
    points_count: int
