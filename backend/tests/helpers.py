"""Builders shared by the test modules."""
import math
from datetime import datetime, timedelta, timezone

from motra.core.constants import EARTH_RADIUS_M
from motra.core.exceptions import RepositoryError
from motra.core.time_utils import datetime_to_epoch_ms
from motra.tracking import metrics
from motra.tracking.location import PermissionStatus, PushLocationProvider
from motra.tracking.records import ExerciseType, WorkoutRecord
from motra.tracking.samples import GeoSample

T0 = datetime(2025, 3, 1, 7, 0, tzinfo=timezone.utc)
LAT0 = 37.5
LON0 = 127.0


def north(meters: float) -> float:
    """Latitude ``meters`` north of LAT0 along the meridian (exact for haversine)."""
    return LAT0 + math.degrees(meters / EARTH_RADIUS_M)


def sample(offset_m: float = 0.0, t_s: float = 0.0, speed: float = -1.0) -> GeoSample:
    return GeoSample(
        latitude=north(offset_m),
        longitude=LON0,
        altitude_m=10.0,
        timestamp_ms=datetime_to_epoch_ms(T0 + timedelta(seconds=t_s)),
        speed_mps=speed,
    )


def sample_payload(offset_m: float = 0.0, t_s: float = 0.0, speed: float = -1.0) -> dict:
    s = sample(offset_m, t_s, speed)
    return {
        "latitude": s.latitude,
        "longitude": s.longitude,
        "altitude_m": s.altitude_m,
        "timestamp_ms": s.timestamp_ms,
        "speed_mps": s.speed_mps,
    }


def make_record(
    distance_m: float,
    start: datetime,
    exercise_type: ExerciseType = ExerciseType.running,
    duration_s: float = 1800.0,
    notes: str | None = None,
) -> WorkoutRecord:
    return WorkoutRecord(
        exercise_type=exercise_type,
        start_time=start,
        end_time=start + timedelta(seconds=duration_s),
        duration_seconds=duration_s,
        distance_m=distance_m,
        calories_kcal=metrics.calories(distance_m),
        pace_s_per_km=metrics.pace(distance_m, duration_s),
        notes=notes,
    )


class CountingProvider(PushLocationProvider):
    """Push provider that counts permission requests."""

    def __init__(self, status=PermissionStatus.undetermined):
        super().__init__(status)
        self.permission_requests = 0

    def request_permission(self, on_change):
        self.permission_requests += 1
        super().request_permission(on_change)


class FlakyStore:
    """Fails the first ``failures`` saves, then hands records to ``inner``."""

    def __init__(self, inner=None, failures=1):
        self.inner = inner
        self.failures = failures
        self.saved = []

    def save(self, record):
        if self.failures:
            self.failures -= 1
            raise RepositoryError("disk full")
        if self.inner is not None:
            self.inner.save(record)
        self.saved.append(record)


GPX_TWO_SEGMENTS = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <trkseg>
      <trkpt lat="37.5" lon="127.0"><time>2025-03-01T07:00:00Z</time></trkpt>
      <trkpt lat="37.5009" lon="127.0"><ele>12.5</ele><time>2025-03-01T07:00:30Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="37.5018" lon="127.0"><time>2025-03-01T07:01:00Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""
