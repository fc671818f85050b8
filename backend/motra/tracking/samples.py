"""Location samples and the route points built from them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from motra.core.time_utils import epoch_ms_to_datetime


@dataclass(frozen=True, slots=True)
class GeoSample:
    """A single location reading pushed by the location provider.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        altitude_m: Altitude in meters.
        timestamp_ms: Unix epoch milliseconds, non-decreasing within a session.
        speed_mps: Speed in meters/second. Negative means unknown.
    """

    latitude: float
    longitude: float
    altitude_m: float
    timestamp_ms: int
    speed_mps: float = -1.0

    @property
    def timestamp(self) -> datetime:
        return epoch_ms_to_datetime(self.timestamp_ms)

    @property
    def has_speed(self) -> bool:
        return self.speed_mps >= 0


def _new_point_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class RoutePoint:
    """A GeoSample kept on the route, with its own identifier."""

    sample: GeoSample
    id: str = field(default_factory=_new_point_id)

    @classmethod
    def from_sample(cls, sample: GeoSample) -> RoutePoint:
        return cls(sample=sample)

    @property
    def latitude(self) -> float:
        return self.sample.latitude

    @property
    def longitude(self) -> float:
        return self.sample.longitude

    @property
    def altitude_m(self) -> float:
        return self.sample.altitude_m

    @property
    def timestamp_ms(self) -> int:
        return self.sample.timestamp_ms

    @property
    def speed_mps(self) -> float:
        return self.sample.speed_mps
