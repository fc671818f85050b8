"""Turns a stream of location samples into a route and a running distance."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from motra.core.geo import haversine_m
from motra.tracking.samples import GeoSample, RoutePoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IncrementalUpdate:
    """What one sample changed.

    Attributes:
        point: The route point appended for the sample.
        added_distance_m: Distance contributed by this sample (0 for the first).
        distance_m: Cumulative distance after the sample.
        current_speed_mps: Latest known speed (unknown readings keep the old value).
    """

    point: RoutePoint
    added_distance_m: float
    distance_m: float
    current_speed_mps: float


class RouteAccumulator:
    """Accumulates route points and haversine distance for one session.

    Every sample is kept on the route. Distance is measured from the last
    known position; with ``min_distance_m`` set, samples closer than that to
    the last known position add nothing and leave the position where it was,
    so slow drift still adds up once it crosses the threshold.
    """

    def __init__(self, min_distance_m: float | None = None):
        self.min_distance_m = min_distance_m
        self._points: list[RoutePoint] = []
        self._last: GeoSample | None = None
        self._distance_m = 0.0
        self._speed_mps = 0.0

    @property
    def points(self) -> tuple[RoutePoint, ...]:
        return tuple(self._points)

    @property
    def distance_m(self) -> float:
        return self._distance_m

    @property
    def current_speed_mps(self) -> float:
        return self._speed_mps

    def __len__(self) -> int:
        return len(self._points)

    def reset(self) -> None:
        self._points.clear()
        self._last = None
        self._distance_m = 0.0
        self._speed_mps = 0.0

    def add_sample(self, sample: GeoSample) -> IncrementalUpdate:
        point = RoutePoint.from_sample(sample)
        self._points.append(point)

        added = 0.0
        if self._last is None:
            self._last = sample
        else:
            d = haversine_m(self._last.latitude, self._last.longitude, sample.latitude, sample.longitude)
            if self.min_distance_m is not None and d < self.min_distance_m:
                logger.debug("Sample %.1fm from last position, below %.1fm filter", d, self.min_distance_m)
            else:
                added = d
                self._distance_m += d
                self._last = sample

        if sample.has_speed:
            self._speed_mps = sample.speed_mps

        return IncrementalUpdate(
            point=point,
            added_distance_m=added,
            distance_m=self._distance_m,
            current_speed_mps=self._speed_mps,
        )
