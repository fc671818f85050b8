"""
Workout tracker state machine.

    IDLE -> TRACKING <-> PAUSED -> STOPPED
      \
       -> PERMISSION_DENIED

Location samples and timer ticks may arrive from different threads; every
public method runs under one re-entrant lock so the route and the live stats
are never mutated concurrently. The lock is re-entrant because a provider may
answer a permission request synchronously, calling back into the tracker
from inside start().
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Callable

from motra.core.constants import DEFAULT_BODY_WEIGHT_KG
from motra.core.exceptions import AlreadyFinalizedError, InvalidTransitionError
from motra.core.time_utils import utc_now
from motra.tracking import metrics
from motra.tracking.location import LocationProvider, PermissionStatus
from motra.tracking.records import ExerciseType, WorkoutRecord, WorkoutStats
from motra.tracking.route import IncrementalUpdate, RouteAccumulator
from motra.tracking.samples import GeoSample, RoutePoint

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TrackingState(str, Enum):
    idle = "idle"
    tracking = "tracking"
    paused = "paused"
    stopped = "stopped"
    permission_denied = "permission_denied"


class StartOutcome(str, Enum):
    started = "started"
    pending_permission = "pending_permission"
    permission_denied = "permission_denied"


class WorkoutTracker:
    """Owns one tracking session: state, route, live stats and timing.

    Args:
        location_provider: Source of permission status and pushed samples.
        clock: Returns the current aware datetime. Elapsed time is always
            ``clock() - start`` so missed ticks cost nothing.
        body_weight_kg: Weight used by the calorie model.
        min_sample_distance_m: Optional minimum-distance filter for the route.
        count_paused_time: When False (default) paused intervals are excluded
            from elapsed time. True keeps plain wall-clock time since start.
    """

    def __init__(
        self,
        location_provider: LocationProvider,
        clock: Clock = utc_now,
        body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG,
        min_sample_distance_m: float | None = None,
        count_paused_time: bool = False,
    ):
        self._provider = location_provider
        self._clock = clock
        self.body_weight_kg = body_weight_kg
        self.count_paused_time = count_paused_time

        self._lock = threading.RLock()
        self._state = TrackingState.idle
        self._pending_start = False
        self._route = RouteAccumulator(min_distance_m=min_sample_distance_m)
        self._stats = WorkoutStats()
        self._start_time: datetime | None = None
        self._end_time: datetime | None = None
        self._paused_at: datetime | None = None
        self._paused_seconds = 0.0
        self._finalized = False

    # ---- read side -------------------------------------------------------

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def pending_start(self) -> bool:
        return self._pending_start

    @property
    def start_time(self) -> datetime | None:
        return self._start_time

    @property
    def end_time(self) -> datetime | None:
        return self._end_time

    @property
    def paused_seconds(self) -> float:
        return self._paused_seconds

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def stats(self) -> WorkoutStats:
        """A copy of the live stats; the tracker keeps the original."""
        with self._lock:
            return self._stats.copy()

    @property
    def route(self) -> tuple[RoutePoint, ...]:
        with self._lock:
            return self._route.points

    # ---- transitions -----------------------------------------------------

    def start(self) -> StartOutcome:
        with self._lock:
            self._require("start", TrackingState.idle)
            if self._pending_start:
                return StartOutcome.pending_permission

            status = self._provider.permission_status()
            if status == PermissionStatus.denied:
                self._deny()
                return StartOutcome.permission_denied
            if status == PermissionStatus.authorized:
                self._begin()
                return StartOutcome.started

            self._pending_start = True
            logger.info("Location permission undetermined, start deferred")
            self._provider.request_permission(self._on_permission_decided)
            # The provider may have answered synchronously.
            if self._state == TrackingState.tracking:
                return StartOutcome.started
            if self._state == TrackingState.permission_denied:
                return StartOutcome.permission_denied
            return StartOutcome.pending_permission

    def _on_permission_decided(self, status: PermissionStatus) -> None:
        with self._lock:
            if not self._pending_start or self._state != TrackingState.idle:
                return
            self._pending_start = False
            if status == PermissionStatus.authorized:
                self._begin()
            else:
                self._deny()

    def _deny(self) -> None:
        self._pending_start = False
        self._state = TrackingState.permission_denied
        logger.warning("Location permission denied, tracking will not start")

    def _begin(self) -> None:
        self._route.reset()
        self._stats = WorkoutStats()
        self._start_time = self._clock()
        self._end_time = None
        self._paused_at = None
        self._paused_seconds = 0.0
        self._state = TrackingState.tracking
        self._provider.start_updates(self.on_sample_received)
        logger.info("Tracking started at %s", self._start_time.isoformat())

    def pause(self) -> None:
        with self._lock:
            self._require("pause", TrackingState.tracking)
            now = self._clock()
            self._update_elapsed(now)
            self._paused_at = now
            self._state = TrackingState.paused
            self._provider.stop_updates()
            logger.info("Tracking paused after %.0fs", self._stats.elapsed_seconds)

    def resume(self) -> None:
        with self._lock:
            self._require("resume", TrackingState.paused)
            self._close_pause(self._clock())
            self._state = TrackingState.tracking
            self._provider.start_updates(self.on_sample_received)
            logger.info("Tracking resumed, %.0fs paused so far", self._paused_seconds)

    def stop(self) -> None:
        with self._lock:
            self._require("stop", TrackingState.tracking, TrackingState.paused)
            now = self._clock()
            if self._state == TrackingState.tracking:
                self._update_elapsed(now)
            else:
                self._close_pause(now)
            self._end_time = now
            self._state = TrackingState.stopped
            self._provider.stop_updates()
            logger.info(
                "Tracking stopped: %.1fm in %.0fs, %d route points",
                self._stats.distance_m,
                self._stats.elapsed_seconds,
                len(self._route),
            )

    def finalize(self, exercise_type: ExerciseType | str, notes: str | None = None) -> WorkoutRecord:
        """Build the immutable record for a stopped session. Allowed once."""
        with self._lock:
            self._require("finalize", TrackingState.stopped)
            if self._finalized:
                raise AlreadyFinalizedError("workout session was already finalized")

            stats = self._stats
            record = WorkoutRecord(
                exercise_type=ExerciseType(exercise_type),
                start_time=self._start_time,
                end_time=self._end_time,
                duration_seconds=stats.elapsed_seconds,
                distance_m=stats.distance_m,
                calories_kcal=metrics.calories(stats.distance_m, self.body_weight_kg),
                pace_s_per_km=metrics.pace(stats.distance_m, stats.elapsed_seconds),
                notes=notes,
                route=self._route.points,
            )
            self._finalized = True
            logger.info("Finalized %s workout %s", record.exercise_type.value, record.id)
            return record

    # ---- event sources ---------------------------------------------------

    def on_sample_received(self, sample: GeoSample) -> IncrementalUpdate | None:
        with self._lock:
            if self._state != TrackingState.tracking:
                logger.debug("Dropping sample while %s", self._state.value)
                return None
            update = self._route.add_sample(sample)
            self._stats.distance_m = update.distance_m
            self._stats.current_speed_mps = update.current_speed_mps
            self._refresh_derived()
            return update

    def tick(self) -> None:
        with self._lock:
            if self._state != TrackingState.tracking:
                return
            self._update_elapsed(self._clock())

    # ---- helpers ---------------------------------------------------------

    def _require(self, operation: str, *allowed: TrackingState) -> None:
        if self._state not in allowed:
            raise InvalidTransitionError(operation, self._state)

    def _close_pause(self, now: datetime) -> None:
        if self._paused_at is not None:
            self._paused_seconds += max(0.0, (now - self._paused_at).total_seconds())
            self._paused_at = None

    def _update_elapsed(self, now: datetime) -> None:
        elapsed = (now - self._start_time).total_seconds()
        if not self.count_paused_time:
            elapsed -= self._paused_seconds
        self._stats.elapsed_seconds = max(0.0, elapsed)
        self._refresh_derived()

    def _refresh_derived(self) -> None:
        stats = self._stats
        if stats.elapsed_seconds > 0:
            stats.pace_s_per_km = metrics.pace(stats.distance_m, stats.elapsed_seconds)
        stats.calories_kcal = metrics.calories(stats.distance_m, self.body_weight_kg)
