"""
The live tracking session behind the /tracking endpoints.

Wraps one WorkoutTracker with the 1 Hz ticker thread and the hand-off of the
finalized record to the record store. Only one session exists per app; it is
created at startup and handed to routes through a dependency, never imported
as a global.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable

from motra.core.config import Settings
from motra.core.exceptions import AlreadyFinalizedError, InvalidTransitionError, RepositoryError
from motra.core.time_utils import utc_now
from motra.repositories.workouts import WorkoutStore
from motra.tracking.location import PermissionStatus, PushLocationProvider
from motra.tracking.records import ExerciseType, WorkoutRecord, WorkoutStats
from motra.tracking.samples import GeoSample
from motra.tracking.tracker import Clock, StartOutcome, TrackingState, WorkoutTracker

logger = logging.getLogger(__name__)


class Ticker(threading.Thread):
    """Calls ``tick`` every ``interval`` seconds until halted."""

    def __init__(self, interval: float, tick: Callable[[], None]):
        super().__init__(name="motra-ticker", daemon=True)
        self.interval = interval
        self._tick = tick
        self._halt = threading.Event()

    def run(self) -> None:
        while not self._halt.wait(self.interval):
            self._tick()

    def halt(self) -> None:
        self._halt.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join()


class TrackingSession:
    """One live workout at a time, plus what happens after it stops.

    Every transition runs under the session lock, so a reset cannot swap the
    tracker out from under a concurrent start, and the ticker is always
    bound to the current tracker. The ticker only runs while that tracker is
    tracking or paused.

    Args:
        provider: Where samples and the permission decision come from.
        make_tracker: Builds a fresh tracker bound to ``provider``.
        tick_interval_s: Ticker period; None disables the thread (callers
            then drive ``tick`` themselves, as tests and replays do).
    """

    def __init__(
        self,
        provider: PushLocationProvider,
        make_tracker: Callable[[PushLocationProvider], WorkoutTracker],
        tick_interval_s: float | None = 1.0,
    ):
        self.provider = provider
        self._make_tracker = make_tracker
        self.tick_interval_s = tick_interval_s
        self._lock = threading.Lock()
        self._ticker: Ticker | None = None
        self.tracker = make_tracker(provider)
        self.record: WorkoutRecord | None = None
        self.saved = False

    @property
    def state(self) -> TrackingState:
        return self.tracker.state

    def start(self) -> StartOutcome:
        with self._lock:
            outcome = self.tracker.start()
            self._sync_ticker()
            return outcome

    def set_permission(self, status: PermissionStatus) -> None:
        """Report the permission decision; a deferred start runs (or is denied) now."""
        with self._lock:
            self.provider.set_permission(status)
            self._sync_ticker()

    def pause(self) -> None:
        with self._lock:
            self.tracker.pause()

    def resume(self) -> None:
        with self._lock:
            self.tracker.resume()

    def stop(self) -> None:
        with self._lock:
            self.tracker.stop()
            self._sync_ticker()

    def tick(self) -> None:
        with self._lock:
            self.tracker.tick()

    def push_sample(self, sample: GeoSample) -> bool:
        """Hand a sample to the provider. False when it was not consumed."""
        with self._lock:
            if not self.provider.push(sample):
                return False
            return self.tracker.state == TrackingState.tracking

    def stats(self) -> WorkoutStats:
        return self.tracker.stats

    def finish(
        self,
        exercise_type: ExerciseType | str,
        store: WorkoutStore,
        notes: str | None = None,
    ) -> WorkoutRecord:
        """Finalize the stopped session (once) and save the record.

        A failed save leaves the finalized record in place, so calling finish
        again retries the save with the same record. Once saved, further
        calls return the saved record without writing again. A retry must
        repeat the original exercise type and notes; different values raise
        AlreadyFinalizedError instead of being dropped.
        """
        with self._lock:
            if self.record is None:
                self.record = self.tracker.finalize(exercise_type, notes)
            elif (ExerciseType(exercise_type), notes) != (self.record.exercise_type, self.record.notes):
                raise AlreadyFinalizedError(
                    f"workout {self.record.id} was already finalized as "
                    f"{self.record.exercise_type.value} with notes {self.record.notes!r}"
                )
            if self.saved:
                return self.record
            try:
                store.save(self.record)
            except RepositoryError:
                logger.exception("Saving workout %s failed; record kept for retry", self.record.id)
                raise
            self.saved = True
            return self.record

    def reset(self) -> None:
        """Discard the current session and get ready for a new one."""
        with self._lock:
            state = self.tracker.state
            if state in (TrackingState.tracking, TrackingState.paused):
                raise InvalidTransitionError("reset", state)
            if self.record is not None and not self.saved:
                logger.warning("Discarding unsaved workout %s", self.record.id)
            self._halt_ticker()
            self.provider.stop_updates()
            self.tracker = self._make_tracker(self.provider)
            self.record = None
            self.saved = False

    def close(self) -> None:
        with self._lock:
            self._halt_ticker()

    # callers hold self._lock

    def _sync_ticker(self) -> None:
        if self.tracker.state in (TrackingState.tracking, TrackingState.paused):
            self._start_ticker()
        else:
            self._halt_ticker()

    def _start_ticker(self) -> None:
        if self.tick_interval_s is None or self._ticker is not None:
            return
        self._ticker = Ticker(self.tick_interval_s, self.tracker.tick)
        self._ticker.start()

    def _halt_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.halt()
            self._ticker = None


def build_tracking_session(
    settings: Settings,
    provider: PushLocationProvider | None = None,
    clock: Clock = utc_now,
    tick_interval_s: float | None = None,
) -> TrackingSession:
    """Session wired from settings. ``tick_interval_s`` overrides the setting."""

    def make_tracker(p: PushLocationProvider) -> WorkoutTracker:
        return WorkoutTracker(
            p,
            clock=clock,
            body_weight_kg=settings.body_weight_kg,
            min_sample_distance_m=settings.min_sample_distance_m,
            count_paused_time=settings.count_paused_time,
        )

    return TrackingSession(
        provider or PushLocationProvider(),
        make_tracker,
        tick_interval_s=tick_interval_s if tick_interval_s is not None else settings.tick_interval_s,
    )
