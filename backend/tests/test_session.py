import threading
import time

import pytest

from helpers import FlakyStore, sample
from motra.core.config import Settings
from motra.core.exceptions import AlreadyFinalizedError, InvalidTransitionError, RepositoryError
from motra.tracking.location import PermissionStatus, PushLocationProvider
from motra.tracking.records import ExerciseType
from motra.tracking.session import Ticker, TrackingSession, build_tracking_session
from motra.tracking.tracker import StartOutcome, TrackingState, WorkoutTracker


class MemoryStore:
    def __init__(self):
        self.saved = []

    def save(self, record):
        self.saved.append(record)


class SignallingTracker(WorkoutTracker):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.ticked = threading.Event()

    def tick(self):
        super().tick()
        self.ticked.set()


def stopped_session(session, clock):
    session.set_permission(PermissionStatus.authorized)
    session.start()
    session.push_sample(sample(0))
    clock.advance(60)
    session.tick()
    session.push_sample(sample(200, t_s=60))
    session.stop()
    return session


def test_finish_saves_once(session, clock):
    store = MemoryStore()
    stopped_session(session, clock)

    record = session.finish(ExerciseType.running, store, notes="easy")
    again = session.finish(ExerciseType.running, store, notes="easy")

    assert again is record
    assert store.saved == [record]
    assert record.notes == "easy"
    assert record.distance_m == pytest.approx(200, rel=0.001)


def test_failed_save_keeps_record_for_retry(session, clock):
    store = FlakyStore(failures=1)
    stopped_session(session, clock)

    with pytest.raises(RepositoryError):
        session.finish(ExerciseType.running, store)
    assert session.record is not None
    assert not session.saved

    record = session.finish(ExerciseType.running, store)
    assert record is session.record
    assert store.saved == [record]
    assert session.saved


def test_retry_with_different_details_is_rejected(session, clock):
    store = FlakyStore(failures=1)
    stopped_session(session, clock)
    with pytest.raises(RepositoryError):
        session.finish(ExerciseType.running, store, notes="intervals")

    with pytest.raises(AlreadyFinalizedError):
        session.finish(ExerciseType.cycling, store, notes="intervals")
    with pytest.raises(AlreadyFinalizedError):
        session.finish(ExerciseType.running, store)
    assert store.saved == []

    record = session.finish("running", store, notes="intervals")
    assert store.saved == [record]


def test_finish_before_stop_is_rejected(session):
    session.set_permission(PermissionStatus.authorized)
    session.start()
    with pytest.raises(InvalidTransitionError):
        session.finish(ExerciseType.running, MemoryStore())


def test_tracker_cannot_be_finalized_twice_behind_the_session(session, clock):
    stopped_session(session, clock)
    session.finish(ExerciseType.running, MemoryStore())
    with pytest.raises(AlreadyFinalizedError):
        session.tracker.finalize(ExerciseType.running)


def test_push_sample_reports_dropped(session):
    assert session.push_sample(sample(0)) is False

    session.set_permission(PermissionStatus.authorized)
    session.start()
    assert session.push_sample(sample(0)) is True
    session.pause()
    assert session.push_sample(sample(10, t_s=1)) is False


def test_reset_gives_a_fresh_tracker(session, clock):
    stopped_session(session, clock)
    session.finish(ExerciseType.running, MemoryStore())
    old = session.tracker

    session.reset()

    assert session.tracker is not old
    assert session.state == TrackingState.idle
    assert session.record is None
    assert not session.saved
    assert session.start() == StartOutcome.started


def test_reset_while_tracking_is_rejected(session):
    session.set_permission(PermissionStatus.authorized)
    session.start()
    with pytest.raises(InvalidTransitionError):
        session.reset()


def test_reset_after_denial(session):
    session.set_permission(PermissionStatus.denied)
    assert session.start() == StartOutcome.permission_denied

    session.reset()
    session.set_permission(PermissionStatus.authorized)
    assert session.start() == StartOutcome.started


def test_ticker_calls_until_halted():
    ticked = threading.Event()
    calls = []

    def tick():
        calls.append(1)
        ticked.set()

    ticker = Ticker(0.01, tick)
    ticker.start()
    assert ticked.wait(2.0)
    ticker.halt()

    assert not ticker.is_alive()
    count = len(calls)
    assert count >= 1
    time.sleep(0.05)
    assert len(calls) == count


def test_session_runs_and_halts_its_ticker(clock):
    provider = PushLocationProvider(PermissionStatus.authorized)
    session = TrackingSession(provider, lambda p: SignallingTracker(p, clock=clock), tick_interval_s=0.01)
    session.start()
    assert session.tracker.ticked.wait(2.0)
    ticker = session._ticker

    session.stop()

    assert session._ticker is None
    assert not ticker.is_alive()


def test_build_tracking_session_uses_settings(clock):
    settings = Settings(body_weight_kg=80.0, min_sample_distance_m=5.0, count_paused_time=True, tick_interval_s=2.0)

    session = build_tracking_session(settings, clock=clock, tick_interval_s=None)

    assert session.tick_interval_s == 2.0
    assert session.tracker.body_weight_kg == 80.0
    assert session.tracker.count_paused_time is True
    assert session.provider.permission_status() == PermissionStatus.undetermined


def running_tickers():
    return [t for t in threading.enumerate() if t.name == "motra-ticker" and t.is_alive()]


def test_ticker_only_runs_once_permission_is_granted(clock):
    before = len(running_tickers())
    session = TrackingSession(PushLocationProvider(), lambda p: SignallingTracker(p, clock=clock), tick_interval_s=0.01)

    assert session.start() == StartOutcome.pending_permission
    assert session._ticker is None

    session.set_permission(PermissionStatus.authorized)
    assert session.tracker.ticked.wait(2.0)
    assert len(running_tickers()) == before + 1

    session.stop()
    assert len(running_tickers()) == before


def test_denied_after_pending_start_leaves_no_ticker(clock):
    before = len(running_tickers())
    session = TrackingSession(PushLocationProvider(), lambda p: SignallingTracker(p, clock=clock), tick_interval_s=0.01)

    session.start()
    session.set_permission(PermissionStatus.denied)

    assert session.state == TrackingState.permission_denied
    assert session._ticker is None
    assert len(running_tickers()) == before


def test_concurrent_starts_share_one_ticker(clock):
    before = len(running_tickers())
    session = TrackingSession(PushLocationProvider(), lambda p: SignallingTracker(p, clock=clock), tick_interval_s=0.01)
    ready = threading.Barrier(4)
    outcomes = []

    def start():
        ready.wait()
        outcomes.append(session.start())

    threads = [threading.Thread(target=start) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(5)
    session.set_permission(PermissionStatus.authorized)

    assert outcomes == [StartOutcome.pending_permission] * 4
    assert session.tracker.ticked.wait(2.0)
    assert len(running_tickers()) == before + 1

    session.stop()
    session.close()
    assert len(running_tickers()) == before


def test_start_during_reset_waits_for_the_new_tracker(clock):
    provider = PushLocationProvider(PermissionStatus.authorized)
    trackers = []
    racing = []

    def make_tracker(p):
        tracker = SignallingTracker(p, clock=clock)
        trackers.append(tracker)
        if len(trackers) == 2:
            # a start request arriving while reset is building the new tracker
            t = threading.Thread(target=session.start)
            racing.append(t)
            t.start()
            time.sleep(0.05)
        return tracker

    session = TrackingSession(provider, make_tracker, tick_interval_s=0.01)
    session.start()
    session.stop()

    session.reset()
    racing[0].join(5)

    old, new = trackers
    assert old.state == TrackingState.stopped
    assert session.tracker is new
    assert new.state == TrackingState.tracking
    assert new.ticked.wait(2.0)

    session.stop()
    assert session._ticker is None
