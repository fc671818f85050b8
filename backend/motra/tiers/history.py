"""Tier promotion history, replayed from the workout list."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from motra.core.time_utils import utc_now
from motra.tiers.calculator import LOWEST_TIER, Tier, tier_for
from motra.tracking.records import WorkoutRecord


@dataclass(frozen=True, slots=True)
class TierHistoryEntry:
    tier: Tier
    achieved_at: datetime
    cumulative_distance_m: float


def build_tier_history(
    workouts: Iterable[WorkoutRecord],
    now: datetime | None = None,
) -> list[TierHistoryEntry]:
    """Replay lifetime distance in start-time order and record every tier change.

    The input may come in any order and is not modified. The first workout
    always produces an entry; after that an entry is added only when the tier
    differs from the previous one, stamped with the start time of the workout
    that caused it.

    With no workouts the result is a single Bronze 4 entry at ``now``
    (defaults to the current time) so there is always something to plot.
    """
    ordered = sorted(workouts, key=lambda w: w.start_time)
    if not ordered:
        return [TierHistoryEntry(LOWEST_TIER, now or utc_now(), 0.0)]

    history: list[TierHistoryEntry] = []
    cumulative_m = 0.0
    last_tier: Tier | None = None
    for workout in ordered:
        cumulative_m += workout.distance_m
        tier = tier_for(cumulative_m)
        if tier != last_tier:
            history.append(TierHistoryEntry(tier, workout.start_time, cumulative_m))
            last_tier = tier
    return history


def lifetime_distance_m(workouts: Iterable[WorkoutRecord]) -> float:
    return sum(w.distance_m for w in workouts)


def grade_milestones(history: Iterable[TierHistoryEntry]) -> list[TierHistoryEntry]:
    """First entry of each grade reached, dropping division-only promotions."""
    milestones: list[TierHistoryEntry] = []
    for entry in history:
        if not milestones or milestones[-1].tier.grade != entry.tier.grade:
            milestones.append(entry)
    return milestones
