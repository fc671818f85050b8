"""
Period statistics for the statistics screen.

Weekly means the last 7 days up to now; monthly and yearly are the current
calendar month and year in the configured timezone.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable

from motra.core.time_utils import format_duration, format_pace, local_day_start, to_local_datetime, utc_now
from motra.tracking.records import WorkoutRecord


class TimePeriod(str, Enum):
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


@dataclass(frozen=True, slots=True)
class Statistics:
    total_distance_m: float = 0.0
    total_time_s: float = 0.0
    total_calories_kcal: float = 0.0
    workout_count: int = 0
    average_distance_m: float = 0.0
    average_pace_s_per_km: float = 0.0
    workouts_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def average_pace_display(self) -> str:
        return format_pace(self.average_pace_s_per_km)

    @property
    def total_time_display(self) -> str:
        return format_duration(self.total_time_s)


@dataclass(frozen=True, slots=True)
class ChartPoint:
    label: str
    value: float  # meters


@dataclass(frozen=True, slots=True)
class PeriodStatistics:
    period: TimePeriod
    start: datetime
    end: datetime
    statistics: Statistics
    chart: list[ChartPoint]


def period_bounds(period: TimePeriod, now: datetime, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """[start, end) of ``period`` around ``now``; weekly ends at ``now`` itself."""
    local_now = to_local_datetime(now, tz_name)
    if period == TimePeriod.weekly:
        return local_now - timedelta(days=7), local_now

    # each boundary gets the UTC offset in force on its own date (DST)
    today = local_now.date()
    if period == TimePeriod.monthly:
        first = today.replace(day=1)
        if first.month == 12:
            following = first.replace(year=first.year + 1, month=1)
        else:
            following = first.replace(month=first.month + 1)
    else:
        first = today.replace(month=1, day=1)
        following = first.replace(year=first.year + 1)
    return local_day_start(first, tz_name), local_day_start(following, tz_name)


def _in_period(workout: WorkoutRecord, start: datetime, end: datetime, period: TimePeriod) -> bool:
    # weekly includes its end instant, calendar periods are half-open
    if period == TimePeriod.weekly:
        return start <= workout.start_time <= end
    return start <= workout.start_time < end


def summarize(workouts: Iterable[WorkoutRecord]) -> Statistics:
    items = list(workouts)
    count = len(items)
    total_distance = sum(w.distance_m for w in items)
    by_type = Counter(w.exercise_type.value for w in items)
    return Statistics(
        total_distance_m=total_distance,
        total_time_s=sum(w.duration_seconds for w in items),
        total_calories_kcal=sum(w.calories_kcal for w in items),
        workout_count=count,
        average_distance_m=total_distance / count if count else 0.0,
        # plain mean of per-workout paces, zero paces included
        average_pace_s_per_km=sum(w.pace_s_per_km for w in items) / max(count, 1),
        workouts_by_type=dict(by_type),
    )


def _chart_key(local_dt: datetime, period: TimePeriod) -> tuple[date, str]:
    if period == TimePeriod.yearly:
        return local_dt.date().replace(day=1), f"{local_dt.month}"
    if period == TimePeriod.monthly:
        return local_dt.date(), f"{local_dt.day}"
    return local_dt.date(), f"{local_dt.month}/{local_dt.day}"


def chart_points(workouts: Iterable[WorkoutRecord], period: TimePeriod, tz_name: str | None = None) -> list[ChartPoint]:
    """Distance per day (per month for the yearly view), oldest first."""
    totals: dict[date, float] = {}
    labels: dict[date, str] = {}
    for w in workouts:
        key, label = _chart_key(to_local_datetime(w.start_time, tz_name), period)
        totals[key] = totals.get(key, 0.0) + w.distance_m
        labels[key] = label
    return [ChartPoint(label=labels[k], value=totals[k]) for k in sorted(totals)]


def period_statistics(
    workouts: Iterable[WorkoutRecord],
    period: TimePeriod,
    now: datetime | None = None,
    tz_name: str | None = None,
) -> PeriodStatistics:
    start, end = period_bounds(period, now or utc_now(), tz_name)
    selected = [w for w in workouts if _in_period(w, start, end, period)]
    return PeriodStatistics(
        period=period,
        start=start,
        end=end,
        statistics=summarize(selected),
        chart=chart_points(selected, period, tz_name),
    )
