from datetime import datetime

from pydantic import BaseModel

from motra.stats.periods import PeriodStatistics, TimePeriod


class ChartPointRead(BaseModel):
    label: str
    distance_m: float


class PeriodStatisticsRead(BaseModel):
    period: TimePeriod
    start: datetime
    end: datetime
    total_distance_m: float
    total_time_s: float
    total_time: str
    total_calories_kcal: float
    workout_count: int
    average_distance_m: float
    average_pace_s_per_km: float
    average_pace: str
    workouts_by_type: dict[str, int]
    chart: list[ChartPointRead]

    @classmethod
    def from_period(cls, result: PeriodStatistics) -> "PeriodStatisticsRead":
        s = result.statistics
        return cls(
            period=result.period,
            start=result.start,
            end=result.end,
            total_distance_m=s.total_distance_m,
            total_time_s=s.total_time_s,
            total_time=s.total_time_display,
            total_calories_kcal=s.total_calories_kcal,
            workout_count=s.workout_count,
            average_distance_m=s.average_distance_m,
            average_pace_s_per_km=s.average_pace_s_per_km,
            average_pace=s.average_pace_display,
            workouts_by_type=s.workouts_by_type,
            chart=[ChartPointRead(label=p.label, distance_m=p.value) for p in result.chart],
        )
