from fastapi import APIRouter, Depends, Query

from motra.api.deps import get_store
from motra.core.config import settings
from motra.core.time_utils import utc_now
from motra.repositories.workouts import SqlWorkoutStore
from motra.schemas.stats import PeriodStatisticsRead
from motra.stats.periods import TimePeriod, period_bounds, period_statistics

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/", response_model=PeriodStatisticsRead)
def get_period_statistics(
    period: TimePeriod = Query(TimePeriod.weekly),
    store: SqlWorkoutStore = Depends(get_store),
):
    now = utc_now()
    start, _ = period_bounds(period, now, settings.timezone)
    # narrow in the query; period_statistics applies the exact bounds
    workouts = store.fetch_all(start=start)
    result = period_statistics(workouts, period, now=now, tz_name=settings.timezone)
    return PeriodStatisticsRead.from_period(result)
