from fastapi import APIRouter, Depends, Query

from motra.api.deps import get_store
from motra.repositories.workouts import SqlWorkoutStore
from motra.schemas.tier import TierHistoryEntryRead, TierProgressRead
from motra.tiers.calculator import progress_for
from motra.tiers.history import build_tier_history, grade_milestones, lifetime_distance_m

router = APIRouter(prefix="/tiers", tags=["tiers"])


@router.get("/progress", response_model=TierProgressRead)
def get_tier_progress(store: SqlWorkoutStore = Depends(get_store)):
    total_m = lifetime_distance_m(store.fetch_all())
    return TierProgressRead.from_progress(progress_for(total_m))


@router.get("/history", response_model=list[TierHistoryEntryRead])
def get_tier_history(
    grades_only: bool = Query(False),
    store: SqlWorkoutStore = Depends(get_store),
):
    """
    Tier changes replayed from every stored workout, oldest first.

    With ``grades_only`` only the first entry of each grade is returned.
    """
    history = build_tier_history(store.fetch_all())
    if grades_only:
        history = grade_milestones(history)
    return [TierHistoryEntryRead.from_entry(e) for e in history]
