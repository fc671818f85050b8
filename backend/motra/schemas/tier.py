from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from motra.tiers.calculator import Tier, TierGrade, TierProgress
from motra.tiers.history import TierHistoryEntry


class TierRead(BaseModel):
    grade: TierGrade
    division: int
    display_name: str  # e.g. "Gold 2"
    level: int  # 0 (Bronze 4) .. 31 (Grand Master 1)

    @classmethod
    def from_tier(cls, tier: Tier) -> "TierRead":
        return cls(
            grade=tier.grade,
            division=int(tier.division),
            display_name=tier.display_name,
            level=tier.level,
        )


class TierProgressRead(BaseModel):
    current_tier: TierRead
    next_tier: Optional[TierRead] = None
    current_distance_m: float
    division_start_m: float
    division_end_m: float
    progress: float  # 0..1 within the current division
    remaining_distance_m: float

    @classmethod
    def from_progress(cls, progress: TierProgress) -> "TierProgressRead":
        return cls(
            current_tier=TierRead.from_tier(progress.current_tier),
            next_tier=TierRead.from_tier(progress.next_tier) if progress.next_tier else None,
            current_distance_m=progress.current_distance_m,
            division_start_m=progress.division_start_m,
            division_end_m=progress.division_end_m,
            progress=progress.progress_fraction,
            remaining_distance_m=progress.remaining_distance_m,
        )


class TierHistoryEntryRead(BaseModel):
    tier: TierRead
    achieved_at: datetime
    cumulative_distance_m: float

    @classmethod
    def from_entry(cls, entry: TierHistoryEntry) -> "TierHistoryEntryRead":
        return cls(
            tier=TierRead.from_tier(entry.tier),
            achieved_at=entry.achieved_at,
            cumulative_distance_m=entry.cumulative_distance_m,
        )
