"""
Tier calculation.

Lifetime distance maps onto eight grades, each split into four divisions of
equal width. Division 4 is the entry division of a grade and division 1 the
last one before promotion:

    Bronze 4 (0 km) ... Bronze 1 -> Silver 4 (50 km) ... GrandMaster 1

Distances past GrandMaster's nominal end stay at GrandMaster 1.
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum, IntEnum

from motra.core.constants import METERS_PER_KM, TIER_THRESHOLDS_KM

DIVISIONS_PER_GRADE = 4


class TierGrade(str, Enum):
    bronze = "bronze"
    silver = "silver"
    gold = "gold"
    platinum = "platinum"
    diamond = "diamond"
    red_diamond = "red_diamond"
    master = "master"
    grand_master = "grand_master"

    @property
    def rank(self) -> int:
        """0 for Bronze up to 7 for GrandMaster."""
        return _GRADE_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return _GRADE_NAMES[self]


_GRADE_ORDER = list(TierGrade)
_GRADE_NAMES = {
    TierGrade.bronze: "Bronze",
    TierGrade.silver: "Silver",
    TierGrade.gold: "Gold",
    TierGrade.platinum: "Platinum",
    TierGrade.diamond: "Diamond",
    TierGrade.red_diamond: "Red Diamond",
    TierGrade.master: "Master",
    TierGrade.grand_master: "Grand Master",
}


class TierDivision(IntEnum):
    four = 4
    three = 3
    two = 2
    one = 1


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Tier:
    grade: TierGrade
    division: TierDivision

    @property
    def level(self) -> int:
        """Position on a single 0..31 scale (graph Y axis): Bronze 4 = 0, GrandMaster 1 = 31."""
        return self.grade.rank * DIVISIONS_PER_GRADE + (DIVISIONS_PER_GRADE - int(self.division))

    @property
    def display_name(self) -> str:
        return f"{self.grade.display_name} {int(self.division)}"

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.level < other.level


@dataclass(frozen=True, slots=True)
class TierThreshold:
    grade: TierGrade
    start_km: float
    end_km: float

    @property
    def division_width_km(self) -> float:
        return (self.end_km - self.start_km) / DIVISIONS_PER_GRADE


TIER_THRESHOLDS: tuple[TierThreshold, ...] = tuple(
    TierThreshold(TierGrade(grade), start, end) for grade, start, end in TIER_THRESHOLDS_KM
)

LOWEST_TIER = Tier(TierGrade.bronze, TierDivision.four)
HIGHEST_TIER = Tier(TierGrade.grand_master, TierDivision.one)


@dataclass(frozen=True, slots=True)
class TierProgress:
    current_tier: Tier
    next_tier: Tier | None
    current_distance_m: float
    division_start_m: float
    division_end_m: float

    @property
    def progress_fraction(self) -> float:
        """How far through the current division, clamped to [0, 1]."""
        span = self.division_end_m - self.division_start_m
        if span <= 0:
            return 1.0
        fraction = (self.current_distance_m - self.division_start_m) / span
        return min(max(fraction, 0.0), 1.0)

    @property
    def remaining_distance_m(self) -> float:
        return max(self.division_end_m - self.current_distance_m, 0.0)


def _division_for(distance_km: float, threshold: TierThreshold) -> TierDivision:
    fraction = (distance_km - threshold.start_km) / (threshold.end_km - threshold.start_km)
    if fraction < 0.25:
        return TierDivision.four
    if fraction < 0.5:
        return TierDivision.three
    if fraction < 0.75:
        return TierDivision.two
    return TierDivision.one


def _check_distance(distance_m: float) -> None:
    if distance_m < 0:
        raise ValueError(f"distance must be >= 0, got {distance_m}")


def tier_for(distance_m: float) -> Tier:
    """
    Tier reached with ``distance_m`` meters of lifetime distance.

    Examples:
        >>> tier_for(0).display_name
        'Bronze 4'
        >>> tier_for(50_000).display_name
        'Silver 4'
    """
    _check_distance(distance_m)
    distance_km = distance_m / METERS_PER_KM
    for threshold in TIER_THRESHOLDS:
        if threshold.start_km <= distance_km < threshold.end_km:
            return Tier(threshold.grade, _division_for(distance_km, threshold))
    return HIGHEST_TIER


def _threshold_index(grade: TierGrade) -> int:
    for index, threshold in enumerate(TIER_THRESHOLDS):
        if threshold.grade == grade:
            return index
    raise KeyError(grade)


def next_tier(tier: Tier) -> Tier | None:
    """The tier after ``tier``, or None at GrandMaster 1."""
    if tier.division != TierDivision.one:
        return Tier(tier.grade, TierDivision(int(tier.division) - 1))
    index = _threshold_index(tier.grade)
    if index + 1 < len(TIER_THRESHOLDS):
        return Tier(TIER_THRESHOLDS[index + 1].grade, TierDivision.four)
    return None


def division_range_m(tier: Tier) -> tuple[float, float]:
    """[start, end) of the tier's division in meters."""
    threshold = TIER_THRESHOLDS[_threshold_index(tier.grade)]
    width = threshold.division_width_km
    start_km = threshold.start_km + (DIVISIONS_PER_GRADE - int(tier.division)) * width
    return start_km * METERS_PER_KM, (start_km + width) * METERS_PER_KM


def progress_for(distance_m: float) -> TierProgress:
    current = tier_for(distance_m)
    start_m, end_m = division_range_m(current)
    return TierProgress(
        current_tier=current,
        next_tier=next_tier(current),
        current_distance_m=distance_m,
        division_start_m=start_m,
        division_end_m=end_m,
    )
