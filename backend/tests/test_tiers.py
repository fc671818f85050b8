import pytest

from motra.tiers.calculator import (
    HIGHEST_TIER,
    LOWEST_TIER,
    TIER_THRESHOLDS,
    Tier,
    TierDivision,
    TierGrade,
    division_range_m,
    next_tier,
    progress_for,
    tier_for,
)


@pytest.mark.parametrize(
    "distance_m, expected",
    [
        (0, Tier(TierGrade.bronze, TierDivision.four)),
        (12_499, Tier(TierGrade.bronze, TierDivision.four)),
        (12_500, Tier(TierGrade.bronze, TierDivision.three)),
        (25_000, Tier(TierGrade.bronze, TierDivision.two)),
        (37_500, Tier(TierGrade.bronze, TierDivision.one)),
        (49_999, Tier(TierGrade.bronze, TierDivision.one)),
        (50_000, Tier(TierGrade.silver, TierDivision.four)),
        (149_999, Tier(TierGrade.silver, TierDivision.one)),
        (150_000, Tier(TierGrade.gold, TierDivision.four)),
        (700_000, Tier(TierGrade.diamond, TierDivision.four)),
        (1_200_000, Tier(TierGrade.red_diamond, TierDivision.four)),
        (3_500_000, Tier(TierGrade.grand_master, TierDivision.four)),
    ],
)
def test_tier_boundaries(distance_m, expected):
    assert tier_for(distance_m) == expected


def test_beyond_last_threshold_stays_at_grand_master_one():
    assert tier_for(10_000_000) == HIGHEST_TIER
    assert tier_for(250_000_000) == HIGHEST_TIER


def test_negative_distance_rejected():
    with pytest.raises(ValueError):
        tier_for(-1)


def test_tier_is_monotonic_in_distance():
    tiers = [tier_for(km * 1000) for km in range(0, 12_000, 7)]
    assert all(a <= b for a, b in zip(tiers, tiers[1:]))


def test_thresholds_are_contiguous():
    assert TIER_THRESHOLDS[0].start_km == 0
    for lower, upper in zip(TIER_THRESHOLDS, TIER_THRESHOLDS[1:]):
        assert lower.end_km == upper.start_km
    assert len(TIER_THRESHOLDS) == len(TierGrade)


def test_level_scale():
    assert LOWEST_TIER.level == 0
    assert HIGHEST_TIER.level == 31
    assert Tier(TierGrade.silver, TierDivision.four).level == 4
    assert Tier(TierGrade.bronze, TierDivision.one) < Tier(TierGrade.silver, TierDivision.four)


def test_display_name():
    assert tier_for(0).display_name == "Bronze 4"
    assert Tier(TierGrade.red_diamond, TierDivision.two).display_name == "Red Diamond 2"
    assert HIGHEST_TIER.display_name == "Grand Master 1"


def test_next_tier():
    assert next_tier(LOWEST_TIER) == Tier(TierGrade.bronze, TierDivision.three)
    assert next_tier(Tier(TierGrade.bronze, TierDivision.one)) == Tier(TierGrade.silver, TierDivision.four)
    assert next_tier(HIGHEST_TIER) is None


def test_division_range():
    assert division_range_m(LOWEST_TIER) == pytest.approx((0, 12_500))
    assert division_range_m(Tier(TierGrade.silver, TierDivision.two)) == pytest.approx((100_000, 125_000))


def test_progress_within_division():
    progress = progress_for(56_250)

    assert progress.current_tier == Tier(TierGrade.silver, TierDivision.four)
    assert progress.next_tier == Tier(TierGrade.silver, TierDivision.three)
    assert progress.division_start_m == pytest.approx(50_000)
    assert progress.division_end_m == pytest.approx(75_000)
    assert progress.progress_fraction == pytest.approx(0.25)
    assert progress.remaining_distance_m == pytest.approx(18_750)


def test_progress_past_the_top_is_clamped():
    progress = progress_for(12_000_000)

    assert progress.current_tier == HIGHEST_TIER
    assert progress.next_tier is None
    assert progress.progress_fraction == 1.0
    assert progress.remaining_distance_m == 0.0
