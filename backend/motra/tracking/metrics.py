"""
Derived workout metrics.

Pure functions of (distance, elapsed time); the tracker calls them on every
sample and tick, and again at finalize time with the same inputs.
"""
from motra.core.constants import DEFAULT_BODY_WEIGHT_KG, METERS_PER_KM


def pace(distance_m: float, elapsed_s: float) -> float:
    """
    Pace in seconds per km.

    Returns 0 (undefined, rendered as '--:--') until some distance is covered.

    Examples:
        >>> pace(5000, 1500)
        300.0
        >>> pace(0, 60)
        0.0
    """
    if distance_m <= 0:
        return 0.0
    return elapsed_s / (distance_m / METERS_PER_KM)


def calories(distance_m: float, body_weight_kg: float = DEFAULT_BODY_WEIGHT_KG) -> float:
    """
    Energy estimate in kcal: ~1 kcal per kg of body weight per km.

    This is a linear approximation and ignores the exercise type; a 10 km
    ride and a 10 km run cost the same here.

    Examples:
        >>> calories(10_000)
        700.0
    """
    return (distance_m / METERS_PER_KM) * body_weight_kg


def speed_kmh(speed_mps: float) -> float:
    """m/s -> km/h, with unknown (negative) speeds reported as 0."""
    if speed_mps < 0:
        return 0.0
    return speed_mps * 3.6
