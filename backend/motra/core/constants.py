"""Shared application constants.

Centralizes repeat values used across tracking, tier and import logic so we
can document and adjust them in one place.
"""

# Mean Earth radius in meters (haversine)
EARTH_RADIUS_M = 6_371_000.0

METERS_PER_KM = 1000.0

# Default body weight for the calorie model (kg)
DEFAULT_BODY_WEIGHT_KG = 70.0

# Shown instead of a pace when distance is still zero
UNDEFINED_PACE = "--:--"

# FIT stores positions as semicircles
SEMICIRCLES_PER_DEGREE = 2**31 / 180

# Tier table: (grade value, start km, end km). Contiguous and increasing.
# The last row's end is nominal; anything past it stays GrandMaster 1.
TIER_THRESHOLDS_KM = [
    ("bronze", 0.0, 50.0),
    ("silver", 50.0, 150.0),
    ("gold", 150.0, 350.0),
    ("platinum", 350.0, 700.0),
    ("diamond", 700.0, 1200.0),
    ("red_diamond", 1200.0, 2000.0),
    ("master", 2000.0, 3500.0),
    ("grand_master", 3500.0, 10000.0),
]
