import math

from motra.core.constants import EARTH_RADIUS_M


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return great-circle distance in meters between two WGS84 points.

    Uses the standard haversine formula; sufficient for per-point distances
    over a typical GPS activity track.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def route_bounds(coords: list[tuple[float, float]]) -> dict | None:
    """Bounding box of (lat, lon) pairs as {minLat, minLon, maxLat, maxLon}."""
    if not coords:
        return None
    lats = [lat for lat, _ in coords]
    lons = [lon for _, lon in coords]
    return {
        "minLat": min(lats),
        "minLon": min(lons),
        "maxLat": max(lats),
        "maxLon": max(lons),
    }


def route_geojson(coords: list[tuple[float, float]]) -> dict | None:
    """GeoJSON LineString for (lat, lon) pairs. GeoJSON wants [lon, lat]."""
    if not coords:
        return None
    return {"type": "LineString", "coordinates": [[lon, lat] for lat, lon in coords]}
