from datetime import date, datetime, timezone

from motra.core.geo import haversine_m, route_bounds, route_geojson
from motra.core.time_utils import (
    datetime_to_epoch_ms,
    epoch_ms_to_datetime,
    format_duration,
    format_pace,
    local_day_start,
    seconds_to_hhmmss,
    to_local_datetime,
)


def test_seconds_to_hhmmss():
    assert seconds_to_hhmmss(0) == "00:00:00"
    assert seconds_to_hhmmss(2732) == "00:45:32"
    assert seconds_to_hhmmss(3725.9) == "01:02:05"


def test_format_duration():
    assert format_duration(754) == "12:34"
    assert format_duration(3725) == "1:02:05"


def test_format_pace():
    assert format_pace(330) == "5:30"
    assert format_pace(0) == "--:--"


def test_epoch_ms_conversions():
    dt = datetime(2025, 3, 1, 7, 0, 0, 250_000, tzinfo=timezone.utc)
    ms = datetime_to_epoch_ms(dt)
    assert ms == 1740812400250
    assert epoch_ms_to_datetime(ms) == dt
    # naive values are read as UTC
    assert datetime_to_epoch_ms(datetime(2025, 3, 1, 7, 0)) == 1740812400000


def test_to_local_datetime_with_named_zone():
    dt = datetime(2025, 3, 1, 23, 30, tzinfo=timezone.utc)
    local = to_local_datetime(dt, "Asia/Seoul")
    assert (local.day, local.hour) == (2, 8)


def test_unknown_zone_falls_back_to_system():
    dt = datetime(2025, 3, 1, 23, 30, tzinfo=timezone.utc)
    assert to_local_datetime(dt, "Not/AZone") == dt


def test_local_day_start():
    start = local_day_start(date(2025, 3, 2), "Asia/Seoul")
    assert start == datetime(2025, 3, 1, 15, 0, tzinfo=timezone.utc)


def test_haversine_one_degree_of_latitude():
    assert 111_000 < haversine_m(0, 0, 1, 0) < 111_400
    assert haversine_m(37.5, 127.0, 37.5, 127.0) == 0


def test_route_shapes():
    coords = [(37.5, 127.0), (37.6, 126.9)]
    assert route_bounds(coords) == {"minLat": 37.5, "minLon": 126.9, "maxLat": 37.6, "maxLon": 127.0}
    assert route_geojson(coords)["coordinates"][0] == [127.0, 37.5]
    assert route_bounds([]) is None
    assert route_geojson([]) is None
