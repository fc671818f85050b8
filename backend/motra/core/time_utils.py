from datetime import date, datetime, time, timezone

from motra.core.constants import UNDEFINED_PACE


def seconds_to_hhmmss(total_seconds: float) -> str:
    """
    Convert total seconds -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    total = int(total_seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_duration(total_seconds: float) -> str:
    """
    Stopwatch style duration: 'MM:SS' under an hour, 'H:MM:SS' above.
    Example: 754 -> '12:34', 3725 -> '1:02:05'
    """
    total = int(total_seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def format_pace(pace_s_per_km: float) -> str:
    """
    Pace per km as 'M:SS'. A pace of 0 means undefined and renders '--:--'.
    Example: 330 -> '5:30'
    """
    if pace_s_per_km <= 0:
        return UNDEFINED_PACE
    pace_sec = int(pace_s_per_km)
    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}"


def epoch_ms_to_datetime(epoch_ms: int) -> datetime:
    """Unix epoch milliseconds -> aware UTC datetime."""
    return datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc)


def datetime_to_epoch_ms(dt: datetime) -> int:
    """Aware datetime -> Unix epoch milliseconds. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(round(dt.timestamp() * 1000))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'Asia/Seoul'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return dt.astimezone(ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            return dt.astimezone()
    return dt.astimezone()


def local_day_start(d: date, tz_name: str | None = None) -> datetime:
    """Midnight at the start of day ``d`` in ``tz_name`` ('local'/None = system tz)."""
    naive = datetime.combine(d, time.min)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return naive.replace(tzinfo=ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return naive.astimezone()
