"""
Timezone utilities for calview.

The engine works in naive local time throughout. These helpers define
"local" (a configurable pytz zone), answer "what is today", and fold any
timezone-aware datetimes handed in by the host into naive local time.
"""

from datetime import datetime, date, time as dt_time
import time as _time
import pytz


DEFAULT_TIMEZONE = "Europe/Amsterdam"

# Default timezone - can be overridden by config
_local_timezone_name: str = DEFAULT_TIMEZONE


def set_timezone(timezone_name: str):
    """Set the local timezone for the engine."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_timezone_name() -> str:
    return _local_timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Returns:
        pytz timezone object for the configured local timezone.
    """
    try:
        return pytz.timezone(_local_timezone_name)
    except pytz.UnknownTimeZoneError:
        # Fallback: fixed offset of the host system
        is_dst = _time.localtime().tm_isdst
        if is_dst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def to_local_naive(dt: datetime) -> datetime:
    """
    Convert a datetime to a naive local datetime.

    Aware datetimes are converted into the configured zone and stripped
    of tzinfo. Naive datetimes are assumed to be local already.
    """
    if dt.tzinfo is not None:
        return dt.astimezone(get_local_timezone()).replace(tzinfo=None)
    return dt


def local_naive_to_utc(dt: datetime) -> datetime:
    """
    Convert a naive local datetime to UTC.

    Used when exporting events to formats that want absolute instants.
    """
    if dt.tzinfo is None:
        local_dt = get_local_timezone().localize(dt)
        return local_dt.astimezone(pytz.UTC)
    return dt.astimezone(pytz.UTC)


def now() -> datetime:
    """Current wall-clock time as a naive local datetime."""
    return datetime.now(get_local_timezone()).replace(tzinfo=None)


def today() -> date:
    """Current date in the configured timezone."""
    return now().date()


def as_datetime(value: "date | datetime", hour: int = 0) -> datetime:
    """
    Promote a date to a naive datetime at the given hour.

    Datetimes pass through (normalised to naive local).
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    return datetime.combine(value, dt_time(hour=hour))
