"""
Timezone-aware datetime utilities.

The engine works on aware datetimes in one configured timezone. Naive values
coming from callers are read as wall-clock time in that zone.
"""

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def get_tzinfo(name: str) -> tzinfo:
    """Resolve an IANA timezone name, short-circuiting UTC."""
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def now_in(timezone_name: str) -> datetime:
    """
    Get the current time in the given timezone (timezone-aware).

    Args:
        timezone_name: IANA timezone name (e.g., "Europe/Berlin")
    """
    return datetime.now(UTC).astimezone(get_tzinfo(timezone_name))


def to_local_datetime(value: datetime, timezone_name: str) -> datetime:
    """
    Normalize a datetime into the given timezone.

    Naive values are assumed to already be local wall-clock time.
    """
    tz = get_tzinfo(timezone_name)
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def combine_local(day: date, at: time, timezone_name: str) -> datetime:
    """Attach a time-of-day to a calendar date in the given timezone."""
    return datetime.combine(day, at.replace(tzinfo=None), tzinfo=get_tzinfo(timezone_name))


def minutes_between(start: datetime, end: datetime) -> float:
    """Signed number of minutes from start to end."""
    return (end - start).total_seconds() / 60


def ceil_to_step(value: datetime, origin: datetime, step_minutes: int) -> datetime:
    """
    Round a datetime up to the next step boundary counted from origin.

    Example:
        >>> ceil_to_step(datetime(2025, 1, 6, 9, 10), datetime(2025, 1, 6, 6, 0), 30)
        datetime(2025, 1, 6, 9, 30)
    """
    if value <= origin:
        return origin
    step_seconds = step_minutes * 60
    steps = math.ceil((value - origin).total_seconds() / step_seconds)
    return origin + timedelta(seconds=steps * step_seconds)
