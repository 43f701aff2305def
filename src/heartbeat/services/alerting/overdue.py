"""
Overdue Predicate

Decides whether a user has gone silent long enough to alert
their emergency contacts.

Both sides of the comparison are calendar days in one reference
timezone, so a check-in late in the evening and a sweep early the
next morning are one day apart regardless of server timezone.
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from heartbeat.domain.clock import ensure_aware

DEFAULT_OVERDUE_DAYS = 2

CheckinValue = Union[date, datetime, None]


def resolve_timezone(tz: Union[str, tzinfo, None]) -> tzinfo:
    """Turn an IANA name (or None) into a tzinfo, defaulting to UTC."""
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def local_day(moment: datetime, tz: Union[str, tzinfo, None] = None) -> date:
    """Calendar day of an instant in the reference timezone."""
    return ensure_aware(moment).astimezone(resolve_timezone(tz)).date()


def _checkin_day(value: Union[date, datetime], tz: tzinfo) -> date:
    if isinstance(value, datetime):
        return local_day(value, tz)
    return value


def days_since_checkin(
    last_checkin: CheckinValue,
    now: datetime,
    tz: Union[str, tzinfo, None] = None,
) -> Optional[int]:
    """
    Whole calendar days between the last check-in and now.

    Returns:
        Day difference, or None if the user never checked in
    """
    if last_checkin is None:
        return None
    zone = resolve_timezone(tz)
    return (local_day(now, zone) - _checkin_day(last_checkin, zone)).days


def is_overdue(
    last_checkin: CheckinValue,
    now: datetime,
    tz: Union[str, tzinfo, None] = None,
    threshold_days: int = DEFAULT_OVERDUE_DAYS,
) -> bool:
    """
    Check whether a user is overdue.

    Args:
        last_checkin: Day (or instant) of the latest check-in, None if never
        now: Current instant
        tz: Reference timezone for calendar days
        threshold_days: Missed days that make a user overdue

    Returns:
        True if never checked in, or the last check-in is
        threshold_days or more calendar days ago
    """
    elapsed = days_since_checkin(last_checkin, now, tz)
    if elapsed is None:
        return True
    return elapsed >= threshold_days
