# src/datewise/core/timeutil.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from typing import FrozenSet
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from .errors import InvalidDateInput, InvalidTimezoneInput

UTC = timezone.utc

# Boundaries reach one year back (week start) and one year forward (year end).
MIN_YEAR = 2
MAX_YEAR = 9998


def require_utc(dt: datetime, name: str = "dt") -> datetime:
    """
    Ensure a datetime is timezone-aware and return it converted to UTC.

    Raises
    ------
    ValueError
        If dt is naive.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware datetime (got naive datetime)")
    return dt.astimezone(UTC)


def require_supported_year(dt: datetime) -> datetime:
    if not (MIN_YEAR <= dt.year <= MAX_YEAR):
        raise InvalidDateInput(dt)
    return dt


@lru_cache(maxsize=1)
def iana_timezone_names() -> FrozenSet[str]:
    # host aliases that resolve to a zone file but are not IANA identifiers
    return frozenset(available_timezones()) - {"localtime", "posixrules"}


def resolve_timezone(tz: str) -> ZoneInfo:
    """
    IANA name -> ZoneInfo. Unknown names raise InvalidTimezoneInput, never UTC.
    """
    name = (tz or "").strip()
    if not name:
        raise InvalidTimezoneInput(tz)
    if name not in iana_timezone_names():
        raise InvalidTimezoneInput(name)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneInput(name) from e


def add_months(d: date, months: int) -> date:
    """First day of the month `months` after d's month."""
    total = d.year * 12 + (d.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def sunday_weekday(d: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    return (end - start).days


def midnight_utc(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, tzinfo=UTC)


ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)
