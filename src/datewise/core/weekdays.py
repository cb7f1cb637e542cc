# src/datewise/core/weekdays.py
from __future__ import annotations

from datetime import date, timedelta

from .timeutil import ONE_DAY, ONE_WEEK, sunday_weekday


def is_business_weekday(d: date) -> bool:
    """Monday..Friday."""
    return 1 <= sunday_weekday(d) <= 5


def count_weekdays_inclusive(start: date, end: date) -> int:
    """
    Count Monday..Friday days in [start, end] (both ends included).
    """
    count = 0
    cur = start
    while cur <= end:
        if is_business_weekday(cur):
            count += 1
        cur = cur + ONE_DAY
    return count


def total_weekdays(start: date, end: date) -> int:
    """Monday..Friday days in the half-open range [start, end)."""
    return count_weekdays_inclusive(start, end - ONE_DAY)


def count_weekday_in_range(start: date, end: date, weekday: int) -> int:
    """
    Count occurrences of `weekday` (0=Sunday..6=Saturday) in [start, end).

    Walks week by week from start, snapping each step forward to the next
    `weekday` (0 days if already on it).
    """
    wd = int(weekday) % 7
    count = 0
    cur = start
    while cur < end:
        hit = cur + timedelta(days=(wd - sunday_weekday(cur)) % 7)
        if hit < end:
            count += 1
        cur = cur + ONE_WEEK
    return count
