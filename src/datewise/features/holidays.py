# src/datewise/features/holidays.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class HolidayCalendar(Protocol):
    """Answers whether a UTC calendar date is a (US) holiday."""

    def is_holiday(self, d: date) -> bool: ...


@dataclass(frozen=True)
class NoHolidays:
    """Default calendar: no holiday data, every date is a regular day."""

    def is_holiday(self, d: date) -> bool:
        return False


NO_HOLIDAYS = NoHolidays()
