# src/datewise/core/context.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from .config import DeriveConfig
from .timeutil import add_months, require_supported_year, require_utc, resolve_timezone, sunday_weekday


@dataclass(frozen=True)
class DateContext:
    """
    Calendar anchors for one (UTC instant, timezone) pair.

    - year / month (0..11) / day / weekday (0=Sunday..6) are UTC calendar fields
    - every *_start / *_end pair is a half-open [start, end) range of dates
    - fiscal_month_index: 0 = first fiscal month
    """
    instant: datetime
    tz: str
    tzinfo: ZoneInfo

    year: int
    month: int
    day: int
    weekday: int
    epoch_day: date

    year_start: date
    year_end: date
    quarter_start: date
    quarter_end: date
    month_start: date
    month_end: date
    week_start: date

    fiscal_year: int
    fiscal_month_index: int
    fiscal_quarter: int
    fiscal_year_start: date
    fiscal_year_end: date
    fiscal_quarter_start: date
    fiscal_quarter_end: date

    @classmethod
    def build(cls, instant: datetime, tz: str, *, config: Optional[DeriveConfig] = None) -> "DateContext":
        cfg = config or DeriveConfig()
        tzinfo = resolve_timezone(tz)
        t = require_supported_year(require_utc(instant, "instant"))

        epoch_day = t.date()
        y = epoch_day.year
        m0 = epoch_day.month - 1
        weekday = sunday_weekday(epoch_day)

        year_start = date(y, 1, 1)
        quarter_start = date(y, (m0 // 3) * 3 + 1, 1)
        month_start = date(y, epoch_day.month, 1)

        # fiscal year (starts on day 1 of fiscal_start_month)
        fs = int(cfg.fiscal_start_month)
        fy_start_year = y if epoch_day.month >= fs else y - 1
        fiscal_year_start = date(fy_start_year, fs, 1)
        fiscal_year_end = add_months(fiscal_year_start, 12)
        fiscal_month_index = (epoch_day.month - fs) % 12
        fiscal_quarter = fiscal_month_index // 3 + 1
        fiscal_quarter_start = add_months(fiscal_year_start, (fiscal_quarter - 1) * 3)

        return cls(
            instant=t,
            tz=tz.strip(),
            tzinfo=tzinfo,
            year=y,
            month=m0,
            day=epoch_day.day,
            weekday=weekday,
            epoch_day=epoch_day,
            year_start=year_start,
            year_end=date(y + 1, 1, 1),
            quarter_start=quarter_start,
            quarter_end=add_months(quarter_start, 3),
            month_start=month_start,
            month_end=add_months(month_start, 1),
            week_start=epoch_day - timedelta(days=weekday),
            # numbered by the calendar year containing its last day
            fiscal_year=(fiscal_year_end - timedelta(days=1)).year,
            fiscal_month_index=fiscal_month_index,
            fiscal_quarter=fiscal_quarter,
            fiscal_year_start=fiscal_year_start,
            fiscal_year_end=fiscal_year_end,
            fiscal_quarter_start=fiscal_quarter_start,
            fiscal_quarter_end=add_months(fiscal_quarter_start, 3),
        )

    @property
    def local(self) -> datetime:
        return self.instant.astimezone(self.tzinfo)

    @property
    def is_leap_year(self) -> bool:
        y = self.year
        return (y % 4 == 0 and y % 100 != 0) or y % 400 == 0
