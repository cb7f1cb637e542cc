# src/datewise/core/derive.py
from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime
from typing import Any, Dict, Optional

from babel.dates import format_date, format_time

from datewise.features.holidays import NO_HOLIDAYS, HolidayCalendar

from .config import DeriveConfig
from .context import DateContext
from .moon import moon_phase
from .ordinals import ordinal_suffix, ordinal_word
from .timeutil import days_between, midnight_utc
from .weekdays import count_weekday_in_range, total_weekdays

DISPLAY_LOCALE = "en_US"


def _week_number(week_start, period_start) -> int:
    # Sunday weeks; days before the first full week of the period are week 0
    return days_between(period_start, week_start) // 7 + 1


def _days_remaining(ctx: DateContext, end) -> int:
    # the current day is not counted
    return days_between(ctx.epoch_day, end) - 1


def _iso_instant(t: datetime) -> str:
    return t.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clock(local: datetime, pattern: str) -> str:
    return format_time(local, pattern, tzinfo=local.tzinfo, locale=DISPLAY_LOCALE)


def _calendar_name(d, pattern: str) -> str:
    return format_date(d, pattern, locale=DISPLAY_LOCALE)


def _offset_minutes(local: datetime) -> int:
    off = local.utcoffset()
    if off is None:
        raise ValueError(f"timezone has no utcoffset: {local.tzinfo!r}")
    # truncate toward zero: -0:43:08 is -43
    return int(off.total_seconds() / 60)


def build_fields(
    ctx: DateContext,
    *,
    config: DeriveConfig,
    holidays: HolidayCalendar,
) -> Dict[str, Any]:
    t = ctx.instant
    local = ctx.local
    midnight = midnight_utc(ctx.epoch_day)

    day_of_year = days_between(ctx.year_start, ctx.epoch_day) + 1
    day_of_quarter = days_between(ctx.quarter_start, ctx.epoch_day) + 1
    week_number = _week_number(ctx.week_start, ctx.year_start)

    return {
        # identities
        "iso": _iso_instant(t),
        "isoOrdinal": f"{ctx.year:04d}-{day_of_year:03d}",
        "isoWeekNumber": ctx.epoch_day.isocalendar()[1],
        "calWeekNumber": week_number,
        "weekNumber": week_number,
        "clearTimeUTC": f"{ctx.epoch_day.isoformat()}T00:00:00Z",
        "clearTimeLocal": f"{local.date().isoformat()}T00:00:00",
        "utcOffsetMinutes": _offset_minutes(local),
        "shortTime": _clock(local, "h:mm a"),
        "milTime": _clock(local, "HH:mm"),
        "longDateUTC": format_datetime(t.replace(microsecond=0), usegmt=True),
        "tz": ctx.tz,
        # calendar position
        "year": ctx.year,
        "longYear": ctx.year,
        "dayOfYear": day_of_year,
        "dayOfYearOrd": ordinal_suffix(day_of_year),
        "dayOfYearNum": ordinal_word(day_of_year),
        "dayOfQuarter": day_of_quarter,
        "dayOfQuarterOrd": ordinal_suffix(day_of_quarter),
        "dayOfQuarterNum": ordinal_word(day_of_quarter),
        "dayOfMonth": ctx.day,
        "dayOfMonthOrd": ordinal_suffix(ctx.day),
        "dayOfMonthNum": ordinal_word(ctx.day),
        "dayOfWeek": ctx.weekday,
        "longDayName": _calendar_name(ctx.epoch_day, "EEEE"),
        "shortDayName": _calendar_name(ctx.epoch_day, "EEE"),
        "minDayName": _calendar_name(ctx.epoch_day, "EEEEE"),
        "longMonthName": _calendar_name(ctx.epoch_day, "MMMM"),
        # fiscal
        "fiscalYear": ctx.fiscal_year,
        "fiscalQuarter": ctx.fiscal_quarter,
        "fiscalWeekNumber": _week_number(ctx.week_start, ctx.fiscal_year_start),
        "dayOfFiscalYear": days_between(ctx.fiscal_year_start, ctx.epoch_day) + 1,
        "dayOfFiscalQuarter": days_between(ctx.fiscal_quarter_start, ctx.epoch_day) + 1,
        # remaining days
        "daysRemainingWeek": 6 - ctx.weekday,
        "daysRemainingMonth": _days_remaining(ctx, ctx.month_end),
        "daysRemainingQuarter": _days_remaining(ctx, ctx.quarter_end),
        "daysRemainingYear": _days_remaining(ctx, ctx.year_end),
        "daysRemainingFiscalQuarter": _days_remaining(ctx, ctx.fiscal_quarter_end),
        "daysRemainingFiscalYear": _days_remaining(ctx, ctx.fiscal_year_end),
        # weekday statistics
        "sameDaysInMonth": count_weekday_in_range(ctx.month_start, ctx.month_end, ctx.weekday),
        "sameDaysInQuarter": count_weekday_in_range(ctx.quarter_start, ctx.quarter_end, ctx.weekday),
        "sameDaysInYear": count_weekday_in_range(ctx.year_start, ctx.year_end, ctx.weekday),
        "totalWeekdaysInMonth": total_weekdays(ctx.month_start, ctx.month_end),
        "totalWeekdaysInQuarter": total_weekdays(ctx.quarter_start, ctx.quarter_end),
        "totalWeekdaysInYear": total_weekdays(ctx.year_start, ctx.year_end),
        # flags
        "isLeapYear": ctx.is_leap_year,
        "isWeekday": 1 <= ctx.weekday <= 5,
        "isWeekend": ctx.weekday in (0, 6),
        "isHolidayUS": bool(holidays.is_holiday(ctx.epoch_day)),
        # misc
        "moonPhase": moon_phase(midnight, config=config),
    }


def derive(
    instant: datetime,
    tz: str,
    *,
    config: Optional[DeriveConfig] = None,
    holidays: Optional[HolidayCalendar] = None,
) -> Dict[str, Any]:
    """
    Derive the full set of calendar facts for `instant` (timezone-aware) in `tz`.

    Returns a new dict whose keys are in ascending string order.

    Raises
    ------
    InvalidTimezoneInput
        If tz is not a known IANA timezone.
    InvalidDateInput
        If the instant's UTC year is outside the supported range.
    ValueError
        If instant is naive.
    """
    cfg = config or DeriveConfig()
    ctx = DateContext.build(instant, tz, config=cfg)
    fields = build_fields(ctx, config=cfg, holidays=holidays or NO_HOLIDAYS)
    return dict(sorted(fields.items()))
