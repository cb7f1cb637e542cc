from __future__ import annotations

import json
import logging
import os
import time
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from dateutil import parser as date_parser
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from datewise.core.config import DeriveConfig
from datewise.core.derive import derive
from datewise.core.errors import DatewiseInputError, InvalidDateInput
from datewise.core.timeutil import require_supported_year
from datewise.features.holidays import HolidayCalendar

UTC = timezone.utc

router = APIRouter(tags=["public"])

log = logging.getLogger("datewise.api.public")

DATEWISE_DEFAULT_TZ_ENV = "DATEWISE_DEFAULT_TZ"
DATEWISE_FISCAL_START_MONTH_ENV = "DATEWISE_FISCAL_START_MONTH"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# ============================================================
# Response Models
# ============================================================
class ErrorResponse(BaseModel):
    error: str = Field(..., description="human readable reason for the 400")


class PrettyJSONResponse(JSONResponse):
    """application/json, indented by two spaces; key order is preserved."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


# ============================================================
# Helpers: config, parsing
# ============================================================
@lru_cache(maxsize=1)
def default_config() -> DeriveConfig:
    """
    DeriveConfig with environment overrides applied (read once per process).
    """
    tz = os.environ.get(DATEWISE_DEFAULT_TZ_ENV, "").strip() or "UTC"
    month_raw = os.environ.get(DATEWISE_FISCAL_START_MONTH_ENV, "").strip()
    if not month_raw:
        return DeriveConfig(default_tz=tz)
    try:
        month = int(month_raw)
    except ValueError as e:
        raise ValueError(f"{DATEWISE_FISCAL_START_MONTH_ENV} must be an integer 1..12: {month_raw!r}") from e
    return DeriveConfig(fiscal_start_month=month, default_tz=tz)


_FILL_DEFAULTS = (datetime(2001, 2, 3), datetime(2002, 4, 5))


def parse_instant(raw: Optional[str], *, now: Optional[datetime] = None) -> datetime:
    """
    Parse a date/time string into an aware UTC datetime.

    - None / blank -> `now` (or the current instant)
    - ISO-8601 and anything dateutil understands, as long as the string
      names a year and a month; a missing day is the 1st, a missing time midnight
    - naive results are taken as UTC
    """
    s = (raw or "").strip()
    if not s:
        cur = now or datetime.now(UTC)
        if cur.tzinfo is None:
            cur = cur.replace(tzinfo=UTC)
        return require_supported_year(cur.astimezone(UTC))

    # fields dateutil filled from `default` differ between the two parses
    try:
        dt = date_parser.parse(s, default=_FILL_DEFAULTS[0])
        alt = date_parser.parse(s, default=_FILL_DEFAULTS[1])
    except (ValueError, OverflowError) as e:
        raise InvalidDateInput(raw) from e
    if (dt.year, dt.month) != (alt.year, alt.month):
        raise InvalidDateInput(raw)
    if dt.day != alt.day:
        dt = dt.replace(day=1)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    try:
        dt = dt.astimezone(UTC)
    except (ValueError, OverflowError) as e:
        raise InvalidDateInput(raw) from e
    return require_supported_year(dt)


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_date_facts(
    date_: Optional[str | datetime] = None,
    *,
    tz: Optional[str] = None,
    now: Optional[datetime] = None,
    holidays: Optional[HolidayCalendar] = None,
    config: Optional[DeriveConfig] = None,
) -> Dict[str, Any]:
    cfg = config or default_config()
    if isinstance(date_, datetime):
        instant = date_ if date_.tzinfo is not None else date_.replace(tzinfo=UTC)
    else:
        instant = parse_instant(date_, now=now)
    tz_name = (tz or "").strip() or cfg.default_tz
    return derive(instant, tz_name, config=cfg, holidays=holidays)


# ============================================================
# Endpoints
# ============================================================
@router.api_route(
    "/",
    methods=ALL_METHODS,
    response_class=PrettyJSONResponse,
    responses={400: {"model": ErrorResponse}},
)
def get_date_facts_endpoint(
    date_str: Optional[str] = Query(None, alias="date", description="ISO-8601 or any parseable date/time"),
    tz: Optional[str] = Query(None, description="IANA timezone (default UTC)"),
    timing: bool = Query(False, description="log derivation time (checks only)"),
) -> PrettyJSONResponse:
    t0 = time.perf_counter()
    try:
        facts = get_date_facts(date_str, tz=tz)
    except DatewiseInputError as e:
        log.warning("rejected input: date=%r tz=%r reason=%s", date_str, tz, e)
        raise
    t1 = time.perf_counter()

    if timing:
        log.warning("timing / date=%s tz=%s derive=%.3fs", date_str, tz, t1 - t0)

    return PrettyJSONResponse(content=facts)
