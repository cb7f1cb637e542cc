from __future__ import annotations

"""
Date facts check script.

Uses:
- datewise.core.derive.derive

  python -m tools.derive_check --start 2024-11-28 --end 2024-12-03 --tz America/New_York
"""

import argparse
import logging
import sys
from datetime import datetime, timezone

from datewise.core.derive import derive
from datewise.core.errors import DatewiseInputError

from tools.common import add_common_args, dump_json, iter_dates, resolve_date_range, setup_logging

log = logging.getLogger("datewise.tools.derive_check")

SUMMARY_KEYS = [
    "dayOfYear",
    "isoWeekNumber",
    "fiscalYear",
    "fiscalQuarter",
    "dayOfFiscalYear",
    "daysRemainingFiscalYear",
    "utcOffsetMinutes",
    "moonPhase",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="date facts check")
    add_common_args(parser)
    args = parser.parse_args()
    setup_logging(args.verbose)

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    rows = []
    for d in iter_dates(start, end):
        instant = datetime(d.year, d.month, d.day, 12, 0, tzinfo=timezone.utc)
        try:
            facts = derive(instant, args.tz)
        except DatewiseInputError as e:
            log.error("derive failed: date=%s tz=%s reason=%s", d, args.tz, e)
            sys.exit(2)
        log.debug("derived %d fields for %s", len(facts), d)

        if args.json:
            rows.append(facts if args.verbose else {"date": d.isoformat(), **{k: facts[k] for k in SUMMARY_KEYS}})
        else:
            summary = "  ".join(f"{k}={facts[k]}" for k in SUMMARY_KEYS)
            print(f"{d.isoformat()}  {summary}")

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
