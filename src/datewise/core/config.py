# src/datewise/core/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _reference_new_moon() -> datetime:
    return datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)


@dataclass(frozen=True)
class DeriveConfig:
    """
    Configuration for date-fact derivation.

    The fiscal year starts on day 1 of `fiscal_start_month` and is numbered
    by the calendar year in which it ends.
    """
    fiscal_start_month: int = 12

    # Moon phase estimation (mean synodic month, one known new moon)
    synodic_month_days: float = 29.53059
    reference_new_moon_utc: datetime = field(default_factory=_reference_new_moon)

    default_tz: str = "UTC"

    def __post_init__(self) -> None:
        if not (1 <= int(self.fiscal_start_month) <= 12):
            raise ValueError(f"fiscal_start_month out of range: {self.fiscal_start_month}")
        if self.synodic_month_days <= 0:
            raise ValueError("synodic_month_days must be positive")
        if self.reference_new_moon_utc.tzinfo is None:
            raise ValueError("reference_new_moon_utc must be timezone-aware")
