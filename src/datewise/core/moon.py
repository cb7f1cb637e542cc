# src/datewise/core/moon.py
from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional

from .config import DeriveConfig
from .timeutil import require_utc

MOON_PHASES: List[str] = [
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
]

_DEFAULT_CONFIG = DeriveConfig()


def moon_age_days(t_utc: datetime, *, config: Optional[DeriveConfig] = None) -> float:
    """
    Days since the last mean new moon, in [0, synodic_month_days).

    Mean-motion estimate from a single reference new moon; drifts by up to
    about a day from the true phase. Display use only.
    """
    cfg = config or _DEFAULT_CONFIG
    t = require_utc(t_utc, "t_utc")
    elapsed = (t - cfg.reference_new_moon_utc).total_seconds() / 86400.0
    return elapsed % cfg.synodic_month_days


def moon_phase_index(t_utc: datetime, *, config: Optional[DeriveConfig] = None) -> int:
    cfg = config or _DEFAULT_CONFIG
    age = moon_age_days(t_utc, config=cfg)
    bucket = math.floor(age / (cfg.synodic_month_days / len(MOON_PHASES)))
    # float modulo can land a hair under the period
    return min(max(bucket, 0), len(MOON_PHASES) - 1)


def moon_phase(t_utc: datetime, *, config: Optional[DeriveConfig] = None) -> str:
    return MOON_PHASES[moon_phase_index(t_utc, config=config)]
