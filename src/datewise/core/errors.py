# src/datewise/core/errors.py
from __future__ import annotations


class DatewiseInputError(ValueError):
    """Base class for rejected request input (mapped to HTTP 400)."""


class InvalidDateInput(DatewiseInputError):
    def __init__(self, raw: object = None, message: str = "Invalid date.") -> None:
        super().__init__(message)
        self.raw = raw


class InvalidTimezoneInput(DatewiseInputError):
    def __init__(self, tz: str) -> None:
        super().__init__(f"Unknown timezone: {tz}")
        self.tz = tz
