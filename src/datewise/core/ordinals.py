# src/datewise/core/ordinals.py
from __future__ import annotations

"""
English ordinals.

- ordinal_suffix: 1 -> "1st", 11 -> "11th", 22 -> "22nd"
- ordinal_word:   1 -> "First", 21 -> "Twenty-first", 300 -> "Three Hundredth"

ordinal_word covers 1..366 (day of year at most) and returns "" outside.
"""

from typing import List

ORDINAL_WORD_MAX = 366

_SUFFIXES: List[str] = ["th", "st", "nd", "rd"]

_ONES: List[str] = [
    "", "First", "Second", "Third", "Fourth",
    "Fifth", "Sixth", "Seventh", "Eighth", "Ninth",
]
_TEENS: List[str] = [
    "Tenth", "Eleventh", "Twelfth", "Thirteenth", "Fourteenth",
    "Fifteenth", "Sixteenth", "Seventeenth", "Eighteenth", "Nineteenth",
]
_TENS: List[str] = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety",
]
_HUNDREDS: List[str] = ["", "One", "Two", "Three"]


def ordinal_suffix(n: int) -> str:
    n = int(n)
    v = n % 100
    if 11 <= v <= 13:
        return f"{n}th"
    last = v % 10
    return f"{n}{_SUFFIXES[last] if last < 4 else _SUFFIXES[0]}"


def _below_hundred(k: int) -> str:
    if k < 10:
        return _ONES[k]
    if k < 20:
        return _TEENS[k - 10]
    tens, ones = divmod(k, 10)
    if ones:
        return f"{_TENS[tens]}-{_ONES[ones].lower()}"
    # Twenty -> Twentieth
    return f"{_TENS[tens][:-1]}ieth"


def ordinal_word(n: int) -> str:
    n = int(n)
    if n <= 0 or n > ORDINAL_WORD_MAX:
        return ""
    if n < 100:
        return _below_hundred(n)
    hundreds, rem = divmod(n, 100)
    base = f"{_HUNDREDS[hundreds]} Hundred"
    return f"{base} {_below_hundred(rem)}" if rem else f"{base}th"
