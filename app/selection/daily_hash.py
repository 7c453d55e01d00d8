# app/selection/daily_hash.py
from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime
from typing import TypeVar

from app.errors import NotFound

T = TypeVar("T")

_MASK_32 = 0xFFFFFFFF
_SIGN_32 = 0x80000000


def utc_today() -> date:
    return datetime.now(UTC).date()


def date_key(day: date) -> str:
    """``YYYY-MM-DD``; the string the daily hash is computed over."""
    return day.isoformat()


def day_of_year(day: date) -> int:
    """1-based: Jan 1 is day 1."""
    return (day - date(day.year, 1, 1)).days + 1


def daily_hash(date_str: str) -> int:
    """
    31-multiplier rolling hash over UTF-16 code units, wrapped to a signed
    32-bit integer after every step (same values as Java's String.hashCode).
    """
    data = date_str.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code) & _MASK_32
    if h & _SIGN_32:
        h -= 1 << 32
    return h


def pick_index(date_str: str, n: int) -> int:
    if n <= 0:
        raise NotFound("No candidates to choose from", details={"date": date_str})
    return abs(daily_hash(date_str)) % n


def pick_for_day(items: Sequence[T], date_str: str) -> T:
    """Deterministic rotation: same date and same items, same pick."""
    return items[pick_index(date_str, len(items))]
