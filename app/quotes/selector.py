# app/quotes/selector.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from app.errors import NotFound
from app.metrics import DAILY_SELECTIONS_TOTAL
from app.quotes.csv_parser import QuoteTable
from app.selection.daily_hash import date_key, day_of_year, pick_for_day


class MatchMethod(str, Enum):
    DAY_OF_MONTH = "day_of_month"
    DAY_OF_YEAR = "day_of_year"
    HASH = "hash"


@dataclass(frozen=True)
class QuoteSelection:
    quote: str
    date: str
    day_of_month: int
    total_quotes: int
    matched_by_date: bool
    method: MatchMethod


def select_quote(table: QuoteTable, day: date) -> QuoteSelection:
    """
    Pick today's quote: day-of-month key, then day-of-year key, then the
    daily hash over every quote in row order.
    """
    if table.is_empty():
        raise NotFound("No quotes found")

    dom_key = str(day.day)
    doy_key = str(day_of_year(day))
    today = date_key(day)

    if dom_key in table.by_key:
        quote, method = table.by_key[dom_key], MatchMethod.DAY_OF_MONTH
    elif doy_key in table.by_key:
        quote, method = table.by_key[doy_key], MatchMethod.DAY_OF_YEAR
    elif table.quotes:
        quote, method = pick_for_day(table.quotes, today), MatchMethod.HASH
    else:
        raise NotFound("No quote available for today", details={"date": today})

    DAILY_SELECTIONS_TOTAL.labels(kind="quote", method=method.value).inc()
    return QuoteSelection(
        quote=quote,
        date=today,
        day_of_month=day.day,
        total_quotes=len(table.quotes),
        matched_by_date=dom_key in table.by_key,
        method=method,
    )
