from datetime import date

import pytest

from app.errors import NotFound
from app.quotes.csv_parser import QuoteTable, parse_quotes
from app.quotes.selector import MatchMethod, select_quote
from app.selection.daily_hash import pick_for_day

DAY = date(2024, 3, 14)  # day-of-year 74


def test_day_of_month_wins():
    table = parse_quotes("74,by year\n14,by month\n1,other\n")
    sel = select_quote(table, DAY)
    assert sel.quote == "by month"
    assert sel.method == MatchMethod.DAY_OF_MONTH
    assert sel.matched_by_date is True
    assert sel.day_of_month == 14
    assert sel.total_quotes == 3
    assert sel.date == "2024-03-14"


def test_day_of_year_when_month_key_missing():
    table = parse_quotes("74,by year\n1,other\n")
    sel = select_quote(table, DAY)
    assert sel.quote == "by year"
    assert sel.method == MatchMethod.DAY_OF_YEAR
    assert sel.matched_by_date is False


def test_hash_fallback_is_reproducible():
    quotes = ["alpha", "beta", "gamma", "delta", "epsilon"]
    table = QuoteTable(by_key={}, quotes=list(quotes))
    first = select_quote(table, DAY)
    second = select_quote(table, DAY)
    assert first.quote == second.quote == pick_for_day(quotes, "2024-03-14")
    assert first.method == MatchMethod.HASH
    assert first.matched_by_date is False


def test_hash_fallback_with_unmatched_keys():
    table = parse_quotes("200,a\n201,b\n")
    sel = select_quote(table, DAY)
    assert sel.quote in ("a", "b")
    assert sel.method == MatchMethod.HASH


def test_empty_table_is_not_found():
    with pytest.raises(NotFound) as exc:
        select_quote(QuoteTable(), DAY)
    assert exc.value.message == "No quotes found"


def test_keys_without_quote_list_is_not_available():
    with pytest.raises(NotFound) as exc:
        select_quote(QuoteTable(by_key={"200": "x"}, quotes=[]), DAY)
    assert exc.value.message == "No quote available for today"
    assert exc.value.status_code == 404
