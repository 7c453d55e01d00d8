# app/quotes/sheets.py
"""
Quote sheet download.

The sheet is read through Google's unauthenticated CSV endpoints, so it
must be shared as "Anyone with the link". Three URL shapes are tried one
after another and the first that answers below 400 wins. When none does,
that is reported as an access-configuration problem; there is no retry.
"""

from __future__ import annotations

import logging
from datetime import date

import httpx

from app.config import settings
from app.errors import UpstreamFailure
from app.metrics import UPSTREAM_FETCHES_TOTAL
from app.quotes.csv_parser import parse_quotes
from app.quotes.selector import QuoteSelection, select_quote

log = logging.getLogger("daily_inspiration")

SHEET_ACCESS_MSG = (
    "Unable to access Google Sheets. Please ensure the sheet is shared "
    'publicly with "Anyone with the link" permissions.'
)

_BASE = "https://docs.google.com/spreadsheets/d"


def sheet_csv_urls(sheet_id: str) -> list[str]:
    return [
        f"{_BASE}/{sheet_id}/export?format=csv",
        f"{_BASE}/{sheet_id}/export?format=csv&gid=0",
        f"{_BASE}/{sheet_id}/gviz/tq?tqx=out:csv",
    ]


async def fetch_sheet_csv(client: httpx.AsyncClient, sheet_id: str) -> str:
    headers = {"User-Agent": settings.USER_AGENT, "Accept": "text/csv,text/plain,*/*"}
    last_exc: Exception | None = None

    for attempt, url in enumerate(sheet_csv_urls(sheet_id), start=1):
        try:
            r = await client.get(
                url,
                headers=headers,
                timeout=settings.UPSTREAM_TIMEOUT_SECS,
                follow_redirects=True,
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            last_exc = e
            UPSTREAM_FETCHES_TOTAL.labels(source="sheets", outcome="error").inc()
            log.warning(f'sheet_fetch_failed attempt={attempt} url="{url}" err="{e}"')
            continue

        UPSTREAM_FETCHES_TOTAL.labels(source="sheets", outcome="ok").inc()
        return r.text

    log.error(f'sheet_unreachable sheet_id="{sheet_id}" err="{last_exc}"')
    raise UpstreamFailure(SHEET_ACCESS_MSG, details={"sheet_id": sheet_id}) from last_exc


async def quote_for_day(client: httpx.AsyncClient, day: date) -> QuoteSelection:
    csv_text = await fetch_sheet_csv(client, settings.GOOGLE_SHEETS_ID)
    return select_quote(parse_quotes(csv_text), day)
