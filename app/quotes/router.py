import logging
from datetime import date

import httpx
from fastapi import APIRouter, Depends

from app.deps import get_http_client, get_today
from app.errors import DailyError, error_response
from app.models import ERROR_RESPONSES, QuoteOut
from app.quotes.selector import QuoteSelection
from app.quotes.sheets import quote_for_day

log = logging.getLogger("daily_inspiration")

router = APIRouter(tags=["daily"])

FETCH_FAILED_MSG = "Failed to fetch quote from Google Sheets"


def to_quote_out(sel: QuoteSelection) -> QuoteOut:
    return QuoteOut(
        quote=sel.quote,
        date=sel.date,
        dayOfMonth=sel.day_of_month,
        totalQuotes=sel.total_quotes,
        matchedByDate=sel.matched_by_date,
    )


@router.get("/api/quote", response_model=QuoteOut, responses=ERROR_RESPONSES)
async def get_quote(
    client: httpx.AsyncClient = Depends(get_http_client),
    today: date = Depends(get_today),
):
    try:
        sel = await quote_for_day(client, today)
    except DailyError as e:
        return error_response(e)
    except Exception:
        log.exception("quote_selection_crashed")
        return error_response(DailyError(FETCH_FAILED_MSG))

    log.info(f'quote_picked method="{sel.method.value}" total={sel.total_quotes} date="{sel.date}"')
    return to_quote_out(sel)
