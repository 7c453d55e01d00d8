# app/daily.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

import httpx
from fastapi import APIRouter, Depends

from app.deps import get_http_client, get_today
from app.errors import DailyError, error_response
from app.images.listing import ImageRecord, image_for_day
from app.images.router import to_image_out
from app.models import ERROR_RESPONSES, DailyOut
from app.quotes.router import to_quote_out
from app.quotes.selector import QuoteSelection
from app.quotes.sheets import quote_for_day
from app.selection.daily_hash import date_key

log = logging.getLogger("daily_inspiration")

router = APIRouter(tags=["daily"])


@dataclass(frozen=True)
class DailySelection:
    date: str
    image: ImageRecord
    quote: QuoteSelection


async def build_daily_selection(client: httpx.AsyncClient, day: date) -> DailySelection:
    """
    Fetch image and quote concurrently. Both must succeed; the image error
    wins when both fail.
    """
    image, quote = await asyncio.gather(
        image_for_day(client, day),
        quote_for_day(client, day),
        # wait for both so neither request outlives the shared client
        return_exceptions=True,
    )
    for result in (image, quote):
        if isinstance(result, BaseException):
            raise result
    return DailySelection(date=date_key(day), image=image, quote=quote)


@router.get("/api/daily", response_model=DailyOut, responses=ERROR_RESPONSES)
async def get_daily(
    client: httpx.AsyncClient = Depends(get_http_client),
    today: date = Depends(get_today),
):
    try:
        sel = await build_daily_selection(client, today)
    except DailyError as e:
        return error_response(e)
    except Exception:
        log.exception("daily_selection_crashed")
        return error_response(DailyError("Failed to build today's selection"))

    return DailyOut(date=sel.date, image=to_image_out(sel.image, today), quote=to_quote_out(sel.quote))
