import logging
from datetime import date

import httpx
from fastapi import APIRouter, Depends

from app.deps import get_http_client, get_today
from app.errors import DailyError, error_response
from app.images.listing import FETCH_FAILED_MSG, ImageRecord, image_for_day
from app.models import ERROR_RESPONSES, ImageOut
from app.selection.daily_hash import date_key

log = logging.getLogger("daily_inspiration")

router = APIRouter(tags=["daily"])


def to_image_out(image: ImageRecord, day: date) -> ImageOut:
    return ImageOut(name=image.name, url=image.url, size=image.size, date=date_key(day))


@router.get("/api/image", response_model=ImageOut, responses=ERROR_RESPONSES)
async def get_image(
    client: httpx.AsyncClient = Depends(get_http_client),
    today: date = Depends(get_today),
):
    try:
        image = await image_for_day(client, today)
    except DailyError as e:
        return error_response(e)
    except Exception:
        log.exception("image_selection_crashed")
        return error_response(DailyError(FETCH_FAILED_MSG))

    log.info(f'image_picked name="{image.name}" date="{date_key(today)}"')
    return to_image_out(image, today)
