from collections.abc import AsyncIterator
from datetime import date

import httpx

from app.config import settings
from app.selection.daily_hash import utc_today


def build_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Outbound client with the configured timeout and redirect cap."""
    return httpx.AsyncClient(
        timeout=settings.UPSTREAM_TIMEOUT_SECS,
        follow_redirects=True,
        max_redirects=settings.UPSTREAM_MAX_REDIRECTS,
        transport=transport,
    )


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    One outbound client per request, closed when the response is sent.
    Tests swap the transport via ``app.dependency_overrides``.
    """
    async with build_http_client() as client:
        yield client


def get_today() -> date:
    return utc_today()
