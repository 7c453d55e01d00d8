from __future__ import annotations

from collections.abc import Callable
from datetime import date

import httpx
import pytest

from app.deps import build_http_client, get_http_client, get_today
from app.main import app

PINNED_DAY = date(2024, 3, 14)

Handler = Callable[[httpx.Request], httpx.Response]


def _listing(*names: str) -> list[dict]:
    return [
        {
            "name": n,
            "download_url": f"https://raw.githubusercontent.com/u/images/main/{n}",
            "size": 100 + i,
            "type": "file",
        }
        for i, n in enumerate(names)
    ]


@pytest.fixture
def listing():
    """Build repository-contents entries for the given file names."""
    return _listing


@pytest.fixture
def upstream():
    """
    Route outbound calls through a MockTransport and pin today's date.

    Usage: ``upstream(handler)``; ``upstream.calls`` records every request.
    """
    calls: list[httpx.Request] = []

    def install(handler: Handler, day: date = PINNED_DAY) -> None:
        def recording(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        async def client_override():
            async with build_http_client(transport=httpx.MockTransport(recording)) as c:
                yield c

        app.dependency_overrides[get_http_client] = client_override
        app.dependency_overrides[get_today] = lambda: day

    install.calls = calls
    yield install
    app.dependency_overrides.clear()
