# app/images/listing.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import httpx

from app.config import settings
from app.errors import NotFound, UpstreamFailure
from app.metrics import DAILY_SELECTIONS_TOTAL, UPSTREAM_FETCHES_TOTAL
from app.selection.daily_hash import date_key, pick_for_day

log = logging.getLogger("daily_inspiration")

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})

FETCH_FAILED_MSG = "Failed to fetch image from GitHub repository"


@dataclass(frozen=True)
class ImageRecord:
    name: str
    url: str
    size: int


def extension_of(name: str) -> str:
    # "photo" has no dot, so the whole name counts as the extension
    return name.lower().rsplit(".", 1)[-1]


def listing_url() -> str:
    return (
        f"{settings.GITHUB_API_URL}/repos/"
        f"{settings.GITHUB_USERNAME}/{settings.GITHUB_REPO}/contents"
    )


def listing_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": settings.USER_AGENT,
    }
    if settings.GITHUB_TOKEN:
        headers["Authorization"] = f"Bearer {settings.GITHUB_TOKEN}"
    return headers


async def fetch_listing(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    """Raw repository contents entries (``name``, ``download_url``, ``size``, ...)."""
    url = listing_url()
    try:
        r = await client.get(url, headers=listing_headers())
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        UPSTREAM_FETCHES_TOTAL.labels(source="github", outcome="error").inc()
        log.warning(f'image_listing_failed url="{url}" err="{e}"')
        raise UpstreamFailure(FETCH_FAILED_MSG, details={"url": url}) from e

    if not isinstance(data, list):
        # a single-file path or an API error object
        UPSTREAM_FETCHES_TOTAL.labels(source="github", outcome="error").inc()
        log.warning(f'image_listing_not_a_directory url="{url}"')
        raise UpstreamFailure(FETCH_FAILED_MSG, details={"url": url})

    UPSTREAM_FETCHES_TOTAL.labels(source="github", outcome="ok").inc()
    return data


def _size_of(entry: dict[str, Any]) -> int:
    try:
        return int(entry.get("size") or 0)
    except (TypeError, ValueError):
        return 0


def filter_images(entries: list[dict[str, Any]]) -> list[ImageRecord]:
    out: list[ImageRecord] = []
    for entry in entries:
        name = entry.get("name") or ""
        url = entry.get("download_url")
        if not name or not url:
            continue
        if extension_of(name) not in IMAGE_EXTENSIONS:
            continue
        out.append(ImageRecord(name=name, url=url, size=_size_of(entry)))
    return out


def select_image(entries: list[dict[str, Any]], day: date) -> ImageRecord:
    candidates = filter_images(entries)
    if not candidates:
        raise NotFound("No images found", details={"listed": len(entries)})
    picked = pick_for_day(candidates, date_key(day))
    DAILY_SELECTIONS_TOTAL.labels(kind="image", method="hash").inc()
    return picked


async def image_for_day(client: httpx.AsyncClient, day: date) -> ImageRecord:
    return select_image(await fetch_listing(client), day)
