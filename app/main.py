from __future__ import annotations

import os
import platform
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI

from app.daily import router as daily_router
from app.images.router import router as image_router
from app.metrics import MetricsMiddleware, metrics_endpoint
from app.observability import RequestIdMiddleware, setup_json_logging
from app.ops import router as ops_router
from app.page import router as page_router
from app.quotes.router import router as quote_router

APP_NAME = "daily-inspiration"
APP_DESC = "One image and one quote a day, picked deterministically from the date."
APP_VERSION_FILE = Path(__file__).resolve().parents[1] / "VERSION"


def read_version_fallback() -> str:
    try:
        return APP_VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.0.0"


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


# Env-configured runtime info
HOST = os.getenv("APP_HOST", "0.0.0.0")
PORT = int(os.getenv("APP_PORT", "8001"))
WORKERS = int(os.getenv("APP_WORKERS", "1"))

log = setup_json_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.is_ready = True
    log.info(f'startup service="{APP_NAME}" version="{read_version_fallback()}"')
    yield
    app.state.is_ready = False
    log.info("shutdown")


app = FastAPI(
    title=APP_NAME,
    description=APP_DESC,
    version=read_version_fallback(),
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware, skip_predicate=lambda req: req.url.path == "/metrics")
app.add_middleware(RequestIdMiddleware, logger=log)

app.include_router(page_router)
app.include_router(image_router)
app.include_router(quote_router)
app.include_router(daily_router)
app.include_router(ops_router)


# -------------------------
# Core endpoints
# -------------------------
@app.get("/health", tags=["core"])
def health():
    return {"status": "ok"}


@app.get("/version", tags=["core"])
def version():
    return {
        "service": APP_NAME,
        "version": read_version_fallback(),
        "host": HOST,
        "port": PORT,
        "workers": WORKERS,
    }


@app.get("/__meta", tags=["core"])
def meta():
    git_commit = os.getenv("GIT_COMMIT", "unknown")
    git = {
        "commit": git_commit,
        "sha": os.getenv("GIT_SHA", git_commit),
        "branch": os.getenv("GIT_BRANCH", "unknown"),
    }
    runtime = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "pid": os.getpid(),
        "as_of": utc_now_iso(),
    }
    # included routers do not always surface as flat routes; the schema does
    flat = {getattr(r, "path", None) for r in app.routes}
    endpoints = sorted(
        set(app.openapi().get("paths", {}))
        | {p for p in flat if isinstance(p, str) and p.startswith("/")}
    )
    return {
        "service": APP_NAME,
        "version": read_version_fallback(),
        "git": git,
        "build": {"time": os.getenv("BUILD_TIME", "unknown")},
        "runtime": runtime,
        "endpoints": endpoints,
    }


@app.get("/metrics", tags=["core"], include_in_schema=False)
def metrics():
    return metrics_endpoint()
