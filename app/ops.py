"""
Ops endpoints for liveness/readiness.

- /live  : 200 while the process can answer at all
- /ready : 200 once the lifespan has started, with the upstream wiring it
           will use; 503 before startup completes or during shutdown

Readiness never calls GitHub or Google. An unreachable upstream shows up
as 500s on /api/* and in upstream_fetches_total, not as a failed probe.
"""

from fastapi import APIRouter, Request, Response, status

from app.config import settings

router = APIRouter(tags=["ops"])


def upstream_summary() -> dict:
    return {
        "images": {
            "repo": f"{settings.GITHUB_USERNAME}/{settings.GITHUB_REPO}",
            "authenticated": bool(settings.GITHUB_TOKEN),
        },
        "quotes": {"sheet_configured": bool(settings.GOOGLE_SHEETS_ID)},
    }


@router.get("/live")
async def live() -> dict:
    return {"status": "live"}


@router.get("/ready")
async def ready(request: Request):
    if getattr(request.app.state, "is_ready", False):
        return {"status": "ready", "upstreams": upstream_summary()}
    return Response(
        content='{"status":"not_ready"}',
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        media_type="application/json",
    )
