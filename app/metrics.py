from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response as StarletteResponse

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency (seconds)",
    ["method", "path", "status"],
    # Upstream calls dominate; top bucket sits above the 15s fetch timeout
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 45.0),
)

HTTP_ERRORS_TOTAL = Counter(
    "http_errors_total",
    "Total 5xx responses",
    ["method", "path"],
)

# source: github | sheets ; outcome: ok | error
UPSTREAM_FETCHES_TOTAL = Counter(
    "upstream_fetches_total",
    "Outbound fetches to the image listing and quote sheet",
    ["source", "outcome"],
)

# kind: image | quote ; method: hash | day_of_month | day_of_year
DAILY_SELECTIONS_TOTAL = Counter(
    "daily_selections_total",
    "Daily picks served, by how they were chosen",
    ["kind", "method"],
)


def _path_template(request: Request) -> str:
    route = request.scope.get("route")
    if route and getattr(route, "path", None):
        return route.path
    return request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Records per-request Prometheus metrics (count, latency, 5xx).
    Requests matching ``skip_predicate`` (e.g. the scrape itself) are not counted.
    """

    def __init__(self, app, skip_predicate: Callable[[Request], bool] | None = None):
        super().__init__(app)
        self._skip = skip_predicate or (lambda req: False)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> StarletteResponse:
        if self._skip(request):
            return await call_next(request)

        start = time.time()
        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            HTTP_ERRORS_TOTAL.labels(method=method, path=_path_template(request)).inc()
            raise

        # route is only resolved once the request has been dispatched
        path = _path_template(request)
        status = str(response.status_code)
        HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=status).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=path, status=status).observe(
            time.time() - start
        )
        if response.status_code >= 500:
            HTTP_ERRORS_TOTAL.labels(method=method, path=path).inc()

        return response


def metrics_endpoint() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
