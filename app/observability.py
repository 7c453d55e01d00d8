from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

LOGGER_NAME = "daily_inspiration"

# Set per request by RequestIdMiddleware; "-" outside a request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamp records with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, msg, request_id (+ exc when present)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", request_id_var.get()),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_json_logging(logger_name: str = LOGGER_NAME) -> logging.Logger:
    """
    JSON-line app logger:

      {"ts":"...","level":"...","msg":"...","request_id":"..."}

    Idempotent; the domain modules log through the same named logger.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Echo or mint X-Request-ID, expose it to loggers, write one access line."""

    def __init__(self, app, logger: logging.Logger):
        super().__init__(app)
        self.log = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(rid)
        start = time.time()
        client = request.client.host if request.client else "-"
        try:
            try:
                response = await call_next(request)
            except Exception:
                self.log.exception(
                    'unhandled_exception method="%s" path="%s" duration_ms=%d client="%s"',
                    request.method,
                    request.url.path,
                    int((time.time() - start) * 1000),
                    client,
                )
                raise

            response.headers["X-Request-ID"] = rid
            self.log.info(
                'access method="%s" path="%s" status=%d duration_ms=%d client="%s"',
                request.method,
                request.url.path,
                response.status_code,
                int((time.time() - start) * 1000),
                client,
            )
            return response
        finally:
            request_id_var.reset(token)
