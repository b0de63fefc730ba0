"""Request Middleware: per-request access logging and response timing.

Invariants:
    - Exactly one access log line per request, including requests that raise
    - X-Response-Time header set on every response that reaches the middleware
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI) -> None:
    """Install the access-log middleware on the app."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            _log_request(request, 500, started)
            raise
        duration_ms = _log_request(request, response.status_code, started)
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response


def _log_request(request: Request, status_code: int, started: float) -> float:
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} {status_code} {duration_ms}ms",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        },
    )
    return duration_ms
