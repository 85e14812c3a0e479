"""
Access Log Middleware.

One line per request with method, path, status and duration. The
dashboard polls the listing endpoint every few seconds, so polling and
health probes are logged at DEBUG.
"""

import time

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

http_log = logger.bind(module="HTTP")

POLLED_PATHS = frozenset({"/health", "/api/listings"})


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs requests and adds an X-Response-Time header (ms)."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}"

        level = "DEBUG" if request.url.path in POLLED_PATHS else "INFO"
        http_log.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed_ms:.0f}ms",
        )
        return response
