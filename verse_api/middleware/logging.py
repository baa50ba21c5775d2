"""
Verse API: Request Logging Middleware
======================================

What:  One access-log line per request: method, path, client, status, duration.
How:   Starlette BaseHTTPMiddleware around the route handler.

Client address resolution (first present wins):
    1. X-Real-IP header          (set by nginx-style proxies)
    2. X-Forwarded-For header    (logged verbatim, may be a list)
    3. socket peer address

Log level follows the status class: 5xx ERROR, 4xx WARNING, otherwise INFO.
Request bodies and headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from verse_api.middleware.request_id import request_id_var

logger = logging.getLogger("verse_api.access")


def client_address(request: Request) -> str:
    """Best-effort client address, honouring proxy headers."""
    ip = request.headers.get("X-Real-IP")
    if not ip:
        ip = request.headers.get("X-Forwarded-For")
    if not ip:
        ip = request.client.host if request.client else "unknown"
    return ip


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request that reaches the application."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        client_ip = client_address(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "[%s] %s from %s -> %d in %.1fms [%s]",
            method,
            path,
            client_ip,
            status,
            duration_ms,
            request_id_var.get(""),
            extra={
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
