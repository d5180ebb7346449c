"""
SightSharing Backend: Request Logging Middleware
================================================

What:  One access-log line per HTTP request: method, path, status, duration,
       request ID, client IP.
How:   Measures time around call_next and picks the log level from the
       status code (5xx → ERROR, 4xx → WARNING, else INFO).
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Static asset requests (/uploads, /css, /images) and /health are logged at
DEBUG only; a gallery page load fetches up to nine card images.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from sightsharing.middleware.request_id import request_id_var

logger = logging.getLogger("sightsharing.access")

QUIET_PREFIXES = ("/uploads/", "/css/", "/images/", "/health")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        elif path.startswith(QUIET_PREFIXES):
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
