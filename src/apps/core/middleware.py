"""
Request logging middleware.

Logs one line per request: method, path, status, duration and client IP.
Health checks are logged at DEBUG so liveness probes don't flood the log.
"""

import logging
import time

logger = logging.getLogger("apps.requests")

_QUIET_PATHS = ("/api/health",)


def get_client_ip(request) -> str:
    """Extract client IP, respecting X-Forwarded-For behind a proxy."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "unknown")


class RequestLogMiddleware:
    """Log each request with its response status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = (time.monotonic() - start) * 1000

        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        logger.log(
            level,
            "%s %s %d %.1fms (%s)",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
            get_client_ip(request),
        )
        return response
