"""Request logging middleware for search requests."""

import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log method, path, status and duration of record searches."""

    def __init__(self, app, path_fragment: str = "/records"):
        super().__init__(app)
        self.path_fragment = path_fragment

    async def dispatch(self, request: Request, call_next):
        """Log request details and call next middleware."""
        if self.path_fragment not in str(request.url.path):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} in {elapsed_ms:.1f}ms",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 1)
            }
        )
        return response
