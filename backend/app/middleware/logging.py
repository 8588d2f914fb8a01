"""
Request correlation for the extraction service.

Each request gets an id (reused from an incoming X-Request-ID when the front
end sends one) bound into the structlog context, so extraction logs emitted
while handling it carry the same id.
"""
import time
import uuid
from typing import Callable
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog


logger = structlog.get_logger(__name__)

# Scraped constantly; not worth a log line each
QUIET_PATHS = {"/metrics", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "http_request_failed",
                duration_ms=round((time.time() - start_time) * 1000, 2),
                error=str(exc),
                error_type=type(exc).__name__
            )
            raise

        if path not in QUIET_PATHS:
            logger.info(
                "http_request_completed",
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
                request_bytes=int(request.headers.get("content-length") or 0)
            )

        response.headers["X-Request-ID"] = request_id
        return response
