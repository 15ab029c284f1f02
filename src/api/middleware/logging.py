"""
Logging middleware for request/response tracking.

The request id is bound into structlog's context variables, so every
event logged while the request is handled (repository writes, guard
rejections, PDF renders) carries it.
"""

import time
import uuid
from collections.abc import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000

        # Reads and health checks are noisy; only writes are logged at info
        log = logger.info if request.method not in ("GET", "HEAD") else logger.debug
        log(
            "request_completed",
            status=response.status_code,
            duration_ms=round(elapsed_ms, 2),
            client=request.client.host if request.client else "unknown",
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
        structlog.contextvars.clear_contextvars()
        return response
