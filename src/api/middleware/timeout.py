"""
Request timeout middleware.
"""

import asyncio
from collections.abc import Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from src.application.dto.responses import ErrorResponse
from src.config import get_logger

logger = get_logger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 503 when a request runs longer than ``timeout_seconds``."""

    def __init__(self, app: ASGIApp, timeout_seconds: float = 30.0):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except TimeoutError:
            logger.warning(
                "request_timeout",
                request_id=getattr(request.state, "request_id", None),
                method=request.method,
                path=request.url.path,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=ErrorResponse(
                    error_code="REQUEST_TIMEOUT",
                    message="Request timeout",
                    hint="The request took too long. Retry later.",
                    path=request.url.path,
                ).model_dump(mode="json"),
            )
