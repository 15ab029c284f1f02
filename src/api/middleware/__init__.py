"""API middleware."""

from src.api.middleware.error_handler import ErrorHandlerMiddleware
from src.api.middleware.logging import LoggingMiddleware
from src.api.middleware.timeout import TimeoutMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware", "TimeoutMiddleware"]
