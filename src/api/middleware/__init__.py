"""API middleware."""

from src.api.middleware.error_handler import ErrorHandlerMiddleware
from src.api.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware", "ErrorHandlerMiddleware"]
