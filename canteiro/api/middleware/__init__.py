"""API middleware."""

from canteiro.api.middleware.error_handler import ErrorHandlerMiddleware
from canteiro.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
