"""API middleware."""

from batchcost.api.middleware.error_handler import ErrorHandlerMiddleware
from batchcost.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
