from .analytics import AnalyticsMiddleware, analytics_middleware
from .error_handler import ErrorHandlerMiddleware, error_handler_middleware
from .logging import LoggingMiddleware, logging_middleware

__all__ = [
    "LoggingMiddleware",
    "ErrorHandlerMiddleware",
    "AnalyticsMiddleware",
    "logging_middleware",
    "error_handler_middleware",
    "analytics_middleware",
]
