from .logging_middleware import RequestLoggingMiddleware
from .routing import McpPathMiddleware

__all__ = ["McpPathMiddleware", "RequestLoggingMiddleware"]
