"""Middleware components for request validation and protection."""

from dashboard.middleware.rate_limit import limiter
from dashboard.middleware.size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestSizeLimitMiddleware",
    "limiter",
]
