"""Middleware infrastructure."""

from stormforge.infrastructure.middleware.error_handler import error_handler_middleware
from stormforge.infrastructure.middleware.rate_limit import RateLimiter, RateLimitMiddleware
from stormforge.infrastructure.middleware.request_context import RequestContextMiddleware
from stormforge.infrastructure.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RateLimiter",
    "RateLimitMiddleware",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "error_handler_middleware",
]
