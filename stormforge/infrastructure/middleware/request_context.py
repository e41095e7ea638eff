"""Request context middleware for correlation IDs and access logging."""

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stormforge.infrastructure.telemetry.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
)
from stormforge.infrastructure.telemetry.metrics import record_http_request

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Sets up request context for logging and records request metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        client_ip = request.client.host if request.client else None

        set_request_context(request_id=request_id, client_ip=client_ip)
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start

            response.headers["X-Request-ID"] = request_id

            route = request.scope.get("route")
            endpoint = getattr(route, "path", None) or "unmatched"
            record_http_request(request.method, endpoint, response.status_code, duration)

            log = logger.warning if response.status_code >= 400 else logger.info
            if response.status_code >= 500:
                log = logger.error
            log(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration * 1000, 2),
                },
            )

            return response
        finally:
            clear_request_context()
