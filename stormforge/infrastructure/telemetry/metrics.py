"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, Info

# Service info
SERVICE_INFO = Info("stormforge", "StormForge API service information")

# Request metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

HTTP_RATE_LIMITED_TOTAL = Counter(
    "http_rate_limited_total",
    "Requests rejected by the rate limiter",
)

# User operations
USER_OPERATIONS_TOTAL = Counter(
    "user_operations_total",
    "User CRUD operations by outcome",
    ["operation", "outcome"],  # outcome: success, not_found, conflict, error
)


def set_service_info(version: str, environment: str) -> None:
    """Set service information.

    Args:
        version: Service version
        environment: Deployment environment
    """
    SERVICE_INFO.info({
        "version": version,
        "environment": environment,
    })


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record an HTTP request.

    Args:
        method: HTTP method
        endpoint: Route template (not the raw path, to bound cardinality)
        status_code: Response status code
        duration_seconds: Request duration in seconds
    """
    HTTP_REQUESTS_TOTAL.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(
        method=method,
        endpoint=endpoint,
    ).observe(duration_seconds)


def record_rate_limited() -> None:
    """Record a request rejected by the rate limiter."""
    HTTP_RATE_LIMITED_TOTAL.inc()


def record_user_operation(operation: str, outcome: str) -> None:
    """Record a user CRUD operation.

    Args:
        operation: create, list, get, update or delete
        outcome: success, not_found, conflict or error
    """
    USER_OPERATIONS_TOTAL.labels(operation=operation, outcome=outcome).inc()
