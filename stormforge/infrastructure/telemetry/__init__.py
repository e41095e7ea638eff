"""Telemetry infrastructure (logging, tracing, metrics)."""

from stormforge.infrastructure.telemetry.logging import (
    ContextLogger,
    clear_request_context,
    configure_logging,
    get_logger,
    request_id_var,
    set_request_context,
)
from stormforge.infrastructure.telemetry.metrics import (
    record_http_request,
    record_rate_limited,
    record_user_operation,
    set_service_info,
)

__all__ = [
    # Logging
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "request_id_var",
    # Metrics
    "set_service_info",
    "record_http_request",
    "record_rate_limited",
    "record_user_operation",
]
