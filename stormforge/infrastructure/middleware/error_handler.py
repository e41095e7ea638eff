"""Global error handlers.

Every failure is rendered as ``{"error": <CODE>, "message": <text>}``.
"""

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stormforge.domain.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from stormforge.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"
INTERNAL_ERROR_MESSAGE = "Something went wrong"
VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


def error_body(code: str, message: str, **extra: Any) -> dict[str, Any]:
    """Build the JSON error body shared by all handlers."""
    return {"error": code, "message": message, **extra}


def error_handler_middleware(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Handle all application errors."""
        status_code = _get_status_code(exc)

        log_level = "warning" if status_code < 500 else "error"
        getattr(logger, log_level)(
            f"Application error: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_details": exc.details,
                "path": request.url.path,
            },
        )

        if status_code >= 500:
            return JSONResponse(
                status_code=status_code,
                content=error_body(INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE),
            )

        headers = None
        if isinstance(exc, RateLimitError):
            headers = {"Retry-After": str(exc.retry_after_seconds)}

        return JSONResponse(
            status_code=status_code,
            content=error_body(exc.code, exc.message),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Schema validation failures become 400 before any handler runs."""
        details = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        message = "; ".join(
            f"{'/'.join(detail['loc'])} {detail['msg']}".strip() for detail in details
        ) or "Invalid request"

        logger.warning(
            "Request validation failed",
            extra={"path": request.url.path, "error_count": len(details)},
        )

        return JSONResponse(
            status_code=400,
            content=error_body(VALIDATION_ERROR_CODE, message, details=details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Framework-raised HTTP errors (unknown route, wrong method, ...)."""
        if exc.status_code == 404 and exc.detail == HTTPStatus.NOT_FOUND.phrase:
            message = f"Route {request.method}:{request.url.path} not found"
        else:
            message = str(exc.detail)

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(_status_code_name(exc.status_code), message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Storage failures become an opaque 500."""
        logger.error(
            "Database error",
            exc_info=exc,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )

        return JSONResponse(
            status_code=500,
            content=error_body(INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )

        return JSONResponse(
            status_code=500,
            content=error_body(INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE),
        )


def _get_status_code(error: AppError) -> int:
    """Map error type to HTTP status code."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, RateLimitError):
        return 429
    return 500


def _status_code_name(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase.upper().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "HTTP_ERROR"
