"""Exception handlers producing the ``{"error": {...}}`` envelope."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from grid_builder.exceptions import ErrorCode, GridBuilderException
from grid_builder.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the JSON error envelope shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code.value, "message": message, "details": details or {}}},
    )


def _request_fields(request: Request) -> dict[str, str]:
    return {"method": request.method, "path": request.url.path}


async def grid_builder_exception_handler(request: Request, exc: GridBuilderException) -> JSONResponse:
    """Return a domain error with its own status code, code and details."""
    log_with_context(
        logger,
        "warning" if exc.status_code < 500 else "error",
        exc.message,
        error_code=exc.code.value,
        status_code=exc.status_code,
        event_type="grid_builder_error",
        **_request_fields(request),
    )
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies, forms and query parameters as 400."""
    errors = jsonable_encoder(exc.errors())
    log_with_context(
        logger,
        "warning",
        "Request validation failed",
        errors=errors,
        event_type="request_validation_error",
        **_request_fields(request),
    )
    return error_response(400, ErrorCode.VALIDATION_ERROR, "Invalid request", {"errors": errors})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected with its traceback and hide it from the client."""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "event_type": "unhandled_error", **_request_fields(request)},
    )
    return error_response(500, ErrorCode.INTERNAL_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Attach the handlers above plus slowapi's 429 handler to ``app``."""
    app.add_exception_handler(GridBuilderException, grid_builder_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, general_exception_handler)
