"""
Custom exception handlers for FastAPI.

Every error body has the same shape: a machine-readable ``error`` kind, a
human-readable ``detail`` and the ``status_code``.

Security:
- Request IDs are logged server-side for tracing but NOT exposed in bodies
- Generic error messages for 500 errors to prevent information disclosure
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from freshness.exceptions import FreshnessError, RateLimited
from freshness.logging import get_context_value, get_logger

logger = get_logger("backend.errors")


def _response_payload(error: str, detail: str, status_code: int) -> dict:
    return {
        "error": error,
        "detail": detail,
        "status_code": status_code,
    }


def internal_error_response(exc: Exception, request_id: str) -> JSONResponse:
    """
    Build the generic 500 response for an unexpected exception.

    Called by RequestIDMiddleware from inside its ``except`` block, so the
    traceback is still available to ``logger.exception``.
    """
    # Log full details server-side (including request_id for tracing)
    logger.exception(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        request_id=request_id,
    )
    # Return generic message - don't expose exception details
    return JSONResponse(
        status_code=500,
        content=_response_payload("InternalError", "Internal server error", 500),
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FreshnessError)
    async def freshness_exception_handler(request: Request, exc: FreshnessError):
        log_method = logger.warning if exc.status_code < 500 else logger.error
        log_method(
            "freshness_error",
            kind=exc.kind,
            detail=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=get_context_value("request_id", "-"),
        )
        headers = None
        if isinstance(exc, RateLimited) and exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=get_context_value("request_id", "-"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload("HTTPError", str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            request_id=get_context_value("request_id", "-"),
        )
        return JSONResponse(
            status_code=422,
            content=_response_payload("ValidationError", "Validation error", 422),
        )
