"""Error Handlers — every failure leaves the API in the same {"error": {...}} envelope.

Invariants:
    - MarketplaceError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR listing each offending field
    - Unknown routes / wrong methods → 404 / 405 in the envelope, never Starlette's default body
    - Exception (catch-all) → 500 INTERNAL_ERROR; the message is fixed, details only in logs

Design Decisions:
    - Four handlers registered explicitly, most specific first (ADR: uniform error shape)
    - Rejected requests (4xx) log at WARNING, server faults (5xx) at ERROR with the traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gigmarket.core.errors import ErrorCategory, ErrorSeverity, MarketplaceError

logger = logging.getLogger(__name__)

_ROUTING_CODES = {
    status.HTTP_404_NOT_FOUND: ("RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", ErrorCategory.VALIDATION),
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, routing_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def error_envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    """Body for errors raised outside the MarketplaceError hierarchy."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    ctx = exc.context
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            "user_id": ctx.user_id, "order_id": ctx.order_id,
            "dispute_id": ctx.dispute_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # loc is ("body", "gigId") or ("query", "orderId"); the first element is the source
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"][1:]) or str(e["loc"][0]),
            "source": str(e["loc"][0]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            "VALIDATION_ERROR", "Missing or invalid fields",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
        ),
    )


async def routing_error_handler(request: Request, exc: StarletteHTTPException):
    code, category = _ROUTING_CODES.get(
        exc.status_code, ("HTTP_ERROR", ErrorCategory.VALIDATION),
    )
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(code, message, category, ErrorSeverity.WARNING),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "Server error",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
