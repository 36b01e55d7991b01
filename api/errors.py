"""
Exception handlers.

Maps the shared exception hierarchy to HTTP status codes. Anything not
covered is logged and reported as a bare 500 without internal detail.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    SweetShopError,
    ValidationError,
)

from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_CODES: list[tuple[type[SweetShopError], int]] = [
    (ValidationError, 400),
    (ConflictError, 400),
    (BusinessRuleError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
]


def status_code_for(exc: SweetShopError) -> int:
    """Get the HTTP status for a domain exception (500 if unmapped)."""
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def handle_domain_error(request: Request, exc: SweetShopError) -> JSONResponse:
    status_code = status_code_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    if status_code == 500:
        logger.error("Unmapped domain error on %s %s: %s", request.method, request.url.path, exc.code)
        return _internal_error()
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies and query strings as 400."""
    violations = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    body = ErrorResponse(
        error="VALIDATION_ERROR",
        message="Invalid request",
        details={"violations": violations},
    )
    return JSONResponse(status_code=400, content=body.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _internal_error()


def _internal_error() -> JSONResponse:
    body = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(status_code=500, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Install all exception handlers on the application."""
    app.add_exception_handler(SweetShopError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
