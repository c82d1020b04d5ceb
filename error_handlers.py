"""
Global exception handlers for the SocialX gateway
Renders every failure as the standard error envelope and logs it
"""

import logging
from typing import Any, Dict, Optional, Union
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime, UTC

from logging_config import log_error
from models.responses import ErrorResponse
from exceptions import (
    SocialXException,
    ResourceNotFoundError,
    ValidationError,
    ServiceUnavailableError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "RESOURCE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    429: "TOO_MANY_REQUESTS",
    500: "INTERNAL_SERVER_ERROR",
    502: "BAD_GATEWAY",
    503: "SERVICE_UNAVAILABLE",
    504: "GATEWAY_TIMEOUT",
}

RETRY_AFTER_SECONDS = 60


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a JSONResponse carrying an ErrorResponse body"""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error_code,
            message=message,
            details=details or None,
            timestamp=datetime.now(UTC),
        ).model_dump(),
        headers=headers,
    )


def _log_failure(request: Request, status_code: int, message: str, **extra) -> None:
    # 5xx at error level, everything else at warning
    log = logger.error if status_code >= 500 else logger.warning
    log(
        message,
        extra={
            "path": str(request.url),
            "method": request.method,
            "status_code": status_code,
            **extra,
        },
    )


def _validation_details(errors) -> Dict[str, Any]:
    # error contexts may hold exception instances
    return {"validation_errors": jsonable_encoder(errors, custom_encoder={Exception: str})}


async def socialx_exception_handler(
    request: Request, exc: SocialXException
) -> JSONResponse:
    """Any SocialXException without a more specific handler"""
    _log_failure(
        request,
        exc.status_code,
        f"SocialX Exception: {exc.error_code} - {exc.message}",
        error_code=exc.error_code,
        details=exc.details,
    )
    return error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def resource_not_found_exception_handler(
    request: Request, exc: ResourceNotFoundError
) -> JSONResponse:
    logger.info(
        f"Resource not found: {exc.message}",
        extra={"path": str(request.url), "method": request.method},
    )
    return error_response(404, exc.error_code, exc.message, exc.details)


async def validation_exception_handler(
    request: Request,
    exc: Union[ValidationError, RequestValidationError, PydanticValidationError],
) -> JSONResponse:
    """
    Our ValidationError keeps its own message and field errors; FastAPI
    request errors and pydantic model errors are reported with their
    error lists under ``validation_errors``.
    """
    if isinstance(exc, ValidationError):
        message, details = exc.message, exc.details
    elif isinstance(exc, RequestValidationError):
        message, details = "Request validation failed", _validation_details(exc.errors())
    else:
        message, details = "Data validation failed", _validation_details(exc.errors())

    _log_failure(request, 422, f"Validation error: {message}", validation_errors=details)
    return error_response(422, "VALIDATION_ERROR", message, details)


async def upstream_exception_handler(
    request: Request, exc: Union[UpstreamError, UpstreamTimeoutError]
) -> JSONResponse:
    """Backend behind the API proxy unreachable (502) or too slow (504)"""
    _log_failure(
        request, exc.status_code, f"Upstream error: {exc.message}", error_details=exc.details
    )
    return error_response(exc.status_code, exc.error_code, exc.message, exc.details)


async def service_unavailable_exception_handler(
    request: Request, exc: ServiceUnavailableError
) -> JSONResponse:
    _log_failure(
        request, 503, f"Service unavailable: {exc.message}", error_details=exc.details
    )
    return error_response(
        503,
        exc.error_code,
        exc.message,
        exc.details,
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors raised by Starlette (unknown path, wrong method)"""
    if exc.status_code >= 400:
        _log_failure(
            request,
            exc.status_code,
            f"HTTP {exc.status_code}: {exc.detail}",
        )
    return error_response(
        exc.status_code,
        HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_error(logger, exc, context={"path": str(request.url), "method": request.method})
    return error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app
    """
    # Custom SocialX exceptions
    app.add_exception_handler(ResourceNotFoundError, resource_not_found_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(ServiceUnavailableError, service_unavailable_exception_handler)
    app.add_exception_handler(UpstreamError, upstream_exception_handler)
    app.add_exception_handler(UpstreamTimeoutError, upstream_exception_handler)
    app.add_exception_handler(SocialXException, socialx_exception_handler)

    # Standard exceptions
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
