"""
Exception handlers for the API.

Every error leaves the API as {"slug": ...} with a status derived from the
error's category. Messages and details stay in the logs.
"""

import asyncio
import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import AppError, ErrorCategory

from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_BY_CATEGORY = {
    ErrorCategory.AUTHORIZATION: status.HTTP_401_UNAUTHORIZED,
    ErrorCategory.INCORRECT_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}

# Slug for a body field that is absent altogether.
_MISSING_FIELD_SLUGS = {
    "email": "field-email-required",
    "password": "field-password-required",
    "name": "field-name-required",
    "refresh": "invalid-token",
    "currency": "field-currency-required",
}

# Slug for a field that is present but fails a built-in type check.
_INVALID_FIELD_SLUGS = {
    "email": "field-email-invalid",
    "refresh": "invalid-token",
}

INVALID_INPUT = "invalid-input"
INTERNAL_ERROR = "internal-server-error"
REQUEST_TIMEOUT = "request-timeout"


def _error_response(status_code: int, slug: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(slug=slug).model_dump(),
        headers=headers,
    )


def validation_slug(errors: Sequence[dict[str, Any]]) -> str:
    """
    Pick the slug for a failed request body.

    Only the first error counts. Custom validators already use the slug as
    the error type; anything else is mapped by field name.
    """
    if not errors:
        return INVALID_INPUT

    error = errors[0]
    error_type = error.get("type", "")
    loc = error.get("loc", ())
    field = loc[1] if len(loc) > 1 and loc[0] == "body" else None

    if error_type.startswith("field-") or error_type in (INVALID_INPUT, "invalid-token"):
        return error_type
    if field is None:
        return INVALID_INPUT
    if error_type == "missing":
        return _MISSING_FIELD_SLUGS.get(field, INVALID_INPUT)
    return _INVALID_FIELD_SLUGS.get(field, INVALID_INPUT)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that turn every failure into an ErrorResponse."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        status_code = _STATUS_BY_CATEGORY.get(exc.category)
        if status_code is None:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.slug}: {exc.message}"
            )
            return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

        log = logger.info if exc.category is ErrorCategory.AUTHORIZATION else logger.debug
        log(f"{request.method} {request.url.path} -> {status_code} {exc.slug}: {exc.message}")
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        return _error_response(status_code, exc.slug, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        slug = validation_slug(exc.errors())
        logger.debug(f"{request.method} {request.url.path} -> 400 {slug}")
        return _error_response(status.HTTP_400_BAD_REQUEST, slug)

    @app.exception_handler(asyncio.TimeoutError)
    async def handle_timeout(request: Request, exc: asyncio.TimeoutError) -> JSONResponse:
        logger.warning(f"{request.method} {request.url.path} timed out")
        return _error_response(status.HTTP_504_GATEWAY_TIMEOUT, REQUEST_TIMEOUT)

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"{request.method} {request.url.path} raised {type(exc).__name__}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
