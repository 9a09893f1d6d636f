"""Application-level exception handling helpers."""

from __future__ import annotations

import logging
from contextvars import Token
from http import HTTPStatus
from typing import Any, Mapping, Sequence

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.config import Settings
from .core.context import REQUEST_ID_HEADER, bind_request_id, reset_request_id
from .schemas.envelope import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "application_error",
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Sequence[FieldError] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = list(details) if details else None
        self.headers = dict(headers) if headers else None


class ValidationFailedError(ApplicationError):
    """Input that is well-formed but violates a domain rule."""

    def __init__(
        self,
        message: str = "Validation failed",
        *,
        details: Sequence[FieldError] | None = None,
    ) -> None:
        super().__init__(
            message,
            code="validation_failed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class UnauthorizedError(ApplicationError):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message,
            code="unauthorized",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(ApplicationError):
    """Authenticated principal acting on something it does not own."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, code="forbidden", status_code=status.HTTP_403_FORBIDDEN)


class NotFoundError(ApplicationError):
    """Error representing missing resources."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="not_found", status_code=status.HTTP_404_NOT_FOUND)


class ConflictError(ApplicationError):
    """Unique constraint style conflicts, such as a duplicate email."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, code="conflict", status_code=status.HTTP_409_CONFLICT)


class InternalError(ApplicationError):
    """Error representing unexpected server failures."""

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(
            message,
            code="internal_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _bind_request_context(request: Request) -> Token[str] | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return None
    return bind_request_id(request_id)


def _reset_request_context(token: Token[str] | None) -> None:
    if token is not None:
        reset_request_id(token)


def _error_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    details: Sequence[FieldError] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(error=message, details=list(details) if details else None)
    response = JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", exclude_none=True),
    )
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _validation_details(errors: Sequence[Mapping[str, Any]]) -> list[FieldError]:
    details: list[FieldError] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append(
            FieldError(field=".".join(location) or "body", message=str(error.get("msg", "Invalid value")))
        )
    return details


def _http_exception_message(status_code: int, detail: Any) -> str:
    if isinstance(detail, str) and detail:
        return detail
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _debug_enabled(request: Request) -> bool:
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return bool(settings and settings.debug)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            message = exc.message
            if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.error(
                    "Application error encountered",
                    extra={"code": exc.code, "status_code": exc.status_code},
                    exc_info=exc,
                )
                if not _debug_enabled(request):
                    message = INTERNAL_ERROR_MESSAGE
            else:
                logger.warning(
                    "Application error encountered",
                    extra={"code": exc.code, "status_code": exc.status_code, "error": exc.message},
                )
            return _error_response(
                request,
                status_code=exc.status_code,
                message=message,
                details=exc.details,
                headers=exc.headers,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            details = _validation_details(exc.errors())
            logger.warning(
                "Request validation failed",
                extra={"fields": [detail.field for detail in details]},
            )
            return _error_response(
                request,
                status_code=status.HTTP_400_BAD_REQUEST,
                message="Validation failed",
                details=details,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(IntegrityError)
    async def _handle_integrity_error(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.warning("Database integrity error encountered", extra={"error": str(exc.orig)})
            return _error_response(
                request,
                status_code=status.HTTP_409_CONFLICT,
                message="A record with that value already exists",
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            message = _http_exception_message(exc.status_code, exc.detail)
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "HTTP exception raised",
                extra={"status_code": exc.status_code, "path": str(request.url.path)},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                message=message,
                headers=exc.headers or None,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        token = _bind_request_context(request)
        try:
            logger.exception("Unhandled application error")
            message = (str(exc) or INTERNAL_ERROR_MESSAGE) if _debug_enabled(request) else INTERNAL_ERROR_MESSAGE
            return _error_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message=message,
            )
        finally:
            _reset_request_context(token)


__all__ = [
    "ApplicationError",
    "ConflictError",
    "ForbiddenError",
    "INTERNAL_ERROR_MESSAGE",
    "InternalError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationFailedError",
    "register_exception_handlers",
]
