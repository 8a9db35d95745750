"""Domain error taxonomy and the exception handlers that render it.

Every error carries a user-readable message; handlers include the request_id
in the response body.
"""

from collections.abc import Sequence
from typing import Any, ClassVar

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.chancery.core.logging import get_logger
from src.chancery.models.enums import ActionCodeErrorKind, ProviderErrorCode
from src.chancery.models.reconciliation import InconsistentStateWarning

logger = get_logger(__name__)

# Pydantic prefixes messages raised from validators
VALUE_ERROR_PREFIX = "Value error, "


class DomainError(Exception):
    """Base class for errors surfaced to the user as a message."""

    status_code: ClassVar[int] = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormValidationError(DomainError):
    """Local input problem; the user edits and resubmits."""

    status_code = 422


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidStateError(DomainError):
    """Record exists but is not in a state that allows the operation."""

    status_code = status.HTTP_409_CONFLICT


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN


class ProviderError(DomainError):
    """Auth provider refused a request. The message is passed through verbatim."""

    def __init__(self, code: ProviderErrorCode, message: str):
        super().__init__(message)
        self.code = code

    @property
    def http_status(self) -> int:
        if self.code == ProviderErrorCode.UNKNOWN:
            return status.HTTP_502_BAD_GATEWAY
        if self.code in (ProviderErrorCode.INVALID_CREDENTIALS, ProviderErrorCode.USER_DISABLED):
            return status.HTTP_401_UNAUTHORIZED
        return status.HTTP_400_BAD_REQUEST


class ActionCodeError(DomainError):
    """Email action code rejected by the auth provider."""

    def __init__(self, kind: ActionCodeErrorKind, message: str | None = None):
        super().__init__(message or f"Action code rejected: {kind.value}")
        self.kind = kind


class RegistrationIncompleteError(DomainError):
    """Account created but a later registration write failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, warning: InconsistentStateWarning):
        super().__init__(
            "Your account was created but registration could not be completed. "
            "An administrator has been notified."
        )
        self.warning = warning


def _error_response(
    status_code: int, detail: object, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def first_validation_message(errors: Sequence[Any]) -> str:
    if not errors:
        return "Invalid request"
    message = str(errors[0].get("msg", "Invalid request"))
    return message.removeprefix(VALUE_ERROR_PREFIX)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = exc.http_status if isinstance(exc, ProviderError) else exc.status_code
        logger.info(
            "Request failed with domain error",
            error_type=type(exc).__name__,
            path=request.url.path,
            status_code=status_code,
        )
        return _error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Surface the first failing rule as a single message."""
        errors = exc.errors()
        detail = first_validation_message(errors)
        return JSONResponse(
            status_code=422,
            content={
                "detail": detail,
                "errors": [
                    {"loc": list(error.get("loc", ())), "msg": str(error.get("msg", ""))}
                    for error in errors
                ],
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, exc.headers)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail, exc.headers)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return _error_response(500, "Internal server error")
