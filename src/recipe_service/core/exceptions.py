"""Error responses and exception handlers.

Services raise transport-free domain exceptions; this module is the only
place they are translated into HTTP status codes. Every error body has the
same shape: ``{"error", "message", "details", "request_id"}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, NamedTuple

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_service.auth.exceptions import (
    DuplicateCredentialError,
    InvalidCredentialsError,
    TokenError,
    UserNotFoundError,
)
from recipe_service.llm.exceptions import InvalidAiResponseError, LLMError
from recipe_service.observability.logging import get_logger
from recipe_service.services.recipes.exceptions import (
    AccessDeniedError,
    RecipeNotFoundError,
)


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)

_BEARER_CHALLENGE: Final = {"WWW-Authenticate": "Bearer"}


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class _ErrorMapping(NamedTuple):
    status_code: int
    error: str
    message: str | None = None  # None: use str(exc)
    challenge: bool = False


# Most specific classes first.
DOMAIN_ERRORS: Final[dict[type[Exception], _ErrorMapping]] = {
    DuplicateCredentialError: _ErrorMapping(status.HTTP_409_CONFLICT, "CONFLICT"),
    InvalidCredentialsError: _ErrorMapping(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED"),
    TokenError: _ErrorMapping(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", challenge=True),
    UserNotFoundError: _ErrorMapping(status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    RecipeNotFoundError: _ErrorMapping(status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    AccessDeniedError: _ErrorMapping(status.HTTP_403_FORBIDDEN, "FORBIDDEN"),
    InvalidAiResponseError: _ErrorMapping(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "SERVICE_UNAVAILABLE",
        "The AI service returned an invalid response. Please try again.",
    ),
    LLMError: _ErrorMapping(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "SERVICE_UNAVAILABLE",
        "AI service temporarily unavailable",
    ),
    IntegrityError: _ErrorMapping(
        status.HTTP_409_CONFLICT,
        "CONFLICT",
        "The request conflicts with existing data",
    ),
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    *,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=_get_request_id(request),
        ).model_dump(),
        headers=headers,
    )


def _duplicate_details(exc: Exception) -> list[ErrorDetail] | None:
    if isinstance(exc, DuplicateCredentialError):
        return [ErrorDetail(code="DUPLICATE", message=str(exc), field=exc.field)]
    return None


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    async def domain_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Translate a domain exception using :data:`DOMAIN_ERRORS`."""
        mapping = next(
            mapping for cls, mapping in DOMAIN_ERRORS.items() if isinstance(exc, cls)
        )
        log = logger.warning if mapping.status_code >= 500 else logger.info
        log(
            "Request failed",
            error_type=type(exc).__name__,
            status_code=mapping.status_code,
            path=request.url.path,
        )
        return _error_response(
            request,
            mapping.status_code,
            mapping.error,
            mapping.message or str(exc),
            details=_duplicate_details(exc),
            headers=_BEARER_CHALLENGE if mapping.challenge else None,
        )

    for exc_class in DOMAIN_ERRORS:
        app.add_exception_handler(exc_class, domain_exception_handler)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions, keeping their headers."""
        return _error_response(
            request,
            exc.status_code,
            "HTTP_ERROR",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle Pydantic validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            details=details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions without leaking internals."""
        logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
        )
