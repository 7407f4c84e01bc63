"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as ModelValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from qna.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)

# Most specific first
_STATUS_BY_ERROR: list[tuple[type[DomainError], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "forbidden"),
    (InvalidOperationError, status.HTTP_400_BAD_REQUEST, "invalid_operation"),
    (ConflictError, status.HTTP_409_CONFLICT, "conflict"),
]


def error_response(exc: Exception) -> JSONResponse:
    """Build the JSON error body for a domain or input error."""
    if isinstance(exc, DomainError):
        for error_type, status_code, code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                break
        else:
            status_code, code = status.HTTP_400_BAD_REQUEST, "domain_error"
    else:
        # Value objects and request models built from path or body data
        status_code, code = status.HTTP_400_BAD_REQUEST, "validation_error"

    return JSONResponse(
        status_code=status_code,
        content={"error": code, "detail": str(exc)},
    )


class DomainErrorMiddleware(BaseHTTPMiddleware):
    """Turns domain errors raised by route handlers into JSON responses.

    Must sit outside the DI container middleware. The request container
    hands the exception to its finalizers, which roll the session back
    and discard the notification outbox.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except (DomainError, ModelValidationError) as exc:
            logfire.warn(
                "Request failed with domain error",
                error_type=type(exc).__name__,
                error=str(exc),
                path=request.url.path,
            )
            return error_response(exc)
