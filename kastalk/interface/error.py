"""Interface layer errors and domain error translation."""

import logfire
from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kastalk.domain.error import (
    ConflictError,
    DepthLimitExceededError,
    DomainError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailableError,
)

# Each domain error kind maps to its own status
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (DepthLimitExceededError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTPException a route should raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the mapped status and the error message
    """
    status_code = status_for(error)
    if status_code >= 500:
        logfire.error(
            "Domain error", error=str(error), error_type=type(error).__name__
        )
        detail = (
            "Storage temporarily unavailable"
            if isinstance(error, StorageUnavailableError)
            else "Internal error"
        )
    else:
        logfire.warn(
            "Domain error",
            error=str(error),
            error_type=type(error).__name__,
            status_code=status_code,
        )
        detail = str(error)
    return HTTPException(status_code=status_code, detail=detail)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests with 400, the same status as InvalidInputError.

    422 is reserved for DepthLimitExceededError.
    """
    errors = jsonable_encoder(exc.errors())
    logfire.warn(
        "Request validation failed",
        path=request.url.path,
        error_count=len(errors),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": errors},
    )
