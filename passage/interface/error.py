"""Interface layer errors.

Maps the domain error taxonomy to HTTP responses. Response bodies carry
only an error's ``public_message``.
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from passage.domain.error import (
    AccountNotFoundError,
    DomainError,
    DuplicateAccountError,
    FederatedAccountOnlyError,
    InternalError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidSessionError,
    NotificationError,
    TransientError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses must come before their bases
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateAccountError, status.HTTP_409_CONFLICT),
    (AccountNotFoundError, status.HTTP_404_NOT_FOUND),
    (FederatedAccountOnlyError, status.HTTP_403_FORBIDDEN),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (InvalidOrExpiredTokenError, status.HTTP_400_BAD_REQUEST),
    (InvalidSessionError, status.HTTP_401_UNAUTHORIZED),
    (NotificationError, status.HTTP_502_BAD_GATEWAY),
    (TransientError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error; 500 for anything unmapped."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error to an HTTPException with a safe detail.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    code = status_code_for(error)
    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Unmapped domain error: %s", type(error).__name__)
        return HTTPException(status_code=code, detail=InternalError.public_message)

    headers = None
    if code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    elif code == status.HTTP_503_SERVICE_UNAVAILABLE:
        headers = {"Retry-After": "1"}
    return HTTPException(status_code=code, detail=error.public_message, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the type, return a generic 500 body."""
    logger.exception(
        "Unhandled error on %s %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": InternalError.public_message},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report undecodable request bodies as 400, like other invalid input.

    Field values are not echoed back, since they may include a password.
    """
    locations = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.info("Malformed request on %s: %s", request.url.path, locations)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Malformed request body"},
    )
