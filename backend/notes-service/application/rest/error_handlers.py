"""Exception handlers translating domain errors into HTTP responses.

Routers let domain exceptions propagate; the handlers registered here turn
them into ``ErrorResponse`` bodies with the matching status code.

Usage:
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
"""

import logging

from application.rest.schemas.output.common_output import ErrorResponse
from domain.exceptions import (
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    PreconditionFailedError,
    RateLimitedError,
    RemoteForbiddenError,
    RemoteUnauthorizedError,
    UpstreamError,
)
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Checked in order, so subclasses must come before their bases
ERROR_STATUS_CODES = (
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (PreconditionFailedError, status.HTTP_400_BAD_REQUEST),
    # The stored token is a user setting, not the caller's session
    (RemoteUnauthorizedError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (RemoteForbiddenError, status.HTTP_403_FORBIDDEN),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY),
)


def status_code_for(exc: DomainError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handlers on the application.

    Args:
        app (FastAPI): Application to configure.
    """

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: [{exc.error_code}] {exc}"
            )
        else:
            logger.warning(
                f"{request.method} {request.url.path} rejected: [{exc.error_code}] {exc}"
            )

        headers = None
        if isinstance(exc, RateLimitedError) and exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}

        body = ErrorResponse(detail=str(exc), error_code=exc.error_code)
        return JSONResponse(
            status_code=status_code, content=body.model_dump(), headers=headers
        )
