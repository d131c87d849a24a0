import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from taskmart.domain.errors import (
    AccountNotFound,
    DomainError,
    InvalidInput,
    InvalidOrExpiredCode,
    PasswordMismatch,
    WeakPassword,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses must come before their bases.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (InvalidInput, status.HTTP_400_BAD_REQUEST),
    (PasswordMismatch, status.HTTP_400_BAD_REQUEST),
    (WeakPassword, status.HTTP_400_BAD_REQUEST),
    (InvalidOrExpiredCode, status.HTTP_401_UNAUTHORIZED),
    (AccountNotFound, status.HTTP_404_NOT_FOUND),
)


def status_for(exc: DomainError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    logger.info(
        "request rejected",
        extra={"path": request.url.path, "error": type(exc).__name__, "status": code},
    )
    return JSONResponse(
        status_code=code,
        content={"error": type(exc).__name__, "detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
