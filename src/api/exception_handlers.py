"""Map domain and framework exceptions to JSON error responses.

Every error body has the shape {"error": "<message>"}; validation errors add
"details". Internal failures are logged and reported generically.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import (
    AccountDeactivatedError,
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    PermissionDeniedError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "Validation Error"

ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    # Duplicate email is reported as 400, matching the client's expectations
    (DuplicateError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (AccountDeactivatedError, status.HTTP_401_UNAUTHORIZED),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(exc: DomainError) -> int:
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)

    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Unhandled domain error",
            exc_info=exc,
            extra={"path": request.url.path, "errorType": type(exc).__name__},
        )
        return JSONResponse(status_code=code, content={"error": "Internal Server Error"})

    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=code, content={"error": VALIDATION_ERROR, "details": exc.errors})

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=code, content={"error": str(exc)}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {}
    for err in exc.errors():
        # Drop the leading "body"/"query" segment
        loc = [str(part) for part in err.get("loc", ())][1:]
        details.setdefault(".".join(loc) or "body", err.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"error": VALIDATION_ERROR, "details": details}),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
