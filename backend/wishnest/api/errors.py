"""
Error Handlers

Maps service-layer error kinds to HTTP responses. This is the only place
where an ErrorKind becomes a status code.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from wishnest.services.exceptions import ErrorKind, WishNestError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _json_error(kind: ErrorKind, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"error": kind.value, "detail": detail},
    )


async def wishnest_error_handler(request: Request, exc: WishNestError) -> JSONResponse:
    if exc.kind == ErrorKind.UNEXPECTED:
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc.message}")
    return _json_error(exc.kind, exc.message)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return _json_error(ErrorKind.UNEXPECTED, "A server error occurred.")


def register_error_handlers(app: FastAPI) -> None:
    """Register error handlers on the FastAPI app."""
    app.add_exception_handler(WishNestError, wishnest_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
