"""
Domain exceptions and their HTTP translation.

CRUD and engine code raise these; the handlers registered by
``register_exception_handlers`` turn them into JSON error responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when a required field is missing or a value is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    """Raised when an operation references an unknown employee."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """Raised on duplicate cedula or an illegal ENTRADA/SALIDA transition."""

    status_code = status.HTTP_409_CONFLICT


class PersistenceError(DomainError):
    """
    Raised when the database fails.

    The effect of the failed operation is unknown to the caller, who must
    re-query before retrying.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "No se pudo completar la operación. Intente de nuevo."):
        super().__init__(message)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures outside the CRUD guards (lazy loads, flushes)."""
    logger.error("Unguarded database failure on %s %s", request.method, request.url.path, exc_info=exc)
    return await domain_error_handler(request, PersistenceError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
