"""
Domain exceptions and their HTTP mapping.

Routes raise these from the service layer; `register_exception_handlers`
turns them into `{"detail": ...}` responses like FastAPI's own HTTPException.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Raised when query parameters or input data are malformed."""

    default_message = "Invalid request parameters"


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InvalidStateError(DomainError):
    """The attendance record is not in a state that allows the action."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid attendance state"


class AlreadyCheckedInError(InvalidStateError):
    default_message = "Already checked in today"


class NotCheckedInError(InvalidStateError):
    default_message = "You have not checked in today"


class AlreadyCheckedOutError(InvalidStateError):
    default_message = "Already checked out today"


async def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database unavailable, please try again later"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
