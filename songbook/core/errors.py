"""
Domain errors and their HTTP mapping

songbook/core/errors.py

Every failure leaves the API as ``{"error": "<text>"}``. Domain errors carry
their own status; driver and framework errors are mapped here.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class SongbookError(Exception):
    """Base class for errors reported to API callers"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SongbookError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidMoveError(SongbookError):
    """Reorder attempted past the first or last position"""
    status_code = status.HTTP_400_BAD_REQUEST


class DocumentValidationError(SongbookError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(SongbookError):
    """A concurrent write changed a document between read and swap"""
    status_code = status.HTTP_409_CONFLICT


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_songbook_error(request: Request, exc: SongbookError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: HTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(problems) or "Invalid request")


async def handle_duplicate_key(request: Request, exc: DuplicateKeyError):
    key = (exc.details or {}).get("keyValue")
    message = f"Duplicate value for {key}" if key else "Duplicate value violates a unique field"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_store_error(request: Request, exc: PyMongoError):
    """Unclassified persistence failure"""
    logger.error(f"{request.method} {request.url.path} store failure: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} unexpected failure")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(SongbookError, handle_songbook_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(DuplicateKeyError, handle_duplicate_key)
    app.add_exception_handler(PyMongoError, handle_store_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
