"""Error taxonomy and the HTTP handlers that render it."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# Unique constraint name -> API field reported back to the client.
_CONSTRAINT_FIELDS = {
    "students_pkey": "studentId",
    "students_email_unique": "email",
    "endorsements_unique": "endorsement",
}
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: \w+\.(\w+)")
_COLUMN_FIELDS = {
    "student_id": "studentId",
    "email": "email",
    "endorser_id": "endorsement",
    "recognition_id": "endorsement",
}


class BoostlyError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, status_code: Optional[int] = None, errors: Optional[list] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors


class ValidationFailed(BoostlyError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(BoostlyError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateEntry(BoostlyError):
    status_code = status.HTTP_400_BAD_REQUEST


def error_body(message: str, errors: Optional[list] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def duplicate_field(exc: IntegrityError) -> Optional[str]:
    """Best-effort recovery of the field behind a unique violation."""

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    for constraint, field in _CONSTRAINT_FIELDS.items():
        if constraint in raw:
            return field
    match = _SQLITE_UNIQUE.search(raw)
    if match:
        return _COLUMN_FIELDS.get(match.group(1), match.group(1))
    return None


def _format_validation_error(error: dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def _boostly_error_handler(request: Request, exc: BoostlyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.detail, exc.errors))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation Error", errors),
    )


async def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    field = duplicate_field(exc)
    message = f"{field} already exists" if field else "Duplicate entry"
    logger.info("integrity violation on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected error on %s %s", request.method, request.url.path)
    message = GENERIC_ERROR_MESSAGE if get_settings().is_production else (str(exc) or GENERIC_ERROR_MESSAGE)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(message))


def register_error_handlers(app: FastAPI) -> None:
    """Install envelope-producing handlers for every error kind."""

    app.add_exception_handler(BoostlyError, _boostly_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
