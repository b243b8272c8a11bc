# taskmaster/errors.py
"""Tagged error envelope and the FastAPI handlers that render it.

Every failure leaves the API as::

    {"kind": "...", "code": "...", "message": "...", "error": "...", "details": {...}}

``kind`` is one of :class:`ErrorKind`. ``error`` mirrors ``message`` for
clients written against the older ``{error, code}`` shape.
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    invalid_input = "invalid_input"
    not_found = "not_found"
    conflict = "conflict"
    internal = "internal"


_STATUS_CODES = {
    ErrorKind.invalid_input: 400,
    ErrorKind.not_found: 404,
    ErrorKind.conflict: 409,
    ErrorKind.internal: 500,
}


class ApiError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(
        self,
        kind: ErrorKind,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "error": self.message,
            "details": self.details,
        }


def invalid_input(code: str, message: str, **details: Any) -> ApiError:
    return ApiError(ErrorKind.invalid_input, code, message, details)


def not_found(resource: str, resource_id: int) -> ApiError:
    return ApiError(
        ErrorKind.not_found,
        "NOT_FOUND",
        f"{resource} not found",
        {"id": resource_id},
    )


def _render(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return _render(exc)


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _render(
        invalid_input("INVALID_REQUEST", "Request is malformed", errors=errors)
    )


async def _handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    logger.warning(
        "Integrity error on %s %s: %s", request.method, request.url.path, exc.orig
    )
    return _render(
        ApiError(ErrorKind.conflict, "CONFLICT", "Write conflicts with stored data")
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    # The exception text stays in the log; the client gets a redacted message.
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(
        ApiError(ErrorKind.internal, "INTERNAL_ERROR", "Internal server error")
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the envelope renderers on *app*."""
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(IntegrityError, _handle_integrity_error)
    app.add_exception_handler(Exception, _handle_unexpected)
