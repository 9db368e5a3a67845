from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


class AppError(Exception):
    """Domain failure that maps onto an error envelope and HTTP status."""

    code = "app_error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=ErrorDetail(code=self.code, message=self.message))


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class ValidationError(AppError):
    code = "invalid_request"
    default_message = "Invalid request"


class ConflictError(AppError):
    # Duplicates surface as a client error, not 409.
    code = "conflict"
    default_message = "Resource already exists"


class UnauthorizedError(AppError):
    code = "unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class InternalError(AppError):
    code = "internal_error"
    status_code = 500
    default_message = "Internal server error"


def _json(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message, exc_info=exc.__cause__)
    return _json(exc.status_code, exc.to_envelope())


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": _jsonable_errors(exc)},
        )
    )
    return _json(422, envelope)


def _jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    internal = InternalError()
    return _json(internal.status_code, internal.to_envelope())
