"""
Error handling for the HTTP API.

Services raise FinFlowError subclasses; the handlers here turn them into
`{"error": "<message>"}` responses. The status code comes from the
error's kind, never from its text.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finflow.core.errors import ErrorKind, FinFlowError

logger = logging.getLogger(__name__)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INVALID_JSON = "Invalid JSON format in request body"


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND[kind]


# =============================================================================
# Response helpers
# =============================================================================


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def success(message: str) -> dict[str, str]:
    """Body for create/update/delete responses."""
    return {"message": message}


# =============================================================================
# Exception handlers
# =============================================================================


async def finflow_exception_handler(request: Request, exc: FinFlowError) -> JSONResponse:
    status_code = status_for(exc.kind)
    headers = None
    if exc.kind == ErrorKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.kind == ErrorKind.INTERNAL:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return error_response(status_code, exc.message, headers)


def validation_message(errors: list[dict[str, Any]]) -> str:
    """Reduce pydantic's error list to a single client-facing message."""
    if not errors:
        return INVALID_JSON

    error = errors[0]
    loc = tuple(error.get("loc", ()))

    # Messages raised by our own validators
    ctx_error = (error.get("ctx") or {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)

    # Undecodable JSON, missing body, or a body that is not an object
    if error.get("type") == "json_invalid" or loc in ((), ("body",)):
        return INVALID_JSON

    field = ".".join(str(part) for part in loc if part != "body")
    message = error.get("msg", "Invalid request")
    return f"{field}: {message}" if field else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same error shape."""
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, validation_message(list(exc.errors())))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FinFlowError, finflow_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
