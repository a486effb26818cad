"""Error taxonomy and the HTTP error envelope."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orientlink.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class OrientLinkError(RuntimeError):
    """Base class for failures raised by the orchestration flows."""


class ModelCallError(OrientLinkError):
    """Raised when the language-model endpoint cannot be reached or reports a failure."""


class MalformedModelResponse(OrientLinkError):
    """Raised when the model reply is not valid JSON or lacks a required key."""


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=error,
        message=message,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


def _validation_details(errors: list[dict[str, Any]]) -> dict[str, str]:
    details: dict[str, str] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part not in {"body", "query", "path"}]
        field = str(loc[-1]) if loc else "request"
        message = str(error.get("msg", "Invalid value"))
        details.setdefault(field, message.removeprefix("Value error, "))
    return details


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(list(exc.errors()))
    logger.warning("request.validation_failed details=%s", details)
    return _error_response(400, "Validation Failed", "Invalid request parameters", details)


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        reason = HTTPStatus(exc.status_code).phrase
    except ValueError:
        reason = "Error"
    logger.info("request.http_error status=%s detail=%s", exc.status_code, exc.detail)
    return _error_response(exc.status_code, reason, str(exc.detail), headers=exc.headers)


async def model_error_handler(_: Request, exc: OrientLinkError) -> JSONResponse:
    logger.error("request.model_failure type=%s message=%s", type(exc).__name__, exc)
    return _error_response(500, "Internal Server Error", str(exc))


async def unexpected_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unexpected_failure type=%s", type(exc).__name__, exc_info=exc)
    return _error_response(
        500,
        "Unexpected Error",
        "An unexpected error occurred. Please contact support.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto the uniform JSON error envelope."""

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(OrientLinkError, model_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
