"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain exceptions to
HTTP responses by error_code so "not found" and "backend down" stay distinct.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderlookup.core.config import get_settings
from orderlookup.domain.exceptions import OrderLookupException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RECORD_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "GATEWAY_UNAVAILABLE": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: OrderLookupException) -> int:
    """HTTP status for a domain exception (400 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
) -> JSONResponse:
    """JSON error body shared by every handler: error, message, details, request_id."""
    content: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=content)


def _order_lookup_exception_handler(
    request: Request, exc: OrderLookupException
) -> JSONResponse:
    """Map the exception's error_code to a status; body from to_dict()."""
    status = status_for(exc)
    if status >= 500:
        logger.warning("%s: %s", exc.error_code, exc.message)
    body = exc.to_dict()
    return _error_response(request, status, body["error"], body["message"], body["details"])


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        request, 422, "VALIDATION_ERROR", "Request validation failed", exc.errors()
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(request, exc.status_code, "HTTP_ERROR", exc.detail)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; the exception text is exposed only when debug is on."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(request, 500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the handlers above on app (domain, validation, HTTP, fallback 500)."""
    app.add_exception_handler(OrderLookupException, _order_lookup_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
