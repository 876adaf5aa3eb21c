"""Exception handlers that render every failure as the error envelope."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sample_backend.core.exceptions import AppError
from sample_backend.schemas import ErrorDetail, error_response

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds to validation errors
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def _envelope(
    status_code: int,
    message: str,
    errors: Optional[list[ErrorDetail]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = error_response(message, errors).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_name(loc: tuple[Any, ...]) -> Optional[str]:
    parts = [str(part) for part in loc if part not in _LOCATION_ROOTS]
    return ".".join(parts) or None


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message
        )
    field = exc.details.get("field")
    errors = [ErrorDetail(field=field, message=exc.message)] if field else None
    return _envelope(exc.status_code, exc.message, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        ErrorDetail(field=_field_name(tuple(err.get("loc", ()))), message=err.get("msg", "invalid"))
        for err in exc.errors()
    ]
    return _envelope(422, "Validation failed", errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    message = "Internal server error"
    if request.app.state.settings.debug:
        message = f"{message}: {exc}"
    return _envelope(500, message)


async def catch_unhandled_errors(request: Request, call_next):
    """Render unexpected errors inside the middleware stack so CORS headers still apply."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


def install_error_handlers(app: FastAPI) -> None:
    """Register all handlers on ``app``.

    Call before adding ``CORSMiddleware``: middleware added later wraps
    the error middleware, so 500 responses carry the CORS headers too.
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
