from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from plusgrid.api.router import api_router
from plusgrid.core.errors import APIError, make_error_payload
from plusgrid.core.log import configure_logging
from plusgrid.core.settings import get_settings


logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the standard error envelope, echoing X-Trace-Id."""

    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        headers = {**(headers or {}), "X-Trace-Id": trace_id}
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=make_error_payload(
            code=code, message=message, trace_id=trace_id, details=details
        ),
    )


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def _api_error_handler(request: Request, exc: APIError):
        logger.debug("Request rejected: %s (%s)", exc.code, exc.message)
        return _error_response(
            request,
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            request,
            status_code=422,
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details=exc.errors(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(
            request,
            status_code=exc.status_code,
            code="HTTP_ERROR",
            message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception):
        trace_id = getattr(request.state, "trace_id", None)
        method = request.method
        path = request.url.path
        logger.error(
            "Unhandled exception (trace_id=%s method=%s path=%s)",
            trace_id,
            method,
            path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        # No query string or body in the header.
        return _error_response(
            request,
            status_code=500,
            code="INTERNAL_ERROR",
            message="Internal error",
            headers={"X-Error-Path": f"{method} {path}"},
        )


def create_app() -> FastAPI:
    # Load settings first so misconfig fails fast.
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="plusgrid API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_allow_origin],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Trace-Id"],
    )

    @app.middleware("http")
    async def _trace_id_middleware(request: Request, call_next):
        trace_id = request.headers.get("X-Trace-Id") or str(uuid.uuid4())
        request.state.trace_id = trace_id
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        return response

    _install_error_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
