from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from research_assistant.core.config import Settings, get_settings
from research_assistant.core.constants import SUMMARY_FAILED_MESSAGE, TEXT_REQUIRED_MESSAGE
from research_assistant.core.errors import AppError
from research_assistant.core.logging import log_context

logger = logging.getLogger(__name__)


def _app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    request.state.error_code = exc.code
    request.state.error_status_code = exc.status_code

    if exc.status_code < 500:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    # Log only server-side failures here. Client errors should be logged at the source.
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        logger.error(
            "%s",
            exc.detail,
            extra={
                "error_code": exc.code,
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )

    content: dict[str, Any] = {"error": exc.public_message}
    if _app_settings(request).is_development:
        content["details"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


async def handle_validation_error(request: Request, _exc: RequestValidationError) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    request.state.error_code = "invalid_request"
    request.state.error_status_code = 400
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        logger.warning("Invalid request", extra={"error_code": "invalid_request", "status_code": 400})
    # The only request body this service accepts is the summarize payload.
    return JSONResponse(status_code=400, content={"error": TEXT_REQUIRED_MESSAGE})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        logger.exception("Unhandled error", extra={"error_type": type(exc).__name__, "status_code": 500})

    content: dict[str, Any] = {"error": SUMMARY_FAILED_MESSAGE}
    if _app_settings(request).is_development:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)
