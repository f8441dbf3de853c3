from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from research_assistant.core.errors import RequestTooLargeError
from research_assistant.core.logging import log_context

logger = logging.getLogger(__name__)


async def _exceeds_size_limit(request: Request, max_bytes: int) -> bool:
    """Check the declared length, then count the streamed bytes.

    Chunked uploads carry no Content-Length, so the body is read here and kept
    on the request for the route to parse.
    """
    if max_bytes <= 0:
        return False

    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > max_bytes:
                return True
        except ValueError:
            pass

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            return True

    request._body = bytes(body)
    return False


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    start = time.perf_counter()
    request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    request.state.request_id = request_id

    with log_context(request_id=request_id, method=request.method, path=request.url.path):
        if await _exceeds_size_limit(request, request.app.state.settings.max_request_bytes):
            # Exception handlers sit inside this middleware, so answer directly.
            exc = RequestTooLargeError("Request body too large.")
            logger.warning("%s", exc.detail, extra={"error_code": exc.code, "status_code": exc.status_code})
            response: Response = JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
        else:
            response = await call_next(request)

        response.headers["X-Request-Id"] = request_id
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.2fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
