# expedientes_api/middleware.py
from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable, Optional

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from expedientes_api.logging import get_logger

REQUEST_ID_HEADER = "X-Request-Id"

access_log = get_logger("expedientes_api.access")

ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Accepts inbound X-Request-Id (if present) or generates a UUIDv4.
    - Binds request_id, method and path into the structlog context so every
      log line written while serving the request carries them.
    - Writes one ``http_request`` access-log line per request.
    - Always echoes X-Request-Id on the response. Unhandled exceptions are
      rendered here by ``error_handler`` so the 500 carries it too.
    """

    def __init__(self, app: ASGIApp, error_handler: Optional[ErrorHandler] = None) -> None:
        super().__init__(app)
        self.error_handler = error_handler

    async def dispatch(self, request: Request, call_next):
        inbound = request.headers.get(REQUEST_ID_HEADER)
        request_id = (inbound.strip() if inbound else "") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            if self.error_handler is None:
                raise
            response = await self.error_handler(request, exc)

        access_log.info(
            "http_request",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


__all__ = ["RequestContextMiddleware", "REQUEST_ID_HEADER"]
