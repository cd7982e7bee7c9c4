"""Request logging middleware.

Attaches a request id to every HTTP request, binds it into the structlog
context for the duration of the request, echoes it back in the
``X-Request-ID`` response header and logs method/path/status/duration.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware:
    """Pure ASGI middleware so context variables reach the downstream app."""

    def __init__(
        self,
        app: ASGIApp,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        self.app = app
        self._logger = logger or structlog.get_logger()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        status_code = 500

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        start = time.perf_counter()
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                await self.app(scope, receive, send_with_request_id)
            finally:
                self._logger.info(
                    "http_request_completed",
                    method=scope["method"],
                    path=scope["path"],
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                )
