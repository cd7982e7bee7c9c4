"""ASGI middleware installing the tenant resolution gate.

Every HTTP request passes through the gate before reaching the
application. Rejections are rendered here as ``{"detail": ...}`` JSON with
the status carried by the resolution error. The gate's exit phase runs in
a ``finally`` block, so the request tenant context is released after
rejections, downstream errors, and cancellation alike.

This is a pure ASGI middleware rather than a ``BaseHTTPMiddleware``: the
downstream application runs in the same task and context, so what the gate
binds is what the endpoints see.
"""

from __future__ import annotations

from collections.abc import Callable

from starlette.datastructures import Headers, QueryParams
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from tenancy.application.gate import TenantResolutionGate
from tenancy.ports.exceptions import TenantResolutionError


class TenantResolutionMiddleware:
    """Binds each HTTP request to its tenant, or rejects it."""

    def __init__(
        self,
        app: ASGIApp,
        gate_provider: Callable[[], TenantResolutionGate],
    ):
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap
            gate_provider: Returns the gate to use; called per request so the
                gate can be built lazily from settings
        """
        self.app = app
        self._gate_provider = gate_provider

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        gate = self._gate_provider()
        try:
            try:
                await gate.enter(
                    path=scope["path"],
                    headers=Headers(scope=scope),
                    query_params=QueryParams(scope.get("query_string", b"")),
                )
            except TenantResolutionError as exc:
                response = JSONResponse(
                    {"detail": exc.detail}, status_code=exc.status_code
                )
                await response(scope, receive, send)
                return

            await self.app(scope, receive, send)
        finally:
            gate.exit()
