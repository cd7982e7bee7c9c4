"""Request-scoped tenant context.

This module holds the resolved tenant context for the request currently
being served. The context lives in a ``ContextVar``: every ASGI request
runs in its own task with its own copy of the context, and sync endpoints
executed in the threadpool receive a copy of the request's context. A
worker reused for a later request therefore starts unbound.

The resolution logic (header extraction, directory lookup) lives in the
tenancy bounded context. This module only stores and exposes the result.

Usage:
    context = RequestTenantContext()
    tenant = context.current()
    if tenant is not None:
        with tenant.connection.connection() as conn:
            ...
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

import structlog


class TenantContextAlreadyBoundError(RuntimeError):
    """Raised when binding a tenant over an already-bound request context.

    Indicates a protocol violation in the request pipeline (the gate was
    entered twice for the same request). It is never user-facing.
    """

    pass


class TenantContextNotBoundError(RuntimeError):
    """Raised when tenant-scoped code runs without a bound tenant context."""

    pass


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The tenant identifier as received on the wire (trimmed).
        connection: Tenant-scoped connection handle obtained from the
            tenant directory. Owned by the directory, never constructed here.
    """

    tenant_id: str
    connection: Any


_current_tenant_context: ContextVar[TenantContext | None] = ContextVar(
    "current_tenant_context", default=None
)


class RequestTenantContext:
    """Ambient accessor for the tenant bound to the current request.

    Instances are stateless views over the module-level context variable,
    so any number of them can be created and injected.
    """

    def bind(self, tenant_id: str, connection: Any) -> TenantContext:
        """Bind a tenant to the current request.

        Args:
            tenant_id: The resolved tenant identifier.
            connection: The tenant-scoped connection handle.

        Returns:
            The bound TenantContext.

        Raises:
            TenantContextAlreadyBoundError: If a tenant is already bound.
        """
        existing = _current_tenant_context.get()
        if existing is not None:
            raise TenantContextAlreadyBoundError(
                f"Tenant context already bound to tenant {existing.tenant_id}; "
                f"refusing to rebind to {tenant_id}"
            )

        context = TenantContext(tenant_id=tenant_id, connection=connection)
        _current_tenant_context.set(context)
        structlog.contextvars.bind_contextvars(tenant_id=tenant_id)
        return context

    def current(self) -> TenantContext | None:
        """Return the bound tenant context, or None when unbound."""
        return _current_tenant_context.get()

    def require(self) -> TenantContext:
        """Return the bound tenant context.

        Raises:
            TenantContextNotBoundError: If no tenant is bound.
        """
        context = _current_tenant_context.get()
        if context is None:
            raise TenantContextNotBoundError(
                "No tenant bound to the current request. Tenant-scoped "
                "resources are only available behind the tenant resolution gate."
            )
        return context

    def clear(self) -> None:
        """Clear the bound tenant. Safe to call when nothing is bound."""
        _current_tenant_context.set(None)
        structlog.contextvars.unbind_contextvars("tenant_id")


def get_current_tenant_id() -> str | None:
    """Return the identifier of the tenant bound to the current request."""
    context = _current_tenant_context.get()
    return context.tenant_id if context is not None else None
