"""Tenant context FastAPI dependencies.

Expose the tenant bound by the resolution gate to route handlers.

Usage in FastAPI routes:
    @router.get("/example")
    def example(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
        conn: Annotated[PsycopgConnection, Depends(get_tenant_connection)],
    ):
        # tenant.tenant_id is the request's tenant; conn talks to its database
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from psycopg2.extensions import connection as PsycopgConnection

from infrastructure.database.tenant_connections import TenantAwareConnectionProvider
from infrastructure.dependencies import get_tenant_aware_connection_provider
from shared_kernel.middleware.tenant_context import (
    RequestTenantContext,
    TenantContext,
    TenantContextNotBoundError,
)


def get_request_tenant_context() -> RequestTenantContext:
    """Provide the request tenant context accessor."""
    return RequestTenantContext()


def get_tenant_context(
    context: Annotated[RequestTenantContext, Depends(get_request_tenant_context)],
) -> TenantContext:
    """Get the tenant bound to the current request.

    Args:
        context: Request tenant context accessor

    Returns:
        The bound TenantContext

    Raises:
        HTTPException 401: If the route is reached without a bound tenant,
            e.g. when it sits under an exempt path prefix.
    """
    try:
        return context.require()
    except TenantContextNotBoundError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Tenant context required",
        ) from e


def get_tenant_connection(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> Iterator[PsycopgConnection]:
    """Borrow a connection to the current tenant's database.

    The connection is returned to the tenant pool when the request's
    dependencies are torn down.
    """
    with tenant.connection.connection() as conn:
        yield conn


def get_request_connection(
    provider: Annotated[
        TenantAwareConnectionProvider, Depends(get_tenant_aware_connection_provider)
    ],
) -> Iterator[PsycopgConnection]:
    """Borrow a connection for the request, tenant-scoped when a tenant is bound.

    Falls back to the central database on exempt paths.
    """
    with provider.connection() as conn:
        yield conn
