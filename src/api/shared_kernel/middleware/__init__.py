"""Shared middleware for cross-cutting concerns.

This module contains the request-scoped tenant context shared across
bounded contexts. The tenancy context resolves and binds it; any
downstream code may read it for the duration of a request.
"""

from shared_kernel.middleware.tenant_context import (
    RequestTenantContext,
    TenantContext,
    TenantContextAlreadyBoundError,
    TenantContextNotBoundError,
    get_current_tenant_id,
)

__all__ = [
    "RequestTenantContext",
    "TenantContext",
    "TenantContextAlreadyBoundError",
    "TenantContextNotBoundError",
    "get_current_tenant_id",
]
