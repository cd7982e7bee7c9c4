"""Exceptions for the tenancy bounded context.

Resolution errors carry the HTTP status and the human-readable detail the
gate's middleware renders when rejecting a request. They are raised before
any tenant context is bound.
"""

from __future__ import annotations

from shared_kernel.middleware.tenant_context import (
    TenantContextAlreadyBoundError,
    TenantContextNotBoundError,
)

__all__ = [
    "MissingTenantIdentifierError",
    "TenantContextAlreadyBoundError",
    "TenantContextNotBoundError",
    "TenantDirectoryUnavailableError",
    "TenantResolutionError",
    "UnknownTenantError",
]


class TenantResolutionError(Exception):
    """Base exception for requests that could not be bound to a tenant."""

    status_code: int = 500
    detail: str = "Error setting up tenant context"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class MissingTenantIdentifierError(TenantResolutionError):
    """Raised when the request carries no tenant header or query parameter.

    The client must resupply the request with a tenant identifier.
    """

    status_code = 401
    detail = "Tenant context required"


class UnknownTenantError(TenantResolutionError):
    """Raised when the tenant is unknown, inactive, or not a valid identifier.

    The directory does not distinguish unknown from inactive tenants, so
    neither does this error.
    """

    status_code = 401

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"Tenant not found or inactive: {tenant_id}")


class TenantDirectoryUnavailableError(TenantResolutionError):
    """Raised when the tenant lookup fails for a transient reason.

    The gate does not retry; retry policy belongs to the caller or to the
    directory client.
    """

    status_code = 500
    detail = "Error setting up tenant context"
