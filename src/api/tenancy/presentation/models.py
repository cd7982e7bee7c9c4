"""Pydantic models for tenancy API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shared_kernel.middleware.tenant_context import TenantContext


class CurrentTenantResponse(BaseModel):
    """Response model describing the tenant bound to the request."""

    tenant_id: str = Field(..., description="Tenant identifier from the request")
    database: str = Field(..., description="Tenant database serving the request")

    @classmethod
    def from_context(cls, context: TenantContext) -> CurrentTenantResponse:
        """Convert the bound tenant context to an API response.

        Args:
            context: The bound tenant context

        Returns:
            CurrentTenantResponse
        """
        return cls(
            tenant_id=context.tenant_id,
            database=context.connection.database_name,
        )
