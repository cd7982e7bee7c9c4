"""Pydantic models for tenant service responses.

The tenant service answers ``GET /api/v1/tenants/client/{clientId}`` with
an envelope ``{"success": ..., "data": {...}}`` using camelCase keys.
Unknown fields are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TenantInfo(BaseModel):
    """Tenant record returned by the tenant service."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    client_id: int = Field(..., description="Numeric tenant (client) identifier")
    tenant_name: str = Field(..., description="Display name of the tenant")
    status: str = Field(..., description="Lifecycle status, e.g. ACTIVE")
    database_name: str = Field(
        ..., description="Name of the tenant's database", min_length=1
    )
    connection_health: str | None = Field(
        default=None, description="Last known health of the tenant database"
    )


class TenantInfoEnvelope(BaseModel):
    """Response envelope wrapping a tenant record."""

    model_config = ConfigDict(extra="ignore")

    success: bool = Field(default=True, description="Whether the lookup succeeded")
    message: str | None = Field(default=None, description="Optional status message")
    data: TenantInfo | None = Field(default=None, description="The tenant record")
