"""HTTP routes for the tenancy bounded context."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.dependencies.tenant_context import get_tenant_context
from tenancy.presentation.models import CurrentTenantResponse

router = APIRouter(prefix="/api/v1", tags=["tenancy"])


@router.get("/tenant", response_model=CurrentTenantResponse)
async def get_current_tenant(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
) -> CurrentTenantResponse:
    """Describe the tenant the request was resolved to."""
    return CurrentTenantResponse.from_context(tenant)
