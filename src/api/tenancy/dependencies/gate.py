"""Tenant resolution gate wiring.

Builds the application-scoped tenant directory and resolution gate from
settings. Both are created on first use.
"""

from __future__ import annotations

from functools import lru_cache

from infrastructure.dependencies import get_tenant_connection_registry
from infrastructure.settings import (
    get_tenancy_settings,
    get_tenant_directory_settings,
)
from tenancy.application.gate import TenantResolutionGate
from tenancy.application.paths import EXEMPT_PATH_PREFIXES
from tenancy.infrastructure.http_tenant_directory import HttpTenantDirectory


@lru_cache
def get_tenant_directory() -> HttpTenantDirectory:
    """Get application-scoped tenant directory (singleton).

    Returns:
        HttpTenantDirectory calling the configured tenant service.
    """
    return HttpTenantDirectory.from_settings(
        settings=get_tenant_directory_settings(),
        registry=get_tenant_connection_registry(),
    )


@lru_cache
def get_tenant_resolution_gate() -> TenantResolutionGate:
    """Get application-scoped tenant resolution gate (singleton).

    The gate exempts the built-in operational prefixes followed by any
    configured extra prefixes.
    """
    tenancy_settings = get_tenancy_settings()
    return TenantResolutionGate(
        directory=get_tenant_directory(),
        exempt_path_prefixes=(
            *EXEMPT_PATH_PREFIXES,
            *tenancy_settings.extra_exempt_path_prefixes,
        ),
    )


async def close_tenant_directory() -> None:
    """Close the tenant directory's HTTP client, if it was created."""
    if get_tenant_directory.cache_info().currsize:
        await get_tenant_directory().aclose()
        get_tenant_directory.cache_clear()
        get_tenant_resolution_gate.cache_clear()
