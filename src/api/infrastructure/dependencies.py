"""Shared infrastructure dependencies.

Provides ONLY raw database infrastructure resources (connection pools).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.database.connection_pool import ConnectionPool
from infrastructure.database.tenant_connections import (
    TenantAwareConnectionProvider,
    TenantConnectionRegistry,
)
from infrastructure.settings import get_database_settings


@lru_cache
def get_central_connection_pool() -> ConnectionPool:
    """Get application-scoped pool for the central database (singleton).

    The pool is thread-safe and shared across all requests.

    Returns:
        ConnectionPool instance for the central database.
    """
    settings = get_database_settings()
    return ConnectionPool(settings)


@lru_cache
def get_tenant_connection_registry() -> TenantConnectionRegistry:
    """Get application-scoped registry of tenant database pools (singleton).

    Returns:
        TenantConnectionRegistry sharing server settings with the central pool.
    """
    return TenantConnectionRegistry(get_database_settings())


def get_tenant_aware_connection_provider() -> TenantAwareConnectionProvider:
    """Get a provider lending connections for the current request's tenant.

    Returns:
        TenantAwareConnectionProvider falling back to the central pool.
    """
    return TenantAwareConnectionProvider(get_central_connection_pool())


def close_connection_pools() -> None:
    """Close the central pool and every tenant pool, if they were created."""
    if get_tenant_connection_registry.cache_info().currsize:
        get_tenant_connection_registry().close_all()
        get_tenant_connection_registry.cache_clear()
    if get_central_connection_pool.cache_info().currsize:
        get_central_connection_pool().close_all()
        get_central_connection_pool.cache_clear()
