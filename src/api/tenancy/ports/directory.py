"""Tenant directory protocol (port) for the tenancy bounded context.

The directory is an external collaborator: given a numeric tenant
identifier it hands back a ready-to-use, tenant-scoped connection handle.
The gate only requests and stores the handle; the directory owns it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TenantDirectory(Protocol):
    """Looks up tenants and provides their connection handles."""

    async def resolve(self, tenant_id: int) -> Any | None:
        """Resolve a tenant to its connection handle.

        Args:
            tenant_id: The numeric tenant (client) identifier

        Returns:
            The tenant-scoped connection handle, or None if the tenant does
            not exist or is inactive

        Raises:
            TenantDirectoryUnavailableError: If the lookup fails transiently.
                Implementations may also let other exceptions escape; the gate
                treats any exception as a resolution failure.
        """
        ...
