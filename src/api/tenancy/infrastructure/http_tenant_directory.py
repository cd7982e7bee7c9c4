"""Tenant directory backed by the tenant service HTTP API.

Looks a tenant up by its numeric client id, checks that it is active, and
hands back a TenantConnection for the tenant's database from the tenant
connection registry.
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError

from infrastructure.database.tenant_connections import (
    TenantConnection,
    TenantConnectionRegistry,
)
from infrastructure.settings import TenantDirectorySettings
from tenancy.infrastructure.models import TenantInfoEnvelope
from tenancy.infrastructure.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.ports.exceptions import TenantDirectoryUnavailableError

TENANT_LOOKUP_PATH = "/api/v1/tenants/client/{client_id}"


class HttpTenantDirectory:
    """TenantDirectory implementation calling the tenant service."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry: TenantConnectionRegistry,
        settings: TenantDirectorySettings,
        probe: TenantDirectoryProbe | None = None,
    ):
        """Initialize the directory.

        Args:
            client: HTTP client whose base URL points at the tenant service
            registry: Registry providing tenant database pools
            settings: Tenant service client settings
            probe: Optional domain probe for observability
        """
        self._client = client
        self._registry = registry
        self._active_status = settings.active_status.upper()
        self._probe = probe or DefaultTenantDirectoryProbe()

    @classmethod
    def from_settings(
        cls,
        settings: TenantDirectorySettings,
        registry: TenantConnectionRegistry,
    ) -> HttpTenantDirectory:
        """Build a directory with its own HTTP client from settings."""
        client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
        )
        return cls(client=client, registry=registry, settings=settings)

    async def resolve(self, tenant_id: int) -> TenantConnection | None:
        """Resolve a tenant to its connection handle.

        Args:
            tenant_id: The numeric tenant (client) identifier

        Returns:
            Connection handle for the tenant database, or None if the tenant
            is unknown or inactive

        Raises:
            TenantDirectoryUnavailableError: If the tenant service cannot be
                reached, answers with an error, or returns a malformed record
            DatabaseConnectionError: If the tenant database pool cannot be opened
        """
        self._probe.tenant_lookup_requested(tenant_id=tenant_id)

        try:
            response = await self._client.get(
                TENANT_LOOKUP_PATH.format(client_id=tenant_id),
                params={"includeSettings": "false"},
            )
        except httpx.HTTPError as e:
            self._probe.tenant_lookup_failed(tenant_id=tenant_id, reason=repr(e))
            raise TenantDirectoryUnavailableError() from e

        if response.status_code == httpx.codes.NOT_FOUND:
            self._probe.tenant_not_found(tenant_id=tenant_id)
            return None

        if response.is_error:
            self._probe.tenant_lookup_failed(
                tenant_id=tenant_id,
                reason=f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
            raise TenantDirectoryUnavailableError()

        try:
            envelope = TenantInfoEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._probe.tenant_lookup_failed(
                tenant_id=tenant_id,
                reason=f"Malformed tenant record: {e!r}",
                status_code=response.status_code,
            )
            raise TenantDirectoryUnavailableError() from e

        info = envelope.data
        if not envelope.success or info is None:
            self._probe.tenant_not_found(tenant_id=tenant_id)
            return None

        if info.status.upper() != self._active_status:
            self._probe.tenant_inactive(tenant_id=tenant_id, status=info.status)
            return None

        # Opening a new pool connects to the database; keep it off the loop.
        connection = await asyncio.to_thread(
            self._registry.connection_for, str(tenant_id), info.database_name
        )
        self._probe.tenant_found(tenant_id=tenant_id, database=info.database_name)
        return connection

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
