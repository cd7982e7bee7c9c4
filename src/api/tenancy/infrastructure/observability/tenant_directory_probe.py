"""Domain probe for tenant directory lookups.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of looking tenants up in the tenant service.
Unknown and inactive tenants produce the same result for the gate but are
recorded as distinct events here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for tenant directory operations."""

    def tenant_lookup_requested(self, tenant_id: int) -> None:
        """Record that a tenant lookup was requested."""
        ...

    def tenant_found(self, tenant_id: int, database: str) -> None:
        """Record that an active tenant was found."""
        ...

    def tenant_not_found(self, tenant_id: int) -> None:
        """Record that the tenant service does not know the tenant."""
        ...

    def tenant_inactive(self, tenant_id: int, status: str) -> None:
        """Record that the tenant exists but is not active."""
        ...

    def tenant_lookup_failed(
        self, tenant_id: int, reason: str, status_code: int | None = None
    ) -> None:
        """Record that the tenant lookup failed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def _event_fields(self, **fields: Any) -> dict[str, Any]:
        """Merge event fields over the context metadata; event fields win."""
        return {**self._get_context_kwargs(), **fields}

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def tenant_lookup_requested(self, tenant_id: int) -> None:
        """Record that a tenant lookup was requested."""
        self._logger.debug(
            "tenant_lookup_requested",
            **self._event_fields(client_id=tenant_id),
        )

    def tenant_found(self, tenant_id: int, database: str) -> None:
        """Record that an active tenant was found."""
        self._logger.debug(
            "tenant_lookup_found",
            **self._event_fields(
                client_id=tenant_id,
                database=database,
            ),
        )

    def tenant_not_found(self, tenant_id: int) -> None:
        """Record that the tenant service does not know the tenant."""
        self._logger.warning(
            "tenant_lookup_not_found",
            **self._event_fields(client_id=tenant_id),
        )

    def tenant_inactive(self, tenant_id: int, status: str) -> None:
        """Record that the tenant exists but is not active."""
        self._logger.warning(
            "tenant_lookup_inactive",
            **self._event_fields(
                client_id=tenant_id,
                status=status,
            ),
        )

    def tenant_lookup_failed(
        self, tenant_id: int, reason: str, status_code: int | None = None
    ) -> None:
        """Record that the tenant lookup failed."""
        self._logger.error(
            "tenant_lookup_failed",
            **self._event_fields(
                client_id=tenant_id,
                reason=reason,
                status_code=status_code,
            ),
        )
