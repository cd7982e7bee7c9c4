"""Domain probe for tenant resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the tenant resolution gate: exempt paths,
identifier extraction, directory outcomes, and context binding/release.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolutionProbe(Protocol):
    """Domain probe for tenant resolution operations."""

    def exempt_path_skipped(self, path: str) -> None:
        """Record that a request path was exempt from tenant resolution."""
        ...

    def tenant_identifier_missing(self, path: str) -> None:
        """Record that no tenant header or query parameter was present."""
        ...

    def tenant_identifier_extracted(
        self,
        tenant_id: str,
        source: str,
        name: str,
    ) -> None:
        """Record that a tenant identifier was extracted from the request."""
        ...

    def invalid_tenant_identifier(self, raw_value: str) -> None:
        """Record that the tenant identifier is not a positive integer."""
        ...

    def tenant_not_found_or_inactive(self, tenant_id: str) -> None:
        """Record that the directory reported the tenant unknown or inactive."""
        ...

    def tenant_resolution_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that the directory lookup failed unexpectedly."""
        ...

    def tenant_context_bound(self, tenant_id: str) -> None:
        """Record that the tenant context was bound to the request."""
        ...

    def tenant_context_cleared(self, tenant_id: str) -> None:
        """Record that the tenant context was released."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolutionProbe:
    """Default implementation of TenantResolutionProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolutionProbe(logger=self._logger, context=context)

    def exempt_path_skipped(self, path: str) -> None:
        """Record that a request path was exempt from tenant resolution."""
        self._logger.debug(
            "tenant_resolution_exempt_path",
            **self._event_fields(path=path),
        )

    def tenant_identifier_missing(self, path: str) -> None:
        """Record that no tenant header or query parameter was present."""
        self._logger.error(
            "tenant_identifier_missing",
            **self._event_fields(
                path=path,
                message="Tenant context required but not found",
            ),
        )

    def tenant_identifier_extracted(
        self,
        tenant_id: str,
        source: str,
        name: str,
    ) -> None:
        """Record that a tenant identifier was extracted from the request."""
        self._logger.debug(
            "tenant_identifier_extracted",
            **self._event_fields(
                tenant_id=tenant_id,
                source=source,
                name=name,
            ),
        )

    def invalid_tenant_identifier(self, raw_value: str) -> None:
        """Record that the tenant identifier is not a positive integer."""
        self._logger.warning(
            "tenant_identifier_invalid",
            **self._event_fields(raw_value=raw_value),
        )

    def tenant_not_found_or_inactive(self, tenant_id: str) -> None:
        """Record that the directory reported the tenant unknown or inactive."""
        self._logger.error(
            "tenant_not_found_or_inactive",
            **self._event_fields(tenant_id=tenant_id),
        )

    def tenant_resolution_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that the directory lookup failed unexpectedly."""
        self._logger.error(
            "tenant_resolution_failed",
            **self._event_fields(
                tenant_id=tenant_id,
                error=str(error),
                error_type=type(error).__name__,
            ),
        )

    def tenant_context_bound(self, tenant_id: str) -> None:
        """Record that the tenant context was bound to the request."""
        self._logger.debug(
            "tenant_context_bound",
            **self._event_fields(tenant_id=tenant_id),
        )

    def tenant_context_cleared(self, tenant_id: str) -> None:
        """Record that the tenant context was released."""
        self._logger.debug(
            "tenant_context_cleared",
            **self._event_fields(tenant_id=tenant_id),
        )
