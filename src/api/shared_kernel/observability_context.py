"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that events emitted while resolving a
    tenant can be correlated with the request that triggered them.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        tenant_id: Tenant identifier (if resolved).
        path: Request path being served (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", path="/orders")
        probe = DefaultTenantResolutionProbe().with_context(context)
    """

    request_id: str | None = None
    tenant_id: str | None = None
    path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.path is not None:
            result["path"] = self.path
        result.update(self.extra)
        return result

    def with_tenant(self, tenant_id: str) -> ObservationContext:
        """Create a new context with the tenant identifier set."""
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=tenant_id,
            path=self.path,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=self.tenant_id,
            path=self.path,
            extra={**self.extra, **kwargs},
        )
