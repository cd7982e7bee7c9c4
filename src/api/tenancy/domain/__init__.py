"""Domain layer for the tenancy bounded context."""

from tenancy.domain.value_objects import (
    ExtractedIdentifier,
    IdentifierSource,
    TenantId,
)

__all__ = [
    "ExtractedIdentifier",
    "IdentifierSource",
    "TenantId",
]
