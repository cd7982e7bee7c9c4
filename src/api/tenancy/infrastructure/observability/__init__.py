"""Observability for tenancy infrastructure adapters."""

from tenancy.infrastructure.observability.tenant_directory_probe import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)

__all__ = [
    "DefaultTenantDirectoryProbe",
    "TenantDirectoryProbe",
]
