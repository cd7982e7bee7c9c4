"""Ports (interfaces) for the tenancy bounded context.

Ports define the contract the tenant resolution gate requires from the
tenant directory, without specifying how tenants are stored or how
connections are pooled.
"""

from tenancy.ports.directory import TenantDirectory
from tenancy.ports.exceptions import (
    MissingTenantIdentifierError,
    TenantDirectoryUnavailableError,
    TenantResolutionError,
    UnknownTenantError,
)

__all__ = [
    "MissingTenantIdentifierError",
    "TenantDirectory",
    "TenantDirectoryUnavailableError",
    "TenantResolutionError",
    "UnknownTenantError",
]
