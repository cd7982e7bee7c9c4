"""Presentation layer for the tenancy bounded context."""

from tenancy.presentation.middleware import TenantResolutionMiddleware
from tenancy.presentation.routes import router

__all__ = [
    "TenantResolutionMiddleware",
    "router",
]
