"""Tenant resolution gate.

Binds every non-exempt request to exactly one tenant's connection handle
before downstream code runs, or rejects it. The gate is a two-phase
protocol:

    enter  classify the path, extract the identifier, resolve it against
           the tenant directory and bind the request tenant context
    exit   clear the request tenant context

``exit`` must run on every path, including rejections, downstream errors
and cancellation. ``scope`` pairs both phases in a ``try/finally`` block.

State machine:
    START -> EXEMPT                                  allow, nothing bound
    START -> EXTRACTING -> MISSING_ID                401
    EXTRACTING -> RESOLVING -> UNKNOWN_TENANT        401
    RESOLVING -> BOUND -> DOWNSTREAM -> RELEASED     allow, context cleared
    RESOLVING -> FAULT                               500, nothing bound
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager

from shared_kernel.middleware.tenant_context import (
    RequestTenantContext,
    TenantContext,
)
from tenancy.application.identity import extract_tenant_identifier
from tenancy.application.observability import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)
from tenancy.application.paths import EXEMPT_PATH_PREFIXES, is_exempt_path
from tenancy.ports.directory import TenantDirectory
from tenancy.ports.exceptions import (
    MissingTenantIdentifierError,
    TenantDirectoryUnavailableError,
    UnknownTenantError,
)


class TenantResolutionGate:
    """Resolves the request tenant and binds it for downstream code."""

    def __init__(
        self,
        directory: TenantDirectory,
        context: RequestTenantContext | None = None,
        probe: TenantResolutionProbe | None = None,
        exempt_path_prefixes: Sequence[str] = EXEMPT_PATH_PREFIXES,
    ):
        """Initialize the gate.

        Args:
            directory: Tenant directory used to resolve connection handles
            context: Request tenant context the gate binds and clears
            probe: Optional domain probe for observability
            exempt_path_prefixes: Path prefixes that never require a tenant
        """
        self._directory = directory
        self._context = context or RequestTenantContext()
        self._probe = probe or DefaultTenantResolutionProbe()
        self._exempt_path_prefixes = tuple(exempt_path_prefixes)

    @property
    def exempt_path_prefixes(self) -> tuple[str, ...]:
        """Path prefixes served without tenant resolution."""
        return self._exempt_path_prefixes

    async def enter(
        self,
        path: str,
        headers: Mapping[str, str],
        query_params: Mapping[str, str],
    ) -> TenantContext | None:
        """Resolve and bind the tenant for a request.

        Args:
            path: The request path
            headers: The request headers
            query_params: The request query parameters

        Returns:
            The bound TenantContext, or None for exempt paths

        Raises:
            MissingTenantIdentifierError: No tenant header or query parameter
            UnknownTenantError: Identifier not numeric, or tenant unknown/inactive
            TenantDirectoryUnavailableError: The directory lookup failed
            TenantContextAlreadyBoundError: A tenant is already bound to this
                request (protocol violation)
        """
        if is_exempt_path(path, self._exempt_path_prefixes):
            self._probe.exempt_path_skipped(path=path)
            return None

        extracted = extract_tenant_identifier(headers, query_params)
        if extracted is None:
            self._probe.tenant_identifier_missing(path=path)
            raise MissingTenantIdentifierError()

        tenant_id = extracted.tenant_id
        self._probe.tenant_identifier_extracted(
            tenant_id=tenant_id.value,
            source=extracted.source.value,
            name=extracted.name,
        )

        # The directory defines what is acceptable; a malformed id is just
        # another tenant it does not know.
        try:
            numeric_id = tenant_id.as_int()
        except ValueError:
            self._probe.invalid_tenant_identifier(raw_value=tenant_id.value)
            raise UnknownTenantError(tenant_id.value)

        try:
            connection = await self._directory.resolve(numeric_id)
        except Exception as e:
            self._probe.tenant_resolution_failed(tenant_id=tenant_id.value, error=e)
            raise TenantDirectoryUnavailableError() from e

        if connection is None:
            self._probe.tenant_not_found_or_inactive(tenant_id=tenant_id.value)
            raise UnknownTenantError(tenant_id.value)

        bound = self._context.bind(tenant_id.value, connection)
        self._probe.tenant_context_bound(tenant_id=tenant_id.value)
        return bound

    def exit(self) -> None:
        """Release the request tenant context.

        Idempotent: clearing an unbound context does nothing.
        """
        bound = self._context.current()
        self._context.clear()
        if bound is not None:
            self._probe.tenant_context_cleared(tenant_id=bound.tenant_id)

    @asynccontextmanager
    async def scope(
        self,
        path: str,
        headers: Mapping[str, str],
        query_params: Mapping[str, str],
    ) -> AsyncIterator[TenantContext | None]:
        """Bind the request tenant for the duration of the block.

        The context is cleared when the block exits, whether it returns,
        raises, or is cancelled, and also when resolution itself fails.

        Yields:
            The bound TenantContext, or None for exempt paths
        """
        try:
            yield await self.enter(path, headers, query_params)
        finally:
            self.exit()
