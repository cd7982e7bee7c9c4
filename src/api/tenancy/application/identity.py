"""Tenant identity extraction from request metadata.

Headers are checked first, in order, case-insensitively. When none is
present the query parameters are checked in order. The first value found
wins and is trimmed. Absence is not an error: the gate decides how to
react.
"""

from __future__ import annotations

from collections.abc import Mapping

from tenancy.domain.value_objects import (
    ExtractedIdentifier,
    IdentifierSource,
    TenantId,
)

TENANT_HEADER_NAMES: tuple[str, ...] = (
    "X-Client-ID",
    "X-Tenant-ID",
    "X-Client-Id",
    "X-Tenant-Id",
)

TENANT_QUERY_PARAMS: tuple[str, ...] = (
    "tenantId",
    "clientId",
    "tenant_id",
    "client_id",
)


def _lowercase_headers(headers: Mapping[str, str]) -> dict[str, str]:
    # First occurrence wins for repeated headers.
    lowered: dict[str, str] = {}
    for name, value in headers.items():
        lowered.setdefault(name.lower(), value)
    return lowered


def extract_tenant_identifier(
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
) -> ExtractedIdentifier | None:
    """Derive a candidate tenant identifier from request metadata.

    Args:
        headers: Request headers. Any mapping is accepted; names are
            matched case-insensitively.
        query_params: Request query parameters, matched case-sensitively.

    Returns:
        The extracted identifier with its source, or None when the request
        carries no tenant header and no tenant query parameter.
    """
    lowered = _lowercase_headers(headers)
    for name in TENANT_HEADER_NAMES:
        value = lowered.get(name.lower())
        if value is not None:
            return ExtractedIdentifier(
                tenant_id=TenantId.from_string(value),
                source=IdentifierSource.HEADER,
                name=name,
            )

    for name in TENANT_QUERY_PARAMS:
        value = query_params.get(name)
        if value is not None:
            return ExtractedIdentifier(
                tenant_id=TenantId.from_string(value),
                source=IdentifierSource.QUERY,
                name=name,
            )

    return None
