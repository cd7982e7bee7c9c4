"""Exempt path classification.

Operational and central endpoints (health checks, API docs, error views)
never require a tenant. They are classified before any extraction or
directory work so they stay reachable when the tenant directory is down.
"""

from __future__ import annotations

from collections.abc import Sequence

EXEMPT_PATH_PREFIXES: tuple[str, ...] = (
    "/actuator",
    "/health",
    "/swagger-ui",
    "/v3/api-docs",
    "/error",
)


def is_exempt_path(
    path: str,
    prefixes: Sequence[str] = EXEMPT_PATH_PREFIXES,
) -> bool:
    """Return True if ``path`` starts with any exempt prefix."""
    return any(path.startswith(prefix) for prefix in prefixes)
