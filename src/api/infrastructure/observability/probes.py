"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database connection observability.

    This probe captures domain-significant events related to the central
    and per-tenant connection pools without exposing logging details.
    """

    def pool_initialized(self, database: str, min_conn: int, max_conn: int) -> None:
        """Record that a connection pool was initialized."""
        ...

    def pool_initialization_failed(self, database: str, error: Exception) -> None:
        """Record that pool initialization failed."""
        ...

    def connection_acquired_from_pool(self, database: str) -> None:
        """Record that a connection was acquired from the pool."""
        ...

    def connection_returned_to_pool(self, database: str) -> None:
        """Record that a connection was returned to the pool."""
        ...

    def pool_exhausted(self, database: str) -> None:
        """Record that the connection pool was exhausted."""
        ...

    def connection_return_failed(self, database: str, error: Exception) -> None:
        """Record that returning connection to pool failed."""
        ...

    def pool_closed(self, database: str) -> None:
        """Record that the connection pool was closed."""
        ...

    def tenant_pool_created(self, tenant_id: str, database: str) -> None:
        """Record that a pool was created for a tenant database."""
        ...

    def central_connection_fallback(self) -> None:
        """Record that no tenant was bound and the central pool was used."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def pool_initialized(self, database: str, min_conn: int, max_conn: int) -> None:
        """Record that a connection pool was initialized."""
        self._logger.info(
            "connection_pool_initialized",
            **self._event_fields(
                database=database,
                min_connections=min_conn,
                max_connections=max_conn,
            ),
        )

    def pool_initialization_failed(self, database: str, error: Exception) -> None:
        """Record that pool initialization failed."""
        self._logger.error(
            "connection_pool_initialization_failed",
            **self._event_fields(
                database=database,
                error=str(error),
            ),
        )

    def connection_acquired_from_pool(self, database: str) -> None:
        """Record that a connection was acquired from the pool."""
        self._logger.debug(
            "connection_acquired_from_pool",
            **self._event_fields(database=database),
        )

    def connection_returned_to_pool(self, database: str) -> None:
        """Record that a connection was returned to the pool."""
        self._logger.debug(
            "connection_returned_to_pool",
            **self._event_fields(database=database),
        )

    def pool_exhausted(self, database: str) -> None:
        """Record that the connection pool was exhausted."""
        self._logger.warning(
            "connection_pool_exhausted",
            **self._event_fields(database=database),
        )

    def connection_return_failed(self, database: str, error: Exception) -> None:
        """Record that returning connection to pool failed."""
        self._logger.error(
            "connection_return_failed",
            **self._event_fields(
                database=database,
                error=str(error),
            ),
        )

    def pool_closed(self, database: str) -> None:
        """Record that the connection pool was closed."""
        self._logger.info(
            "connection_pool_closed",
            **self._event_fields(database=database),
        )

    def tenant_pool_created(self, tenant_id: str, database: str) -> None:
        """Record that a pool was created for a tenant database."""
        self._logger.info(
            "tenant_connection_pool_created",
            **self._event_fields(
                tenant_id=tenant_id,
                database=database,
            ),
        )

    def central_connection_fallback(self) -> None:
        """Record that no tenant was bound and the central pool was used."""
        self._logger.warning(
            "central_connection_fallback",
            **self._event_fields(
                message="No tenant connection bound, using central database. "
                "This should only happen for health checks and startup.",
            ),
        )
