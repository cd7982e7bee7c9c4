"""Tenant-scoped database connections.

Each tenant has its own database on the shared PostgreSQL server. The
registry keeps one connection pool per tenant database, created on first
use and reused by every later request for that tenant. A TenantConnection
is the handle the tenant directory hands to the resolution gate; request
code borrows connections through it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from infrastructure.database.connection_pool import ConnectionPool
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from shared_kernel.middleware.tenant_context import RequestTenantContext

if TYPE_CHECKING:
    from psycopg2.extensions import connection as PsycopgConnection

    from infrastructure.settings import DatabaseSettings


class TenantConnection:
    """Connection handle scoped to one tenant's database.

    The handle does not own a connection; it lends them from the tenant
    pool for the duration of a block.
    """

    def __init__(self, tenant_id: str, pool: ConnectionPool):
        self._tenant_id = tenant_id
        self._pool = pool

    @property
    def tenant_id(self) -> str:
        """Identifier of the tenant this handle belongs to."""
        return self._tenant_id

    @property
    def database_name(self) -> str:
        """Name of the tenant database."""
        return self._pool.database

    @contextmanager
    def connection(self) -> Iterator[PsycopgConnection]:
        """Borrow a connection to the tenant database."""
        with self._pool.connection() as conn:
            yield conn

    def __repr__(self) -> str:
        return (
            f"TenantConnection(tenant_id={self._tenant_id!r}, "
            f"database={self.database_name!r})"
        )


class TenantConnectionRegistry:
    """Caches one connection pool per tenant database.

    Pools are created lazily under a per-database lock: concurrent first
    requests for the same tenant share a single pool, while a tenant whose
    database is slow to answer never delays pool creation for another one.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
        pool_factory: Callable[[DatabaseSettings, str], ConnectionPool] | None = None,
    ):
        """Initialize the registry.

        Args:
            settings: Server, credentials and pool sizing shared by tenant pools
            probe: Optional observability probe
            pool_factory: Builds a pool for a database name; defaults to
                ConnectionPool
        """
        self._settings = settings
        self._probe = probe or DefaultConnectionProbe()
        self._pool_factory = pool_factory or (
            lambda s, database: ConnectionPool(s, database=database)
        )
        self._pools: dict[str, ConnectionPool] = {}
        self._creation_locks: dict[str, threading.Lock] = {}
        # Guards the two dicts only; never held while a pool opens.
        self._lock = threading.Lock()

    def _creation_lock(self, database: str) -> threading.Lock:
        with self._lock:
            return self._creation_locks.setdefault(database, threading.Lock())

    def pool_for(self, tenant_id: str, database: str) -> ConnectionPool:
        """Get or create the pool for a tenant database.

        Blocks while a new pool opens its initial connections; call it from
        a worker thread when running on the event loop. Only callers asking
        for the same database wait on each other.

        Raises:
            DatabaseConnectionError: If a new pool cannot be initialized.
        """
        pool = self._pools.get(database)
        if pool is not None:
            return pool

        with self._creation_lock(database):
            # Double-check after acquiring lock
            pool = self._pools.get(database)
            if pool is None:
                pool = self._pool_factory(self._settings, database)
                with self._lock:
                    self._pools[database] = pool
                self._probe.tenant_pool_created(tenant_id=tenant_id, database=database)
        return pool

    def connection_for(self, tenant_id: str, database: str) -> TenantConnection:
        """Build the connection handle for a tenant."""
        return TenantConnection(
            tenant_id=tenant_id, pool=self.pool_for(tenant_id, database)
        )

    def close_all(self) -> None:
        """Close every tenant pool."""
        with self._lock:
            pools = list(self._pools.values())
            self._pools.clear()
        for pool in pools:
            pool.close_all()


class TenantAwareConnectionProvider:
    """Lends connections for whichever tenant the current request is bound to.

    When no tenant is bound (operational endpoints, startup) connections
    come from the central pool and the fallback is recorded.
    """

    def __init__(
        self,
        central_pool: ConnectionPool,
        context: RequestTenantContext | None = None,
        probe: ConnectionProbe | None = None,
    ):
        self._central_pool = central_pool
        self._context = context or RequestTenantContext()
        self._probe = probe or DefaultConnectionProbe()

    @contextmanager
    def connection(self) -> Iterator[PsycopgConnection]:
        """Borrow a connection for the current request's database."""
        tenant = self._context.current()
        if tenant is not None:
            with tenant.connection.connection() as conn:
                yield conn
            return

        self._probe.central_connection_fallback()
        with self._central_pool.connection() as conn:
            yield conn
