"""Connection pool for PostgreSQL.

This module provides connection pooling using psycopg2.pool.ThreadedConnectionPool.
One pool serves the central database; the tenant connection registry keeps
one more per tenant database.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import psycopg2
from psycopg2 import pool as psycopg2_pool

from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)

if TYPE_CHECKING:
    from psycopg2.extensions import connection as PsycopgConnection

    from infrastructure.settings import DatabaseSettings


class ConnectionPool:
    """Thread-safe connection pool for one PostgreSQL database.

    Wraps psycopg2.pool.ThreadedConnectionPool.

    Attributes:
        _settings: Database configuration settings
        _database: Name of the database this pool connects to
        _pool: The underlying ThreadedConnectionPool instance
        _probe: Observability probe for monitoring
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        database: str | None = None,
        probe: ConnectionProbe | None = None,
    ):
        """Initialize the connection pool.

        Args:
            settings: Database connection settings
            database: Database to connect to; defaults to the central
                database from settings
            probe: Optional observability probe
        """
        self._settings = settings
        self._database = database or settings.database
        self._probe = probe or DefaultConnectionProbe()
        self._pool: psycopg2_pool.ThreadedConnectionPool | None = None

        if settings.pool_enabled:
            self._initialize_pool()

    @property
    def database(self) -> str:
        """Name of the database served by this pool."""
        return self._database

    def _initialize_pool(self) -> None:
        """Initialize the ThreadedConnectionPool."""
        try:
            self._pool = psycopg2_pool.ThreadedConnectionPool(
                minconn=self._settings.pool_min_connections,
                maxconn=self._settings.pool_max_connections,
                host=self._settings.host,
                port=self._settings.port,
                dbname=self._database,
                user=self._settings.username,
                password=self._settings.password.get_secret_value(),
                connect_timeout=self._settings.connect_timeout_seconds,
            )
            self._probe.pool_initialized(
                database=self._database,
                min_conn=self._settings.pool_min_connections,
                max_conn=self._settings.pool_max_connections,
            )
        except psycopg2.Error as e:
            self._probe.pool_initialization_failed(database=self._database, error=e)
            raise DatabaseConnectionError(
                f"Failed to initialize connection pool for {self._database}: {e}"
            ) from e

    def get_connection(self) -> PsycopgConnection:
        """Get a connection from the pool.

        Returns:
            A psycopg2 connection.

        Raises:
            DatabaseConnectionError: If pool is not initialized or exhausted.
        """
        if self._pool is None:
            raise DatabaseConnectionError("Connection pool not initialized")

        try:
            conn = self._pool.getconn()
            self._probe.connection_acquired_from_pool(database=self._database)
            return conn
        except psycopg2_pool.PoolError as e:
            self._probe.pool_exhausted(database=self._database)
            raise DatabaseConnectionError(
                f"Pool exhausted, cannot get connection: {e}"
            ) from e

    def return_connection(self, conn: PsycopgConnection) -> None:
        """Return a connection to the pool.

        Args:
            conn: The connection to return.
        """
        if self._pool is None:
            return

        try:
            self._pool.putconn(conn)
            self._probe.connection_returned_to_pool(database=self._database)
        except Exception as e:
            self._probe.connection_return_failed(database=self._database, error=e)
            # Don't raise - connection will be discarded

    @contextmanager
    def connection(self) -> Iterator[PsycopgConnection]:
        """Borrow a connection for the duration of a block.

        The connection is returned to the pool however the block exits.
        """
        conn = self.get_connection()
        try:
            yield conn
        finally:
            self.return_connection(conn)

    def close_all(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._probe.pool_closed(database=self._database)
            self._pool = None
