"""Unit test fixtures with mocked dependencies."""

from unittest.mock import MagicMock

import pytest

from shared_kernel.middleware.tenant_context import RequestTenantContext


@pytest.fixture(autouse=True)
def unbound_tenant_context():
    """Ensure every test starts and ends without a bound tenant."""
    context = RequestTenantContext()
    context.clear()
    yield context
    context.clear()


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
        pool_enabled=False,
    )


@pytest.fixture
def mock_psycopg2_connection():
    """Provide a mocked psycopg2 connection."""
    conn = MagicMock()
    conn.closed = False

    cursor = MagicMock()
    cursor.fetchall.return_value = []
    cursor.fetchone.return_value = (1,)

    # Set up context manager
    cursor.__enter__ = MagicMock(return_value=cursor)
    cursor.__exit__ = MagicMock(return_value=False)
    conn.cursor.return_value = cursor

    return conn, cursor


@pytest.fixture
def mock_tenant_handle(mock_psycopg2_connection):
    """Provide a tenant connection handle lending a mocked connection."""
    from contextlib import contextmanager

    conn, _ = mock_psycopg2_connection
    handle = MagicMock()
    handle.database_name = "tenant_42"

    @contextmanager
    def _connection():
        yield conn

    handle.connection.side_effect = _connection
    return handle
