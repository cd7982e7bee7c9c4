"""Unit tests for the HTTP tenant directory.

The tenant service is replaced by ``httpx.MockTransport`` and the
connection registry by a MagicMock.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest

from infrastructure.settings import TenantDirectorySettings
from tenancy.infrastructure.http_tenant_directory import HttpTenantDirectory
from tenancy.infrastructure.observability import TenantDirectoryProbe
from tenancy.ports.directory import TenantDirectory
from tenancy.ports.exceptions import TenantDirectoryUnavailableError

BASE_URL = "http://tenant-service.test"


def tenant_record(status: str = "ACTIVE", **overrides) -> dict:
    """Build a tenant service response body."""
    data = {
        "clientId": 42,
        "tenantName": "Acme Fulfilment",
        "status": status,
        "databaseName": "tenant_acme",
        "connectionHealth": "HEALTHY",
    }
    data.update(overrides)
    return {"success": True, "data": data}


@pytest.fixture
def settings() -> TenantDirectorySettings:
    """Tenant service client settings."""
    return TenantDirectorySettings(base_url=BASE_URL)


@pytest.fixture
def registry() -> MagicMock:
    """Connection registry returning a sentinel handle."""
    registry = MagicMock()
    registry.connection_for.return_value = MagicMock(name="tenant_connection")
    return registry


@pytest.fixture
def probe() -> MagicMock:
    """Mock directory probe."""
    return MagicMock(spec=TenantDirectoryProbe)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests received by the mock tenant service."""
    return []


@pytest.fixture
def make_directory(
    settings: TenantDirectorySettings,
    registry: MagicMock,
    probe: MagicMock,
    requests_seen: list[httpx.Request],
) -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpTenantDirectory]:
    """Build a directory whose tenant service is the given handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> HttpTenantDirectory:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(
            base_url=BASE_URL, transport=httpx.MockTransport(recording_handler)
        )
        return HttpTenantDirectory(
            client=client, registry=registry, settings=settings, probe=probe
        )

    return _make


class TestResolve:
    """Tests for HttpTenantDirectory.resolve."""

    def test_satisfies_port(self, make_directory) -> None:
        """The HTTP directory implements the TenantDirectory port."""
        directory = make_directory(lambda request: httpx.Response(404))

        assert isinstance(directory, TenantDirectory)

    @pytest.mark.asyncio
    async def test_active_tenant_resolves_to_connection(
        self,
        make_directory,
        registry: MagicMock,
        probe: MagicMock,
        requests_seen: list[httpx.Request],
    ) -> None:
        """An active tenant yields the registry's handle for its database."""
        directory = make_directory(
            lambda request: httpx.Response(200, json=tenant_record())
        )

        connection = await directory.resolve(42)

        assert connection is registry.connection_for.return_value
        registry.connection_for.assert_called_once_with("42", "tenant_acme")
        probe.tenant_found.assert_called_once_with(tenant_id=42, database="tenant_acme")

        (request,) = requests_seen
        assert request.method == "GET"
        assert request.url.path == "/api/v1/tenants/client/42"
        assert request.url.params["includeSettings"] == "false"

    @pytest.mark.asyncio
    async def test_status_comparison_ignores_case(
        self, make_directory, registry: MagicMock
    ) -> None:
        """A lowercase active status still counts as active."""
        directory = make_directory(
            lambda request: httpx.Response(200, json=tenant_record(status="active"))
        )

        assert await directory.resolve(42) is not None

    @pytest.mark.asyncio
    async def test_not_found_returns_none(
        self, make_directory, registry: MagicMock, probe: MagicMock
    ) -> None:
        """A 404 means the tenant is unknown."""
        directory = make_directory(lambda request: httpx.Response(404))

        assert await directory.resolve(42) is None
        registry.connection_for.assert_not_called()
        probe.tenant_not_found.assert_called_once_with(tenant_id=42)

    @pytest.mark.asyncio
    async def test_inactive_tenant_returns_none(
        self, make_directory, registry: MagicMock, probe: MagicMock
    ) -> None:
        """Suspended tenants are not resolved."""
        directory = make_directory(
            lambda request: httpx.Response(200, json=tenant_record(status="SUSPENDED"))
        )

        assert await directory.resolve(42) is None
        registry.connection_for.assert_not_called()
        probe.tenant_inactive.assert_called_once_with(tenant_id=42, status="SUSPENDED")

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_returns_none(
        self, make_directory, probe: MagicMock
    ) -> None:
        """An envelope without data means the tenant is unknown."""
        directory = make_directory(
            lambda request: httpx.Response(
                200, json={"success": False, "message": "No such client"}
            )
        )

        assert await directory.resolve(42) is None
        probe.tenant_not_found.assert_called_once_with(tenant_id=42)

    @pytest.mark.asyncio
    async def test_server_error_raises_unavailable(
        self, make_directory, probe: MagicMock
    ) -> None:
        """A 5xx from the tenant service is a lookup failure."""
        directory = make_directory(lambda request: httpx.Response(503))

        with pytest.raises(TenantDirectoryUnavailableError):
            await directory.resolve(42)

        probe.tenant_lookup_failed.assert_called_once_with(
            tenant_id=42, reason="HTTP 503", status_code=503
        )

    @pytest.mark.asyncio
    async def test_network_error_raises_unavailable(
        self, make_directory, probe: MagicMock
    ) -> None:
        """Transport failures are lookup failures carrying their cause."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        directory = make_directory(refuse)

        with pytest.raises(TenantDirectoryUnavailableError) as exc_info:
            await directory.resolve(42)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        probe.tenant_lookup_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_malformed_body_raises_unavailable(self, make_directory) -> None:
        """Bodies that are not JSON are lookup failures."""
        directory = make_directory(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(TenantDirectoryUnavailableError):
            await directory.resolve(42)

    @pytest.mark.asyncio
    async def test_record_without_database_raises_unavailable(
        self, make_directory, registry: MagicMock
    ) -> None:
        """A tenant record missing its database is a lookup failure."""
        directory = make_directory(
            lambda request: httpx.Response(200, json=tenant_record(databaseName=""))
        )

        with pytest.raises(TenantDirectoryUnavailableError):
            await directory.resolve(42)

        registry.connection_for.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_active_status(
        self, registry: MagicMock, probe: MagicMock
    ) -> None:
        """The active status is taken from settings."""
        client = httpx.AsyncClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json=tenant_record(status="LIVE"))
            ),
        )
        directory = HttpTenantDirectory(
            client=client,
            registry=registry,
            settings=TenantDirectorySettings(base_url=BASE_URL, active_status="live"),
            probe=probe,
        )

        assert await directory.resolve(42) is not None


class TestLifecycle:
    """Tests for client construction and shutdown."""

    @pytest.mark.asyncio
    async def test_from_settings_uses_base_url_and_timeout(
        self, registry: MagicMock
    ) -> None:
        """from_settings builds a client pointed at the tenant service."""
        settings = TenantDirectorySettings(base_url=BASE_URL, timeout_seconds=2.5)

        directory = HttpTenantDirectory.from_settings(settings, registry=registry)
        try:
            assert str(directory._client.base_url) == f"{BASE_URL}/"
            assert directory._client.timeout.read == 2.5
        finally:
            await directory.aclose()

        assert directory._client.is_closed
