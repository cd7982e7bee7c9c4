"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    Settings,
    TenancySettings,
    TenantDirectorySettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections
        assert settings.pool_max_connections <= 20
        assert settings.pool_enabled is True

    def test_pool_settings_from_fields(self):
        """Should accept pool settings via constructor."""
        settings = DatabaseSettings(
            pool_min_connections=5,
            pool_max_connections=15,
            pool_enabled=True,
        )
        assert settings.pool_min_connections == 5
        assert settings.pool_max_connections == 15

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        error_str = str(exc_info.value)
        assert "pool_max_connections" in error_str or "greater" in error_str.lower()

    def test_pool_min_must_be_positive(self):
        """Pool min connections must be >= 1."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        """Pool max should not exceed reasonable limit."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)

    def test_connect_timeout_bounds_pool_creation(self):
        """Opening a connection is bounded so an unreachable database fails fast."""
        assert DatabaseSettings().connect_timeout_seconds == 5
        with pytest.raises(ValidationError):
            DatabaseSettings(connect_timeout_seconds=0)

    def test_reads_environment(self, monkeypatch):
        """Should read WMS_DB_ prefixed variables."""
        monkeypatch.setenv("WMS_DB_HOST", "db.internal")
        monkeypatch.setenv("WMS_DB_DATABASE", "wms_central")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.database == "wms_central"


class TestTenantDirectorySettings:
    """Tests for tenant service client settings."""

    def test_defaults(self):
        """Should point at a local tenant service by default."""
        settings = TenantDirectorySettings()
        assert settings.base_url == "http://localhost:6010"
        assert settings.timeout_seconds == 5.0
        assert settings.active_status == "ACTIVE"

    def test_reads_environment(self, monkeypatch):
        """Should read WMS_TENANT_SERVICE_ prefixed variables."""
        monkeypatch.setenv("WMS_TENANT_SERVICE_BASE_URL", "http://tenants:8080")
        monkeypatch.setenv("WMS_TENANT_SERVICE_TIMEOUT_SECONDS", "1.5")

        settings = TenantDirectorySettings()

        assert settings.base_url == "http://tenants:8080"
        assert settings.timeout_seconds == 1.5

    def test_timeout_must_be_positive(self):
        """A zero timeout is rejected."""
        with pytest.raises(ValidationError):
            TenantDirectorySettings(timeout_seconds=0)


class TestTenancySettings:
    """Tests for tenant resolution settings."""

    def test_default_extra_prefixes_cover_api_docs(self):
        """FastAPI's docs routes are exempt by default."""
        settings = TenancySettings()
        assert settings.extra_exempt_path_prefixes == [
            "/docs",
            "/redoc",
            "/openapi.json",
        ]

    def test_reads_json_list_from_environment(self, monkeypatch):
        """Prefixes are given as a JSON list."""
        monkeypatch.setenv("WMS_TENANCY_EXTRA_EXEMPT_PATH_PREFIXES", '["/metrics"]')

        assert TenancySettings().extra_exempt_path_prefixes == ["/metrics"]

    @pytest.mark.parametrize("prefix", ["metrics", "/"])
    def test_rejects_relative_or_root_prefix(self, prefix):
        """Relative prefixes and the root would exempt too much or nothing."""
        with pytest.raises(ValidationError):
            TenancySettings(extra_exempt_path_prefixes=[prefix])


class TestSettings:
    """Tests for application settings."""

    def test_defaults(self):
        """Should have application defaults."""
        settings = Settings()
        assert settings.app_name == "WMS Order API"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_nested_settings(self):
        """Should expose the component settings."""
        settings = Settings()
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.tenant_directory, TenantDirectorySettings)
        assert isinstance(settings.tenancy, TenancySettings)
