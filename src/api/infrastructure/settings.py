"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    The central database serves operational endpoints. Tenant databases
    live on the same server and reuse these credentials and pool sizes;
    only the database name differs per tenant.

    Environment variables:
        WMS_DB_HOST: Database host (default: localhost)
        WMS_DB_PORT: Database port (default: 5432)
        WMS_DB_DATABASE: Central database name (default: wms_order)
        WMS_DB_USERNAME: Database user (default: wms)
        WMS_DB_PASSWORD: Database password (required in production)
        WMS_DB_POOL_MIN_CONNECTIONS: Minimum connections per pool (default: 1)
        WMS_DB_POOL_MAX_CONNECTIONS: Maximum connections per pool (default: 10)
        WMS_DB_POOL_ENABLED: Enable connection pooling (default: true)
        WMS_DB_CONNECT_TIMEOUT_SECONDS: Timeout for opening a connection (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="WMS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="wms_order", description="Central database name")
    username: str = Field(default="wms", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=1,
        description="Minimum connections per pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections per pool",
        ge=1,
        le=100,
    )
    pool_enabled: bool = Field(default=True, description="Enable connection pooling")
    connect_timeout_seconds: int = Field(
        default=5,
        description="Seconds to wait when opening a database connection",
        ge=1,
        le=300,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenantDirectorySettings(BaseSettings):
    """Tenant service client settings.

    Environment variables:
        WMS_TENANT_SERVICE_BASE_URL: Tenant service URL (default: http://localhost:6010)
        WMS_TENANT_SERVICE_TIMEOUT_SECONDS: Lookup timeout (default: 5.0)
        WMS_TENANT_SERVICE_ACTIVE_STATUS: Status value of usable tenants (default: ACTIVE)
    """

    model_config = SettingsConfigDict(
        env_prefix="WMS_TENANT_SERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:6010",
        description="Base URL of the tenant service",
    )
    timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single tenant lookup",
        gt=0,
    )
    active_status: str = Field(
        default="ACTIVE",
        description="Tenant status that allows requests to be served",
    )


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        WMS_TENANCY_EXTRA_EXEMPT_PATH_PREFIXES: JSON list of additional path
            prefixes served without a tenant (default: FastAPI docs routes)
    """

    model_config = SettingsConfigDict(
        env_prefix="WMS_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    extra_exempt_path_prefixes: list[str] = Field(
        default_factory=lambda: ["/docs", "/redoc", "/openapi.json"],
        description="Path prefixes exempt from tenant resolution, appended "
        "to the built-in operational prefixes",
    )

    @model_validator(mode="after")
    def validate_prefixes(self) -> "TenancySettings":
        """Validate that every prefix is an absolute path."""
        for prefix in self.extra_exempt_path_prefixes:
            if not prefix.startswith("/") or prefix == "/":
                raise ValueError(
                    f"exempt path prefix must start with '/' and not be the root, "
                    f"got: {prefix!r}"
                )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="WMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="WMS Order API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenant_directory(self) -> TenantDirectorySettings:
        """Get tenant service client settings."""
        return get_tenant_directory_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenant resolution settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenant_directory_settings() -> TenantDirectorySettings:
    """Get cached tenant service client settings."""
    return TenantDirectorySettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenant resolution settings."""
    return TenancySettings()
