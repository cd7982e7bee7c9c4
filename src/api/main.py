"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from psycopg2.extensions import connection as PsycopgConnection

from infrastructure.dependencies import close_connection_pools
from infrastructure.logging import configure_logging
from infrastructure.observability import RequestLoggingMiddleware
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tenancy.dependencies.gate import (
    close_tenant_directory,
    get_tenant_resolution_gate,
)
from tenancy.dependencies.tenant_context import get_request_connection
from tenancy.presentation import TenantResolutionMiddleware
from tenancy.presentation import router as tenancy_router


@asynccontextmanager
async def wms_order_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Tenant directory HTTP client (created lazily, closed on shutdown)
    - Central and tenant connection pools (created lazily, closed on shutdown)
    """
    configure_logging(get_settings().log_level)

    yield

    await close_tenant_directory()
    close_connection_pools()


app = FastAPI(
    title=get_settings().app_name,
    description="Order fulfillment API with per-tenant database isolation",
    version=__version__,
    lifespan=wms_order_lifespan,
)

# Starlette runs the last-added middleware first: request ids are bound
# before the tenant gate runs, so its events carry them.
app.add_middleware(
    TenantResolutionMiddleware,
    gate_provider=get_tenant_resolution_gate,
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(tenancy_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
def health_db(
    conn: Annotated[PsycopgConnection, Depends(get_request_connection)],
) -> dict:
    """Check central database connection health.

    Served without a tenant, so the connection comes from the central pool.
    """
    try:
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return {"status": "ok", "connected": True}
    except Exception as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
