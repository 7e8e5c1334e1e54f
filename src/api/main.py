"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from iam.dependencies.authentication import get_access_gate
from iam.presentation import router as iam_router
from iam.presentation.middleware import AccessGateMiddleware
from infrastructure.database.dependencies import close_database_connections
from infrastructure.dependencies import get_change_feed
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from pipeline.presentation import router as pipeline_router
from recruiting.presentation import router as recruiting_router
from shared_kernel.middleware.tenant_context import TenantContextMissingError

settings = get_settings()
configure_logging(environment=settings.environment, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def rivehr_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Access gate (built eagerly so missing auth settings fail startup)
    - Change feed listener (started on startup, stopped on shutdown)
    - Database engines (created lazily, disposed on shutdown)
    """
    get_access_gate()

    feed = get_change_feed()
    await feed.start()

    yield

    await feed.stop()
    await close_database_connections()


app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant recruiting: jobs, talent pool and hiring pipelines",
    version=__version__,
    lifespan=rivehr_lifespan,
)

app.add_middleware(AccessGateMiddleware, gate_factory=get_access_gate)


@app.exception_handler(TenantContextMissingError)
async def tenant_context_missing_handler(
    request: Request, exc: TenantContextMissingError
) -> JSONResponse:
    """A tenant route ran without the access gate: a server fault."""
    logger.error(
        "tenant_route_without_context",
        path=request.url.path,
        missing=exc.missing,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Tenant context unavailable"},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


# Pipeline and recruiting paths are more specific than the tenant pages
app.include_router(pipeline_router)
app.include_router(recruiting_router)
app.include_router(iam_router)
