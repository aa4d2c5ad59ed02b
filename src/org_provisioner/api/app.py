"""
org_provisioner.api.app

FastAPI app factory for the organization provisioning service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, session factory, cache).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from org_provisioner import __version__
from org_provisioner.api.error_handlers import register_error_handlers
from org_provisioner.api.routers.dev_auth import router as dev_auth_router
from org_provisioner.api.routers.health import router as health_router
from org_provisioner.api.routers.organization import router as organization_router
from org_provisioner.api.routers.principals import router as principals_router
from org_provisioner.db.init_db import init_db
from org_provisioner.db.session import create_engine, create_sessionmaker
from org_provisioner.directory.cache import PrincipalCache
from org_provisioner.observability.logging import configure_logging, get_logger
from org_provisioner.observability.middleware import RequestContextMiddleware
from org_provisioner.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.principal_cache = PrincipalCache(max_entries=settings.principal_cache_size)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            app.state.principal_cache.clear()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Organization Provisioning Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(organization_router)
    app.include_router(principals_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Settings are passed explicitly (not read from env here) so tests can build apps
# against throwaway databases.
