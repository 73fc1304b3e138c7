"""
provisioning_api.api.app

FastAPI app factory for the provisioning service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Own the DB engine/session factory lifetime through the app lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from provisioning_api import __version__
from provisioning_api.api.errors import register_error_handlers
from provisioning_api.api.routers.dev_auth import router as dev_auth_router
from provisioning_api.api.routers.groups import router as groups_router
from provisioning_api.api.routers.health import router as health_router
from provisioning_api.db.init_db import init_db
from provisioning_api.db.session import create_engine, create_sessionmaker
from provisioning_api.observability.logging import configure_logging, get_logger
from provisioning_api.observability.middleware import RequestContextMiddleware
from provisioning_api.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod runs Alembic migrations instead.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Group Provisioning API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Every dependency resolves the settings this app was built with.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(groups_router)

    return app
