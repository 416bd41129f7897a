"""
eventdesk.api.app

FastAPI app factory for the eventdesk RPC service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Construct the access gate with its credential resolver.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from eventdesk.api.errors import install_error_handlers
from eventdesk.api.routers.auth import router as auth_router
from eventdesk.api.routers.catalog import router as catalog_router
from eventdesk.api.routers.expenses import router as expenses_router
from eventdesk.api.routers.health import router as health_router
from eventdesk.api.routers.orders import router as orders_router
from eventdesk.api.routers.products import router as products_router
from eventdesk.api.routers.public import router as public_router
from eventdesk.api.routers.registrations import router as registrations_router
from eventdesk.api.routers.reports import router as reports_router
from eventdesk.api.routers.users import router as users_router
from eventdesk.auth.gate import AccessGate
from eventdesk.auth.jwt import JwtConfig
from eventdesk.auth.resolver import JwtUserResolver
from eventdesk.db.init_db import init_db
from eventdesk.db.session import create_engine, create_sessionmaker
from eventdesk.observability.logging import configure_logging, get_logger
from eventdesk.observability.middleware import RequestContextMiddleware
from eventdesk.services.accounts import ensure_admin
from eventdesk.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        session_factory = create_sessionmaker(engine)
        app.state.engine = engine
        app.state.sessionmaker = session_factory
        app.state.gate = AccessGate(
            JwtUserResolver(
                jwt_cfg=JwtConfig.from_settings(settings),
                session_factory=session_factory,
            )
        )
        if settings.creates_tables:
            await init_db(engine)
        if settings.admin_password:
            await ensure_admin(
                session_factory,
                email=settings.admin_email,
                password=settings.admin_password,
            )
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="eventdesk",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(catalog_router)
    app.include_router(products_router)
    app.include_router(expenses_router)
    app.include_router(orders_router)
    app.include_router(registrations_router)
    app.include_router(public_router)
    app.include_router(reports_router)
    return app


# --- Module Notes -----------------------------------------------------------
# Procedures run their gate check first thing in the handler body, since the
# credential travels in the request payload rather than a header.
