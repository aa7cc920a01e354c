"""
FastAPI application for the FinFlow API.

create_app() builds a fully wired application. Collaborators live in a
Container on app.state, so tests can pass their own settings and storage:

    app = create_app(settings=Settings(jwt_secret="test"), storage=create_local_storage())
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finflow.api import categories, users, wallets
from finflow.api.errors import register_exception_handlers
from finflow.auth import routes as auth_routes
from finflow.auth.passwords import PasswordHasher
from finflow.config import Settings, get_settings
from finflow.container import Container
from finflow.integrations.sentry import init_sentry
from finflow.storage import MetadataStorage, create_local_storage

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.container.settings

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    logger.info(f"FinFlow API starting in {settings.environment} mode")

    yield

    logger.info("FinFlow API shutting down")


# =============================================================================
# App Setup
# =============================================================================


def _check_jwt_secret(settings: Settings) -> None:
    if not settings.uses_default_jwt_secret:
        return
    if settings.is_production:
        raise RuntimeError("JWT_SECRET must be set in production")
    logger.warning("JWT_SECRET not set - using the insecure development default")


def create_app(
    settings: Settings | None = None,
    storage: MetadataStorage | None = None,
    passwords: PasswordHasher | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _check_jwt_secret(settings)

    app = FastAPI(
        title="FinFlow API",
        description="Personal finance records: users, categories and wallets",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.container = Container.build(
        settings,
        storage or create_local_storage(),
        passwords=passwords,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_routes.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(wallets.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
