"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oraclerelay import __version__
from oraclerelay.api.routes import entities_router, info_router, manual_router, status_router
from oraclerelay.client import OracleRelay
from oraclerelay.config import RelaySettings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds and starts the relay unless one was supplied to ``create_app``,
    in which case the caller owns its lifecycle.
    """
    if app.state.relay is not None:
        yield
        return

    settings: RelaySettings = app.state.settings or get_settings()

    logger.info("Starting oracle relay...")
    async with OracleRelay(settings) as relay:
        app.state.relay = relay
        if app.state.start_polling:
            await relay.start()
        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application...")
        app.state.relay = None

    logger.info("Application shutdown complete")


def create_app(
    *,
    settings: RelaySettings | None = None,
    relay: OracleRelay | None = None,
    start_polling: bool = True,
    title: str = "Oracle Relay API",
    description: str = "Credit score oracle relay: status, cached scores and manual triggers",
    version: str = __version__,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings for the relay built at startup
        relay: An already initialised relay to serve instead
        start_polling: Start the poll loop when the relay is built here
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        version: API version
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings
    app.state.relay = relay
    app.state.start_polling = start_polling

    # Configure CORS
    if cors_origins is None:
        cors_origins = (settings or get_settings()).cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    app.include_router(info_router)
    app.include_router(entities_router, prefix="/api")
    app.include_router(manual_router, prefix="/api")
    app.include_router(status_router, prefix="/api")

    return app
