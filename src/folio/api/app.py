"""FastAPI application factory for Folio.

Creates the application with:
- GraphQL endpoint (/graphql)
- Health probes (/health, /health/live, /health/ready)
- Lifecycle management for the document store and Redis connection
- Request ID propagation into logs
- ORJSON for fast JSON serialization
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from folio import __version__
from folio.api.errors import generic_exception_handler
from folio.api.middleware import RequestIdMiddleware
from folio.api.routers import graphql, health
from folio.cache.redis import RedisConnection
from folio.catalog.service import CatalogService
from folio.config import Settings
from folio.config import settings as default_settings
from folio.observability import configure_logging
from folio.persistence.factory import create_document_store

logger = logging.getLogger(__name__)


def create_lifespan(
    settings: Settings,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan handler bound to ``settings``."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle.

        On startup:
        - Configure structured logging
        - Initialize the document store
        - Initialize the Redis connection
        - Build the catalog service

        On shutdown:
        - Close the Redis connection
        - Close the document store
        """
        configure_logging(
            json_format=settings.env != "dev",
            level=settings.log_level,
        )

        logger.info(f"Starting Folio ({settings.env}, store={settings.store_backend})")
        store = create_document_store(settings)
        await store.start()
        redis_connection = RedisConnection(settings.redis_url)
        redis_client = await redis_connection.connect()

        app.state.store = store
        app.state.redis = redis_connection
        app.state.catalog = CatalogService.create(
            store, redis_client, listing_ttl=settings.listing_cache_ttl
        )
        logger.info("Folio startup complete")

        yield

        logger.info("Shutting down Folio")
        await redis_connection.close()
        await store.close()
        logger.info("Folio shutdown complete")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Folio",
        description="Catalog of authors and books",
        version=__version__,
        default_response_class=ORJSONResponse,
        lifespan=create_lifespan(settings),
    )

    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(health.router)
    app.include_router(graphql.create_router(graphql_ide=settings.enable_graphql_ide))

    return app
