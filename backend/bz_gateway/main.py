"""BehtarZindagi Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GatewayError → storefront JSON envelope
    - CORS configured from settings (not hardcoded)
    - One ResilientHttpClient per process: opened in lifespan, stored on app.state, closed on shutdown
    - Missing tables are created on startup; a database outage does not stop the process from serving proxies

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema bootstrap failures are logged, not fatal: catalog/cart proxies never touch the database
      and /api/health/ready reports the outage
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import SQLAlchemyError

from bz_gateway.api.error_handlers import register_error_handlers
from bz_gateway.api.routes import (
    cart, catalog, footer_icons, health, orders, tracking, website_users,
)
from bz_gateway.config import Settings, get_settings
from bz_gateway.core.errors import DatabaseError
from bz_gateway.infrastructure import database
from bz_gateway.infrastructure.http_client import build_http_client
from bz_gateway.infrastructure.observability import access_log_middleware, setup_logging
from bz_gateway.services.footer_icon_service import FooterIconService

logger = logging.getLogger(__name__)


async def prepare_database(settings: Settings) -> None:
    """Create missing tables and seed footer icons, as configured."""
    manager = database.db_manager
    if manager is None:
        return
    try:
        if settings.database_auto_create:
            await manager.bootstrap_schema()
        if settings.seed_footer_icons:
            async with manager.session() as db:
                await FooterIconService(db).seed_defaults()
    except (SQLAlchemyError, DatabaseError, OSError) as e:
        logger.error(f"Database bootstrap failed, continuing without it: {e}", exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await prepare_database(settings)
    app.state.http_client = build_http_client(settings)
    logger.info(f"BehtarZindagi gateway started ({settings.environment})")
    yield
    logger.info("BehtarZindagi gateway shutting down")
    await app.state.http_client.aclose()
    await database.close_db()


app = FastAPI(
    title="BehtarZindagi Gateway API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.middleware("http")(access_log_middleware)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(website_users.router)
app.include_router(footer_icons.router)
app.include_router(tracking.traffic_router)
app.include_router(tracking.events_router)

register_error_handlers(app)
