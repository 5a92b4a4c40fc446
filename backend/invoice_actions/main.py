"""Invoice Actions API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as invoice form state
    - The invoice router prefix comes from settings.invoices_path (create_app)
    - CORS configured from settings
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema created on startup only when database_create_schema is set (no migrations)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoice_actions.api.error_handlers import register_error_handlers
from invoice_actions.api.routes import customers, health, invoices
from invoice_actions.config import Settings, get_settings
from invoice_actions.db.session import create_schema
from invoice_actions.infrastructure.database import init_db
from invoice_actions.infrastructure.observability import setup_logging
from invoice_actions.infrastructure.view_cache import list_view_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await create_schema(manager.engine)
    list_view_cache.enabled = settings.list_cache_enabled
    logger.info("Invoice Actions API started")
    yield
    await manager.dispose()
    logger.info("Invoice Actions API shutting down")


def create_app(settings: Settings) -> FastAPI:
    """Build the app. The invoice routes are mounted at settings.invoices_path."""
    app = FastAPI(
        title="Invoice Actions API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(health.router)
    app.include_router(invoices.router, prefix=settings.invoices_path)
    app.include_router(customers.router)

    register_error_handlers(app)
    return app


app = create_app(get_settings())
