"""Marketplace API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per resource
    - Global error handlers map MarketplaceError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via the lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.api.error_handlers import register_error_handlers
from marketplace.api.routes import accounts, favorites, health, items, purchases
from marketplace.config import get_settings
from marketplace.infrastructure.database import init_db
from marketplace.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Marketplace API started")
    yield
    logger.info("Marketplace API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Marketplace API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(items.router)
app.include_router(purchases.router)
app.include_router(favorites.router)

register_error_handlers(app)
