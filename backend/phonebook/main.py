"""Phonebook API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PhonebookError → {status, data} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, tables and reference data client initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Reference client closed and engine disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from phonebook.api.error_handlers import register_error_handlers
from phonebook.api.routes import health, phonebook_items
from phonebook.config import get_settings
from phonebook.infrastructure.database import init_db
from phonebook.infrastructure.observability import setup_logging
from phonebook.infrastructure.reference_cache import TTLReferenceCache
from phonebook.infrastructure.reference_client import ReferenceApiClient
from phonebook.services.reference_data import init_reference_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_all:
        await db_manager.create_all()

    reference_client = ReferenceApiClient(
        settings.reference_api_base_url,
        timeout_seconds=settings.reference_api_timeout_seconds,
    )
    init_reference_data(
        reference_client,
        TTLReferenceCache(
            maxsize=settings.reference_cache_maxsize,
            ttl_seconds=settings.reference_cache_ttl_seconds,
        ),
    )
    logger.info("Phonebook API started")
    yield
    logger.info("Phonebook API shutting down")
    await reference_client.aclose()
    await db_manager.dispose()


app = FastAPI(title="Phonebook API", version="1.0.0", lifespan=lifespan)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(phonebook_items.router)

register_error_handlers(app)
