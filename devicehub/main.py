"""DeviceHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DeviceHubError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup when database_create_tables is set; there is no
      migration tooling
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devicehub import __version__
from devicehub.api.error_handlers import register_error_handlers
from devicehub.api.routes import devices, health
from devicehub.config import get_settings
from devicehub.infrastructure.database import close_db, init_db
from devicehub.infrastructure.observability import setup_logging

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
        pool_recycle=settings.database_pool_recycle_seconds,
    )
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("DeviceHub API started")
    yield
    await close_db()
    logger.info("DeviceHub API shutting down")


app = FastAPI(
    title="DeviceHub API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(devices.router)

register_error_handlers(app)
