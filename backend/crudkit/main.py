"""crudkit API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - One ErrorBoundary handles every escaped failure; its redaction mode comes
      from Settings.environment, fixed when the app is created
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import crudkit.infrastructure.database as database
from crudkit.api.error_handlers import ErrorBoundary
from crudkit.api.routes import health, products
from crudkit.config import Settings, get_settings
from crudkit.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


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
    logger.info(f"crudkit API started ({settings.environment})")
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("crudkit API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(title="crudkit API", version="1.0.0", lifespan=lifespan)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    application.include_router(health.router)
    application.include_router(products.router)

    ErrorBoundary(settings.is_sensitive_environment).register(application)
    return application


app = create_app()
