"""LibraryHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per resource
    - Global error handlers map LibraryError → structured JSON responses
    - CORS configured from settings
    - Database initialized on startup via lifespan; SQLite schemas are created
      in place, server databases are migrated with alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from libraryhub.api.error_handlers import register_error_handlers
from libraryhub.api.routes import books, health, loans, sites, transfers, users
from libraryhub.config import get_settings
from libraryhub.db.session import create_all_tables
from libraryhub.infrastructure.database import init_db
from libraryhub.infrastructure.observability import setup_logging

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
    if settings.database_url.startswith("sqlite"):
        await create_all_tables(manager.engine)
    logger.info("LibraryHub API started")
    yield
    logger.info("LibraryHub API shutting down")
    await manager.dispose()


app = FastAPI(title="LibraryHub API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(books.router)
app.include_router(sites.router)
app.include_router(users.router)
app.include_router(loans.router)
app.include_router(transfers.router)

register_error_handlers(app)
