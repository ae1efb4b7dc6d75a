"""
Application factory for the pizza service.

create_app() builds a FastAPI application around an explicitly constructed
Database handle and FactoryClient. Both live on ``app.state``; the database
is opened when the application starts and closed when it stops, so nothing
touches the database at import time.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .db import Database
from .errors import register_exception_handlers
from .init_db import init_db
from .middleware import AuthTokenMiddleware
from .routes import auth_router, docs_router, franchise_router, limiter, order_router, user_router
from .services.fulfillment import FactoryClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    init_db(database)
    logger.info("Pizza service started (version %s)", config.VERSION)
    try:
        yield
    finally:
        database.close()


def create_app(
    database_url: Optional[str] = None,
    database: Optional[Database] = None,
    factory: Optional[FactoryClient] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        database_url: SQLAlchemy URL; defaults to config.DATABASE_URL.
        database: Pre-built Database handle (takes precedence over the URL).
        factory: Pizza factory client; defaults to one built from config.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="JWT Pizza Service",
        description="Franchise, store, menu and order management for JWT Pizza",
        version=config.VERSION,
        lifespan=lifespan,
    )

    app.state.database = database or Database(database_url or config.DATABASE_URL)
    app.state.factory = factory or FactoryClient()

    app.add_middleware(AuthTokenMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter

    register_exception_handlers(app)

    app.include_router(docs_router)
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(franchise_router)
    app.include_router(order_router)

    logger.info("Application created (factory: %s)", app.state.factory.base_url)
    return app
