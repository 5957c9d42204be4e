"""
Users Backend API Server
Core functionality: CRUD over the users table, CORS and JSON middleware
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI

from config.settings import Settings, get_settings
from database.connection import Database, init_database, close_database
from api.routes import health, users
from middleware.content_type import JSONContentTypeMiddleware
from middleware.cors import PermissiveCORSMiddleware
from services.users_service import UsersService
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

USERS_PREFIX = "/api/go/users"


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Service configuration; read from the environment when omitted
        db: Already-open database handle. When given, the app neither opens
            nor closes a connection and does not bootstrap the table.

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        if app.state.db is not None:
            yield
            return

        app.state.db = await init_database(settings.database_url)
        try:
            await UsersService(app.state.db).ensure_table()
            yield
        finally:
            await close_database(app.state.db)
            app.state.db = None

    app = FastAPI(
        title="Users Backend",
        description="CRUD API for the users resource",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.db = db

    # Each add_middleware call wraps the previous ones, so CORS ends up outermost
    setup_error_handling(app)
    app.add_middleware(JSONContentTypeMiddleware)
    app.add_middleware(PermissiveCORSMiddleware, allow_origin=settings.cors_allow_origin)

    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix=USERS_PREFIX, tags=["Users"])

    logger.info(f"Users routes registered under {USERS_PREFIX}")
    return app
