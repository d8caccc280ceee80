"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from shared.config import get_settings as get_app_settings
from shared.database import close_connection_pool

from .config import get_settings
from .errors import register_exception_handlers
from .routes import auth, health, users

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    app_settings = get_app_settings()
    logger.info(
        f"Starting wallet-users API on {settings.host}:{settings.port} "
        f"(storage: {app_settings.storage_backend})"
    )
    yield
    # Shutdown
    close_connection_pool()
    logger.info("Shut down wallet-users API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="wallet-users API",
        description="User accounts, sign-in and session tokens",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
    app.include_router(auth.router, prefix=API_PREFIX, tags=["auth"])
    app.include_router(users.router, prefix=API_PREFIX, tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
