"""
Inkpress API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           INKPRESS API                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                    Middleware Stack                         │           │
│   │  ┌─────────────────────────────────────────────────────┐    │           │
│   │  │ CORS Middleware                                     │    │           │
│   │  │ Error Handler                                       │    │           │
│   │  └─────────────────────────────────────────────────────┘    │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                       Routers                               │           │
│   │  ┌──────────┐ ┌──────────┐ ┌────────────┐ ┌──────────┐      │           │
│   │  │  Health  │ │  Posts   │ │ Categories │ │   Tags   │      │           │
│   │  └──────────┘ └──────────┘ └────────────┘ └──────────┘      │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                Dependencies (Injected)                      │           │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐                     │           │
│   │  │ Database │ │  Clock   │ │ Services │                     │           │
│   │  └──────────┘ └──────────┘ └──────────┘                     │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection initialized
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connection closed

Usage:
======
    # Run with uvicorn
    uvicorn inkpress.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from inkpress.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkpress.config.settings import settings
from inkpress.shared.db import init_db, close_db
from inkpress.shared.core.logging import logger
from inkpress.api.middleware import setup_exception_handlers
from inkpress.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database is reachable

    Shutdown:
    - Dispose of the connection pool
    """
    logger.info(
        "Starting Inkpress API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        utc_offset_hours=settings.SITE_UTC_OFFSET_HOURS,
    )

    await init_db()
    logger.info("Inkpress API started successfully")

    yield

    logger.info("Shutting down Inkpress API")
    await close_db()
    logger.info("Inkpress API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS)
    3. Sets up exception handlers
    4. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Post publishing and taxonomy engine",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
