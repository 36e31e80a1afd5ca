"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /posts                  → Post lifecycle, listing, narration
    /categories             → Category administration
    /tags                   → Tag administration

Usage:
======
    from inkpress.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from inkpress.api.handlers import (
    health_handler,
    post_handler,
    taxonomy_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Post endpoints
    app.include_router(
        post_handler.router,
        prefix="/posts",
        tags=["Posts"],
    )

    # Taxonomy endpoints
    app.include_router(
        taxonomy_handler.categories_router,
        prefix="/categories",
        tags=["Categories"],
    )
    app.include_router(
        taxonomy_handler.tags_router,
        prefix="/tags",
        tags=["Tags"],
    )
