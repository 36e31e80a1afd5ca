"""
Inkpress Backend

Post publishing and taxonomy engine for a blog-style content schema
(posts, terms, term taxonomy, relationships, post metadata).

Package Structure:
==================
    inkpress/
    ├── api/        ← FastAPI application
    ├── worker/     ← Scheduled post publisher
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn inkpress.api.main:app --reload

    # Scheduled publisher (run periodically, e.g. from cron)
    python -m inkpress.worker.scheduled_publisher
"""
