"""
Database Module

This module provides database connectivity and session management for Inkpress.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   FastAPI Route / Worker job                                                │
│       │                                                                     │
│       │  get_db() / AsyncSessionLocal()                                     │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              AsyncSession (from session.py)                 │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       │  Passed to Service → unit_of_work(session)                          │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              Repository (from repositories/)                │          │
│   │                                                             │          │
│   │  - PostRepository / PostListingRepository                   │          │
│   │  - PostMetaRepository / PostExtraRepository                 │          │
│   │  - TaxonomyRepository / UserRepository                      │          │
│   └─────────────────────────────────────────────────────────────┘          │
│       │                                                                     │
│       ▼                                                                     │
│   ┌─────────────────────────────────────────────────────────────┐          │
│   │              PostgreSQL (or SQLite) Database                │          │
│   └─────────────────────────────────────────────────────────────┘          │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
======
    from inkpress.shared.db import AsyncSessionLocal, unit_of_work

    async with AsyncSessionLocal() as session:
        async with unit_of_work(session):
            ...
"""

from inkpress.shared.db.session import (
    get_db,
    init_db,
    close_db,
    unit_of_work,
    build_engine,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",  # FastAPI dependency for getting a database session
    "init_db",  # Initialize database on app startup
    "close_db",  # Close database on app shutdown
    "unit_of_work",  # One transaction per lifecycle operation
    "build_engine",  # Engine factory (worker, tests)
    "AsyncSessionLocal",  # Session factory for manual session creation
    "engine",  # Database engine (for migrations, etc.)
]
