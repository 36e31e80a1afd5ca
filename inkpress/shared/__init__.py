"""
Shared Module

Contains code shared between API and Worker components:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions, clock

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions, clock
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Slug helpers, constants

Usage:
======
    from inkpress.shared.models import Post, TermTaxonomy
    from inkpress.shared.services import PostService
    from inkpress.shared.schemas import PostCreate
    from inkpress.shared.core import logger, InkpressException
"""
