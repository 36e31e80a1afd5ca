"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Services: get_*_service() functions, get_clock()
- Listing: get_post_list_params()

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(db: AsyncSession = Depends(get_db)):

    # Write this:
    async def handler(db: DbSession):

Usage:
======
    from inkpress.api.dependencies import DbSession

    @router.get("/ready")
    async def ready(db: DbSession):
        await db.execute(text("SELECT 1"))
"""

from inkpress.api.dependencies.database import (
    get_db,
    DbSession,
)
from inkpress.api.dependencies.pagination import get_post_list_params
from inkpress.api.dependencies.services import (
    get_clock,
    get_narration_service,
    get_post_service,
    get_taxonomy_service,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Listing
    "get_post_list_params",
    # Services
    "get_clock",
    "get_narration_service",
    "get_post_service",
    "get_taxonomy_service",
]
