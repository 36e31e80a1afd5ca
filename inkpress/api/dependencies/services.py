"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services are stateless (only hold db session and clock references)
- Each request gets its own db session
- No shared state between requests

The clock is a dependency of its own so tests can freeze time with
app.dependency_overrides[get_clock].

Usage:
======
    from inkpress.api.dependencies.services import get_post_service

    @router.post("")
    async def create_post(
        data: PostCreate,
        post_service: PostService = Depends(get_post_service)
    ):
        return await post_service.create(data)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.api.dependencies.database import get_db
from inkpress.shared.core.clock import Clock, SystemClock
from inkpress.shared.services.narration_service import NarrationService
from inkpress.shared.services.post_service import PostService
from inkpress.shared.services.taxonomy_service import TaxonomyService


def get_clock() -> Clock:
    """Dependency providing the wall clock."""
    return SystemClock()


async def get_post_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> PostService:
    """
    Dependency to get PostService instance.

    Creates a new service instance per request with the request's db session.
    """
    return PostService(db, clock=clock)


async def get_taxonomy_service(
    db: AsyncSession = Depends(get_db),
) -> TaxonomyService:
    """
    Dependency to get TaxonomyService instance.
    """
    return TaxonomyService(db)


async def get_narration_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> NarrationService:
    """
    Dependency to get NarrationService instance.
    """
    return NarrationService(db, clock=clock)
