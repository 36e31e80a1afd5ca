"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories
and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database

Services should:
- Contain business logic and validation
- Coordinate multiple repositories inside one unit of work
- Own the transaction boundary of every mutating operation
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- PostService: Post lifecycle, listing and scheduled publishing
- TaxonomyService: Category and tag administration
- NarrationService: Narration-audio pipeline state
- SlugService: Collision-free post slugs
- ScheduleResolver: Site-local / UTC schedule resolution

Usage:
======
    from inkpress.shared.services import PostService

    service = PostService(db)
    created = await service.create(payload)
"""

from inkpress.shared.services.narration_service import NarrationService
from inkpress.shared.services.post_service import (
    CreatedPost,
    PaginatedPosts,
    PostDetail,
    PostService,
)
from inkpress.shared.services.schedule_service import ScheduleResolver, ZonedTime
from inkpress.shared.services.slug_service import SlugService
from inkpress.shared.services.taxonomy_service import TaxonomyService

__all__ = [
    "NarrationService",
    "CreatedPost",
    "PaginatedPosts",
    "PostDetail",
    "PostService",
    "ScheduleResolver",
    "ZonedTime",
    "SlugService",
    "TaxonomyService",
]
