"""
Slug Service

Allocates collision-free post slugs.

    ensure_unique_slug("Hello World")        → "hello-world"
    ensure_unique_slug("Hello World")        → "hello-world-2"   (first is live)
    ensure_unique_slug("Hello World", 12)    → "hello-world"     (12 owns it)

Only non-trashed posts hold a slug, so a trashed post's slug is handed out
again. Collisions are never an error: the allocator keeps suffixing -2, -3,
... until a free candidate turns up.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.repositories.post_repository import PostRepository
from inkpress.shared.utils.constants import DEFAULT_POST_SLUG, FIRST_SLUG_SUFFIX, SLUG_MAX_LENGTH
from inkpress.shared.utils.slugify import slugify, suffixed


class SlugService:
    """Slug allocation against the posts table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.post_repo = PostRepository(session)

    async def ensure_unique_slug(self, base: Optional[str], exclude_id: Optional[int] = None) -> str:
        """
        Turn base into a slug no other live post uses.

        Args:
            base: Requested slug or title
            exclude_id: Post being updated (its own slug is not a collision)

        Returns:
            A free slug of at most SLUG_MAX_LENGTH characters
        """
        slug = slugify(base or DEFAULT_POST_SLUG, SLUG_MAX_LENGTH) or DEFAULT_POST_SLUG
        candidate = slug
        index = FIRST_SLUG_SUFFIX
        while await self.post_repo.slug_taken(candidate, exclude_id=exclude_id):
            candidate = suffixed(slug, index, SLUG_MAX_LENGTH)
            index += 1
        return candidate
