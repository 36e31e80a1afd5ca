"""
PostMeta Repository

The metadata store: named attributes attached to a post.

Clear-then-set:
===============
set_meta() deletes every row for (post_id, key) and then inserts a single
row if the value is not None. Both statements run on the caller's session,
so inside a unit of work there is never a moment where two live values for
the same key are visible, and no unique constraint is needed.

Usage Example:
==============
    repo = PostMetaRepository(db)
    await repo.set_meta(42, MetaKey.THUMBNAIL_ID, "17")
    await repo.set_meta(42, MetaKey.SCHEDULED_AT, None)   # clears
    thumb = await repo.get_meta(42, MetaKey.THUMBNAIL_ID)  # "17"
"""

from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.models.enums import MetaKey
from inkpress.shared.models.post_meta import PostMeta
from inkpress.shared.repositories.base import BaseRepository


class PostMetaRepository(BaseRepository[PostMeta]):
    """Repository for postmeta rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PostMeta, session)

    async def set_meta(self, post_id: int, key: MetaKey, value: Optional[str]) -> None:
        """
        Set or clear one attribute.

        Args:
            post_id: Owning post
            key: Attribute name
            value: New value, or None to clear
        """
        await self.session.execute(
            delete(PostMeta).where(
                PostMeta.post_id == post_id,
                PostMeta.meta_key == key.value,
            ).execution_options(synchronize_session=False)
        )
        if value is not None:
            await self.session.execute(
                insert(PostMeta).values(post_id=post_id, meta_key=key.value, meta_value=value)
            )

    async def get_meta(self, post_id: int, key: MetaKey) -> Optional[str]:
        """Return the live value for a key, or None."""
        result = await self.session.execute(
            select(PostMeta.meta_value)
            .where(PostMeta.post_id == post_id, PostMeta.meta_key == key.value)
            .order_by(PostMeta.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_all(self, post_id: int) -> dict[str, Optional[str]]:
        """Return every attribute of a post (latest row wins per key)."""
        result = await self.session.execute(
            select(PostMeta.meta_key, PostMeta.meta_value)
            .where(PostMeta.post_id == post_id)
            .order_by(PostMeta.id)
        )
        return {key: value for key, value in result.all()}

    async def delete_for_post(self, post_id: int) -> int:
        """
        Remove every attribute of a post.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(
            delete(PostMeta)
            .where(PostMeta.post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
