"""
Post Repository

Database operations specific to the Post model.
Extends BaseRepository with slug probing, comment cleanup and the query the
scheduled publisher needs.

Common Operations:
==================
- slug_taken()        → Is a slug used by another non-trashed post?
- delete_comments()   → Remove every comment of a post (hard delete)
- due_scheduled_ids() → Future posts whose time has come
- get_attachment_url() → Public URL of a media attachment

Usage Example:
==============
    repo = PostRepository(db)
    if await repo.slug_taken("hello-world", exclude_id=42):
        ...
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.models.comment import Comment
from inkpress.shared.models.enums import PostStatus, PostType
from inkpress.shared.models.post import Post
from inkpress.shared.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post database operations.

    Lifecycle rules (statuses, schedules, slugs) live in PostService; this
    class only knows how to read and write rows.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize PostRepository.

        Args:
            session: Async database session
        """
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # SLUGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def slug_taken(
        self,
        slug: str,
        exclude_id: Optional[int] = None,
        post_type: str = PostType.POST.value,
    ) -> bool:
        """
        Check whether a non-trashed post of the same type already uses a slug.

        Trashed posts do not hold on to their slug.

        Args:
            slug: Candidate slug
            exclude_id: Post to ignore (the one being updated)
            post_type: Post type the uniqueness applies to

        Returns:
            True if the slug is in use

        SQL Generated:
            SELECT id FROM posts
            WHERE post_name = 'hello-world' AND post_type = 'post'
              AND post_status <> 'trash' AND id <> 42
            LIMIT 1
        """
        query = select(Post.id).where(
            Post.post_name == slug,
            Post.post_type == post_type,
            Post.post_status != PostStatus.TRASH,
        )
        if exclude_id is not None:
            query = query.where(Post.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # DEPENDENTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_comments(self, post_id: int) -> int:
        """
        Remove every comment of a post.

        Returns:
            Number of comments deleted
        """
        result = await self.session.execute(
            delete(Comment)
            .where(Comment.comment_post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def get_attachment_url(self, attachment_id: int) -> Optional[str]:
        """Public URL (guid) of an attachment row, or None."""
        result = await self.session.execute(
            select(Post.guid).where(
                Post.id == attachment_id,
                Post.post_type == PostType.ATTACHMENT.value,
            )
        )
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # SCHEDULING
    # ═══════════════════════════════════════════════════════════════════════════

    async def due_scheduled_ids(self, now_gmt: datetime, limit: int = 100) -> list[int]:
        """
        Ids of future posts whose UTC date is at or before now_gmt, oldest first.

        Args:
            now_gmt: Current time as a naive UTC datetime
            limit: Maximum ids returned
        """
        result = await self.session.execute(
            select(Post.id)
            .where(
                Post.post_type == PostType.POST.value,
                Post.post_status == PostStatus.FUTURE,
                Post.post_date_gmt <= now_gmt,
            )
            .order_by(Post.post_date_gmt, Post.id)
            .limit(limit)
        )
        return list(result.scalars().all())
