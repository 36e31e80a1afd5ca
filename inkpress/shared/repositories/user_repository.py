"""
User Repository

Database operations specific to the User model.
Authors are referenced by posts; account management happens elsewhere, so
this repository only answers lookups.

Common Operations:
==================
- get_by_login()      → Find an author by login name
- get_display_name()  → Name shown next to a post

Usage Example:
==============
    repo = UserRepository(db)
    name = await repo.get_display_name(post.post_author)
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.models.user import User
from inkpress.shared.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User (author) lookups."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize UserRepository.

        Args:
            session: Async database session
        """
        super().__init__(User, session)

    async def get_by_login(self, user_login: str) -> Optional[User]:
        """
        Get an author by login name.

        SQL Generated:
            SELECT * FROM users WHERE user_login = 'editor'
        """
        result = await self.session.execute(select(User).where(User.user_login == user_login))
        return result.scalar_one_or_none()

    async def get_display_name(self, user_id: int) -> Optional[str]:
        """Display name of an author, or None when the id is unknown."""
        result = await self.session.execute(select(User.display_name).where(User.id == user_id))
        return result.scalar_one_or_none()
