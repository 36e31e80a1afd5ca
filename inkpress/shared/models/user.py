"""
User Entity Model

Represents a post author. Accounts and authentication are managed outside
this service; the engine only needs the display name for listings.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 1                                                         │
│ user_login       │ "editor"                                                  │
│ user_email       │ "editor@example.com"                                      │
│ display_name     │ "Desk Editor"                                             │
│ created_at       │ 2025-01-01T00:00:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.shared.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    Author of posts.

    Attributes:
        id: Integer identifier referenced by posts.post_author
        user_login: Login name (unique)
        user_email: Contact address
        display_name: Name shown next to posts
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_login: Mapped[str] = mapped_column(String(60), unique=True, nullable=False)

    user_email: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    display_name: Mapped[str] = mapped_column(String(250), nullable=False, default="")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, login={self.user_login})>"
