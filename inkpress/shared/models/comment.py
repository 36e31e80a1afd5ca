"""
Comment Entity Model

Reader comments on a post. The engine never creates or edits them; it only
removes them when their post is hard-deleted.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.shared.models.base import Base


class Comment(Base):
    """Comment left on a post."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column("comment_id", Integer, primary_key=True, autoincrement=True)

    comment_post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    comment_author: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    comment_author_email: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    comment_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    comment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    comment_approved: Mapped[str] = mapped_column(String(20), nullable=False, default="1")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Comment(id={self.id}, post_id={self.comment_post_id})>"
