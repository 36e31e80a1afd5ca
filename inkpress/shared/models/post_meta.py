"""
PostMeta Entity Model

Generic key/value attributes attached to a post.

There is deliberately no unique constraint on (post_id, meta_key): other
consumers of the table may store multi-valued keys. The engine keeps at most
one live row per key it owns by clearing before setting.

SAMPLE POSTMETA RECORDS:
┌──────────────────────────────────────────────────────────────────────────────┐
│ meta_id │ post_id │ meta_key                 │ meta_value                    │
├─────────┼─────────┼──────────────────────────┼───────────────────────────────┤
│ 10      │ 42      │ _thumbnail_id            │ "17"                          │
│ 11      │ 42      │ _scheduled_at            │ "2025-03-01 09:00:00"         │
│ 12      │ 42      │ _wp_trash_meta_status    │ "publish"                     │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.shared.models.base import Base


class PostMeta(Base):
    """
    One metadata attribute of a post.

    Attributes:
        id: Row identifier (column meta_id)
        post_id: Owning post
        meta_key: Attribute name
        meta_value: Attribute value as text
    """

    __tablename__ = "postmeta"
    __table_args__ = (Index("ix_postmeta_post_key", "post_id", "meta_key"),)

    id: Mapped[int] = mapped_column("meta_id", Integer, primary_key=True, autoincrement=True)

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )

    meta_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    meta_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<PostMeta(post_id={self.post_id}, key={self.meta_key})>"
