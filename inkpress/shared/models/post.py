"""
Post Entity Model

A row of the posts table. Besides blog posts ("post"), the same table holds
pages and media attachments; attachments carry their public URL in ``guid``
and are what ``_thumbnail_id`` metadata points at.

Dates:
======
Every date is stored as a naive datetime pair:
    post_date         ← site-local civil time (fixed UTC offset)
    post_date_gmt     ← the same instant in UTC
    post_modified     ← local time of the last change
    post_modified_gmt ← UTC time of the last change

Slug Uniqueness:
================
post_name is unique only among NON-TRASHED rows of the same post_type, so
there is no database constraint on it; the slug allocator enforces it.

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 42                                                        │
│ post_author      │ 1                                                         │
│ post_title       │ "Hello World"                                             │
│ post_name        │ "hello-world"                                             │
│ post_status      │ "future"                                                  │
│ post_date        │ 2025-03-01 09:00:00   (local, UTC+6)                      │
│ post_date_gmt    │ 2025-03-01 03:00:00                                       │
│ post_type        │ "post"                                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.shared.models.base import Base, str_enum
from inkpress.shared.models.enums import PostStatus, PostType


class Post(Base):
    """
    Post model.

    Created, mutated and hard-deleted only through PostService.

    Attributes:
        id: Integer identifier
        post_author: Author user id (no FK; authors live outside this core)
        post_title / post_content / post_excerpt: Core text fields
        post_status: Lifecycle status
        post_name: URL slug
        post_type: "post", "page", "attachment", ...
        guid: Public URL (used for attachments)
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_type_status_date", "post_type", "post_status", "post_date"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    post_author: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # DATES
    # ═══════════════════════════════════════════════════════════════════════════

    post_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    post_date_gmt: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    post_modified: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    post_modified_gmt: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    post_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE
    # ═══════════════════════════════════════════════════════════════════════════

    post_status: Mapped[PostStatus] = mapped_column(
        str_enum(PostStatus),
        nullable=False,
        default=PostStatus.DRAFT,
    )

    post_name: Mapped[str] = mapped_column(String(200), nullable=False, default="", index=True)

    comment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    ping_status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")

    # ═══════════════════════════════════════════════════════════════════════════
    # HIERARCHY & TYPE
    # ═══════════════════════════════════════════════════════════════════════════

    post_parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    menu_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default=PostType.POST.value)
    post_mime_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    guid: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Post(id={self.id}, slug={self.post_name}, status={self.post_status})>"
