"""
PostExtra Entity Model

Exactly one row per post holding presentation attributes that do not belong
in the core posts table, plus the narration-audio pipeline state.

Written only through an idempotent partial upsert keyed on post_id: columns
not named by a caller keep their stored values, so a content edit never
clobbers in-flight narration state and vice versa.

SAMPLE POST_EXTRA RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ post_id            │ 42                                                      │
│ subtitle           │ "A first post"                                          │
│ highlight          │ "Short teaser shown on cards"                           │
│ format             │ "gallery"                                               │
│ gallery_json       │ '[{"id": 17, "url": "https://cdn/x.jpg"}]'              │
│ video_embed        │ NULL                                                    │
│ audio_status       │ "queued"                                                │
│ audio_lang         │ "bn"                                                    │
│ audio_updated_at   │ 2025-03-01T03:00:00Z                                    │
│ updated_at         │ 2025-03-01T03:00:00Z                                    │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpress.shared.models.base import Base, str_enum
from inkpress.shared.models.enums import AudioStatus, ExtraFormat


class PostExtra(Base):
    """
    Supplementary per-post attributes.

    Attributes:
        post_id: Owning post (primary key, upsert key)
        subtitle / highlight: Display text
        format: Presentation format (standard, gallery, video)
        gallery_json: JSON array of {"id", "url"} objects, or NULL
        video_embed: Embed markup or URL
        audio_*: Narration pipeline state
        updated_at: Stamped on every upsert
    """

    __tablename__ = "post_extra"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRESENTATION
    # ═══════════════════════════════════════════════════════════════════════════

    subtitle: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    highlight: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    format: Mapped[ExtraFormat] = mapped_column(
        str_enum(ExtraFormat),
        nullable=False,
        default=ExtraFormat.STANDARD,
    )
    gallery_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_embed: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # NARRATION AUDIO
    # ═══════════════════════════════════════════════════════════════════════════

    audio_status: Mapped[AudioStatus] = mapped_column(
        str_enum(AudioStatus),
        nullable=False,
        default=AudioStatus.NONE,
    )
    audio_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    audio_lang: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    audio_chars: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    audio_duration_sec: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    audio_updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<PostExtra(post_id={self.post_id}, format={self.format})>"
