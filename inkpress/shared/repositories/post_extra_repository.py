"""
PostExtra Repository

The extras store: one post_extra row per post, written by a single
idempotent partial upsert.

Partial Upsert:
===============
┌─────────────────────────────────────────────────────────────────────────────┐
│   INSERT INTO post_extra (post_id, <supplied cols>, <defaults>, updated_at) │
│   ON CONFLICT (post_id) DO UPDATE SET                                       │
│       <supplied cols> = excluded.<col>,                                     │
│       updated_at      = excluded.updated_at,                                │
│       audio_updated_at = excluded.audio_updated_at   ← only if audio given  │
└─────────────────────────────────────────────────────────────────────────────┘

    Insert: first write creates the full row (defaults for the rest).
    Conflict: only the columns named by the caller change, so a content edit
    never touches narration state and a narration update never touches
    subtitle/format/gallery.

After the upsert, the supplied presentation fields are mirrored into
postmeta (_subtitle, _highlight, _format, _gallery, _video) for consumers
that read the generic metadata table.

Usage Example:
==============
    repo = PostExtraRepository(db)
    await repo.upsert(42, ExtrasPatch(subtitle="Hi", gallery=[17, {"id": 18}]), now)
    await repo.upsert(42, ExtrasPatch(audio_status=AudioStatus.QUEUED, audio_lang="bn"), now)
"""

import json
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.models.enums import AudioStatus, ExtraFormat, MetaKey
from inkpress.shared.models.post_extra import PostExtra
from inkpress.shared.repositories.base import BaseRepository
from inkpress.shared.repositories.post_meta_repository import PostMetaRepository


class _Unset:
    """Marker for "field not supplied" (distinct from an explicit None)."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

AUDIO_FIELDS = ("audio_status", "audio_url", "audio_lang", "audio_chars", "audio_duration_sec")

# Presentation column -> postmeta mirror key
MIRRORED_COLUMNS = {
    "subtitle": MetaKey.SUBTITLE,
    "highlight": MetaKey.HIGHLIGHT,
    "format": MetaKey.FORMAT,
    "gallery_json": MetaKey.GALLERY,
    "video_embed": MetaKey.VIDEO,
}


@dataclass
class ExtrasPatch:
    """
    Fields to write into a post's extras row.

    Every field defaults to UNSET; only fields given a value (None included)
    take part in the upsert.
    """

    subtitle: Any = UNSET
    highlight: Any = UNSET
    format: Any = UNSET
    gallery: Any = UNSET
    video_embed: Any = UNSET
    audio_status: Any = UNSET
    audio_url: Any = UNSET
    audio_lang: Any = UNSET
    audio_chars: Any = UNSET
    audio_duration_sec: Any = UNSET

    def supplied(self) -> dict[str, Any]:
        """Map supplied fields to post_extra column values."""
        columns: dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is UNSET:
                continue
            if field.name == "gallery":
                columns["gallery_json"] = normalize_gallery(value)
            elif field.name == "format":
                columns["format"] = ExtraFormat(value) if value else ExtraFormat.STANDARD
            elif field.name == "audio_status":
                columns["audio_status"] = AudioStatus(value) if value else AudioStatus.NONE
            else:
                columns[field.name] = value
        return columns

    def is_empty(self) -> bool:
        return not self.supplied()


def normalize_gallery(gallery: Any) -> Optional[str]:
    """
    Normalize a gallery list to a JSON array of {"id", "url"} objects.

    Accepts dicts with an "id" (and optional "url"), objects with id/url
    attributes, or bare ids. Non-positive or non-numeric ids are dropped.

    Returns:
        JSON text, or None when nothing valid remains

    Example:
        normalize_gallery([17, {"id": 18, "url": "https://cdn/x.jpg"}, 0])
        # '[{"id": 17, "url": null}, {"id": 18, "url": "https://cdn/x.jpg"}]'
    """
    if not gallery:
        return None

    items = []
    for entry in gallery:
        if isinstance(entry, dict):
            raw_id, url = entry.get("id"), entry.get("url")
        elif hasattr(entry, "id"):
            raw_id, url = entry.id, getattr(entry, "url", None)
        else:
            raw_id, url = entry, None
        try:
            image_id = int(raw_id)
        except (TypeError, ValueError):
            continue
        if image_id > 0:
            items.append({"id": image_id, "url": url})

    return json.dumps(items) if items else None


def parse_gallery(gallery_json: Optional[str]) -> list[dict[str, Any]]:
    """Read a stored gallery back into a list of {"id", "url"} dicts."""
    if not gallery_json:
        return []
    try:
        items = json.loads(gallery_json)
    except ValueError:
        return []
    return [item for item in items if isinstance(item, dict)] if isinstance(items, list) else []


class PostExtraRepository(BaseRepository[PostExtra]):
    """Repository for the post_extra table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(PostExtra, session)
        self.meta_repo = PostMetaRepository(session)

    async def get(self, record_id: int) -> Optional[PostExtra]:
        """Get the extras row of a post, or None."""
        result = await self.session.execute(
            select(PostExtra)
            .where(PostExtra.post_id == record_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def upsert(self, post_id: int, patch: ExtrasPatch, now: datetime) -> None:
        """
        Insert or partially update the extras row of a post.

        Args:
            post_id: Owning post
            patch: Fields to write (UNSET fields are left untouched)
            now: Timestamp for updated_at (and audio_updated_at)
        """
        columns = patch.supplied()
        audio_touched = any(name in columns for name in AUDIO_FIELDS)

        stamps: dict[str, Any] = {"updated_at": now}
        if audio_touched:
            stamps["audio_updated_at"] = now

        stmt = self.dialect_insert().values(
            post_id=post_id,
            **{
                "format": ExtraFormat.STANDARD,
                "audio_status": AudioStatus.NONE,
                **columns,
                **stamps,
            },
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[PostExtra.post_id],
            set_={name: stmt.excluded[name] for name in [*columns, *stamps]},
        )
        await self.session.execute(stmt)

        for column, key in MIRRORED_COLUMNS.items():
            if column in columns:
                value = columns[column]
                if isinstance(value, ExtraFormat):
                    value = value.value
                await self.meta_repo.set_meta(post_id, key, value)

    async def delete(self, record_id: int) -> bool:
        """Remove the extras row of a post."""
        result = await self.session.execute(
            delete(PostExtra).where(PostExtra.post_id == record_id)
        )
        return bool(result.rowcount)
