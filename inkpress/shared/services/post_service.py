"""
Post Service

Business logic for the post lifecycle: create, full update, quick edit,
trash, restore, hard delete, plus the read side (listing, month histogram,
detail) and promotion of due scheduled posts.

STATE MACHINE:
==============
                 create / update
                        │
        ┌───────────────┼───────────────┐
        ▼               ▼               ▼
     draft ◄──────► pending ◄──────► publish ◄──── future
        │               │               │   (schedule    ▲
        └───────────────┼───────────────┘    reached)    │
                        │ move_to_trash          scheduled_at in the future
                        ▼
                      trash ──restore_from_trash──► status before trash
                        │
                   hard_delete ──► row and every dependent removed

TRANSACTIONS:
=============
Every mutating method runs inside one unit_of_work: taxonomy references are
validated before the first write, and any exception (validation included)
rolls back every partial write of the operation.

Usage:
======
    from inkpress.shared.services.post_service import PostService

    service = PostService(db)
    created = await service.create(PostCreate(author_id=1, title="Hello World"))
    await service.quick_edit(created.id, QuickEdit(status="publish"))
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.core.clock import Clock, SystemClock
from inkpress.shared.core.exceptions import InkpressException, InvalidCategoryError, PostNotFoundError
from inkpress.shared.core.logging import get_logger
from inkpress.shared.db.session import unit_of_work
from inkpress.shared.models.enums import (
    AudioStatus,
    ExtraFormat,
    MetaKey,
    PostStatus,
    PostType,
    TaxonomyKind,
)
from inkpress.shared.models.post import Post
from inkpress.shared.models.taxonomy import TermTaxonomy
from inkpress.shared.repositories.post_extra_repository import (
    ExtrasPatch,
    PostExtraRepository,
    parse_gallery,
)
from inkpress.shared.repositories.post_listing_repository import (
    MonthBucket,
    PostListingRepository,
    PostListRow,
)
from inkpress.shared.repositories.post_meta_repository import PostMetaRepository
from inkpress.shared.repositories.post_repository import PostRepository
from inkpress.shared.repositories.taxonomy_repository import TaxonomyRepository, normalize_ids
from inkpress.shared.repositories.user_repository import UserRepository
from inkpress.shared.schemas.post import PostCreate, PostListParams, PostUpdate, QuickEdit
from inkpress.shared.services.narration_service import NarrationService
from inkpress.shared.services.schedule_service import ScheduleResolver, ZonedTime
from inkpress.shared.services.slug_service import SlugService
from inkpress.shared.utils.constants import DEFAULT_POST_SLUG


logger = get_logger("inkpress.posts")

EXTRA_FIELDS = ("subtitle", "highlight", "format", "gallery", "video_embed")


def leaves_trash(current: PostStatus, new: Optional[PostStatus]) -> bool:
    """True when a status change takes a post out of trash."""
    return current == PostStatus.TRASH and new is not None and new != PostStatus.TRASH


@dataclass
class CreatedPost:
    """Result of a create."""

    id: int
    slug: str
    status: PostStatus


@dataclass
class PaginatedPosts:
    """One page of the post listing."""

    rows: list[PostListRow]
    total: int
    page: int
    per_page: int

    @property
    def has_next(self) -> bool:
        return self.page * self.per_page < self.total


@dataclass
class AudioState:
    status: AudioStatus = AudioStatus.NONE
    url: Optional[str] = None
    lang: Optional[str] = None
    chars: Optional[int] = None
    duration_sec: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass
class PostDetail:
    """A post assembled from its row, taxonomy, metadata and extras."""

    id: int
    author_id: int
    author_name: Optional[str]
    title: str
    content: str
    excerpt: str
    status: PostStatus
    slug: str
    post_date: datetime
    post_date_gmt: datetime
    post_modified: datetime
    post_modified_gmt: datetime
    categories: list[TermTaxonomy] = field(default_factory=list)
    tags: list[TermTaxonomy] = field(default_factory=list)
    featured_image_id: Optional[int] = None
    featured_image_url: Optional[str] = None
    scheduled_at: Optional[str] = None
    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: ExtraFormat = ExtraFormat.STANDARD
    gallery: list[dict] = field(default_factory=list)
    video_embed: Optional[str] = None
    audio: AudioState = field(default_factory=AudioState)


class PostService:
    """
    Service for post lifecycle business logic.

    Args:
        session: Async database session (one per request or job)
        clock: Source of "now" (SystemClock when omitted)
        resolver: Schedule resolver (built from the clock when omitted)
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Optional[Clock] = None,
        resolver: Optional[ScheduleResolver] = None,
    ) -> None:
        self.session = session
        self.clock = clock or SystemClock()
        self.resolver = resolver or ScheduleResolver(self.clock)
        self.post_repo = PostRepository(session)
        self.meta_repo = PostMetaRepository(session)
        self.extra_repo = PostExtraRepository(session)
        self.taxonomy_repo = TaxonomyRepository(session)
        self.listing_repo = PostListingRepository(session)
        self.user_repo = UserRepository(session)
        self.slugs = SlugService(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # VALIDATION HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _require_bindings(self, kind: TaxonomyKind, ids: Optional[Iterable[int]]) -> None:
        """Reject ids that are not bindings of the given kind."""
        wanted = normalize_ids(ids)
        existing = await self.taxonomy_repo.existing_ids(kind, wanted)
        missing = [ttid for ttid in wanted if ttid not in existing]
        if missing:
            label = "category" if kind == TaxonomyKind.CATEGORY else "tag"
            raise InvalidCategoryError(
                f"Unknown {label} id",
                details={f"{label}_ids": missing},
            )

    async def _get_or_raise(self, post_id: int) -> Post:
        post = await self.post_repo.get(post_id)
        if post is None or post.post_type != PostType.POST.value:
            raise PostNotFoundError(post_id)
        return post

    async def _tag_ids_for_names(self, names: Optional[Iterable[str]]) -> list[int]:
        ids = []
        for name in names or ():
            if not (name or "").strip():
                continue
            ids.append(await self.taxonomy_repo.get_or_create_tag(name))
        return ids

    @staticmethod
    def _dates(stamp: ZonedTime) -> dict:
        return {"post_date": stamp.local, "post_date_gmt": stamp.absolute}

    @staticmethod
    def _modified(stamp: ZonedTime) -> dict:
        return {"post_modified": stamp.local, "post_modified_gmt": stamp.absolute}

    async def _slug_leaving_trash(self, post: Post) -> str:
        """Slug for a post coming back from trash; another live post may own it by now."""
        return await self.slugs.ensure_unique_slug(
            post.post_name or post.post_title, exclude_id=post.id
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, data: PostCreate) -> CreatedPost:
        """
        Create a post with its taxonomy, featured image and extras.

        Flow:
        1. Validate category ids (nothing written yet)
        2. Resolve the schedule: a future instant forces status=future, a past
           one keeps the requested status; dates follow the schedule
        3. Allocate a unique slug from slug or title
        4. Insert the row, then _scheduled_at, categories, tags (created on
           demand), _thumbnail_id and the extras row
        5. After commit, queue narration if the payload asked for it

        Returns:
            CreatedPost with the stored status

        Raises:
            InvalidCategoryError: If a category id does not exist
        """
        async with unit_of_work(self.session):
            await self._require_bindings(TaxonomyKind.CATEGORY, data.category_ids)

            now = self.resolver.now()
            status = data.status
            dated = now
            schedule: Optional[ZonedTime] = None
            if data.scheduled_at is not None:
                schedule = self.resolver.resolve(data.scheduled_at)
                dated = schedule
                if schedule.is_future:
                    status = PostStatus.FUTURE

            slug = await self.slugs.ensure_unique_slug(data.slug or data.title)

            post = await self.post_repo.create(
                post_author=data.author_id,
                post_title=data.title,
                post_content=data.content,
                post_excerpt=data.excerpt,
                post_status=status,
                post_name=slug,
                post_type=PostType.POST.value,
                **self._dates(dated),
                **self._modified(now),
            )

            if schedule is not None:
                await self.meta_repo.set_meta(
                    post.id, MetaKey.SCHEDULED_AT, self.resolver.format_local(schedule.local)
                )

            categories = await self.taxonomy_repo.replace_relationships(
                post.id, TaxonomyKind.CATEGORY, data.category_ids
            )
            tag_ids = await self._tag_ids_for_names(data.tag_names)
            tags = await self.taxonomy_repo.replace_relationships(post.id, TaxonomyKind.TAG, tag_ids)

            if data.featured_image_id is not None and data.featured_image_id > 0:
                await self.meta_repo.set_meta(
                    post.id, MetaKey.THUMBNAIL_ID, str(data.featured_image_id)
                )

            await self.extra_repo.upsert(
                post.id,
                ExtrasPatch(
                    subtitle=data.subtitle,
                    highlight=data.highlight,
                    format=data.format,
                    gallery=data.gallery,
                    video_embed=data.video_embed,
                ),
                self.clock.now(),
            )

            created = CreatedPost(id=post.id, slug=post.post_name, status=post.post_status)

        logger.info(
            "Post created",
            post_id=created.id,
            slug=created.slug,
            status=created.status.value,
            categories=len(categories),
            tags=len(tags),
        )

        if data.audio is not None and data.audio.generate:
            await NarrationService(self.session, self.clock).request(
                created.id, data.audio.lang, overwrite=data.audio.overwrite
            )

        return created

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(self, post_id: int, data: PostUpdate) -> None:
        """
        Apply a partial update. Only fields present in the payload are written.

        Schedule rules:
        - scheduled_at null: dates reset to now, _scheduled_at cleared,
          status as supplied
        - scheduled_at value: dates follow the schedule; status becomes future
          when the instant is ahead of now, else the supplied status or publish
        - a status leaving trash re-checks the slug against live posts

        Raises:
            PostNotFoundError: If the post does not exist
            InvalidCategoryError: If a category id does not exist
        """
        supplied = data.model_fields_set

        async with unit_of_work(self.session):
            post = await self._get_or_raise(post_id)
            if "category_ids" in supplied:
                await self._require_bindings(TaxonomyKind.CATEGORY, data.category_ids)

            now = self.resolver.now()
            changes: dict = {}

            if data.title is not None:
                changes["post_title"] = data.title
            if data.content is not None:
                changes["post_content"] = data.content
            if data.excerpt is not None:
                changes["post_excerpt"] = data.excerpt
            if "slug" in supplied:
                changes["post_name"] = await self.slugs.ensure_unique_slug(
                    data.slug or data.title or post.post_title or DEFAULT_POST_SLUG,
                    exclude_id=post_id,
                )

            status = data.status
            if "scheduled_at" in supplied:
                if data.scheduled_at is None:
                    changes.update(self._dates(now))
                    await self.meta_repo.set_meta(post_id, MetaKey.SCHEDULED_AT, None)
                else:
                    schedule = self.resolver.resolve(data.scheduled_at)
                    changes.update(self._dates(schedule))
                    status = PostStatus.FUTURE if schedule.is_future else (data.status or PostStatus.PUBLISH)
                    await self.meta_repo.set_meta(
                        post_id, MetaKey.SCHEDULED_AT, self.resolver.format_local(schedule.local)
                    )
            if status is not None:
                changes["post_status"] = status
                if leaves_trash(post.post_status, status) and "post_name" not in changes:
                    changes["post_name"] = await self._slug_leaving_trash(post)

            if supplied:
                changes.update(self._modified(now))
                await self.post_repo.update(post_id, **changes)

            if "category_ids" in supplied:
                await self.taxonomy_repo.replace_relationships(
                    post_id, TaxonomyKind.CATEGORY, data.category_ids
                )
            if "tag_names" in supplied:
                tag_ids = await self._tag_ids_for_names(data.tag_names)
                await self.taxonomy_repo.replace_relationships(post_id, TaxonomyKind.TAG, tag_ids)

            if "featured_image_id" in supplied:
                if data.featured_image_id is None:
                    await self.meta_repo.set_meta(post_id, MetaKey.THUMBNAIL_ID, None)
                elif data.featured_image_id > 0:
                    await self.meta_repo.set_meta(
                        post_id, MetaKey.THUMBNAIL_ID, str(data.featured_image_id)
                    )

            patch = ExtrasPatch(
                **{name: getattr(data, name) for name in EXTRA_FIELDS if name in supplied}
            )
            if not patch.is_empty():
                await self.extra_repo.upsert(post_id, patch, self.clock.now())

        logger.info(
            "Post updated",
            post_id=post_id,
            status=changes.get("post_status", post.post_status).value,
            fields=sorted(supplied),
        )

    async def quick_edit(self, post_id: int, data: QuickEdit) -> None:
        """
        Narrow edit: title, slug, status (publish/draft/pending) and
        taxonomy by binding id. No tag creation on this path.

        The slug is regenerated only when a slug is supplied, or when a
        title is supplied for a post that has no slug yet.

        Raises:
            PostNotFoundError: If the post does not exist
            InvalidCategoryError: If a category or tag id does not exist
        """
        async with unit_of_work(self.session):
            post = await self._get_or_raise(post_id)
            if data.category_ids is not None:
                await self._require_bindings(TaxonomyKind.CATEGORY, data.category_ids)
            if data.tag_ids is not None:
                await self._require_bindings(TaxonomyKind.TAG, data.tag_ids)

            changes: dict = {}
            if data.title is not None:
                changes["post_title"] = data.title

            if data.slug is not None:
                changes["post_name"] = await self.slugs.ensure_unique_slug(
                    data.slug or data.title or post.post_title or DEFAULT_POST_SLUG,
                    exclude_id=post_id,
                )
            elif data.title and not post.post_name:
                changes["post_name"] = await self.slugs.ensure_unique_slug(data.title, exclude_id=post_id)

            if data.status is not None:
                changes["post_status"] = data.status
                if leaves_trash(post.post_status, data.status) and "post_name" not in changes:
                    changes["post_name"] = await self._slug_leaving_trash(post)

            if changes:
                changes.update(self._modified(self.resolver.now()))
                await self.post_repo.update(post_id, **changes)

            if data.category_ids is not None:
                await self.taxonomy_repo.replace_relationships(
                    post_id, TaxonomyKind.CATEGORY, data.category_ids
                )
            if data.tag_ids is not None:
                await self.taxonomy_repo.replace_relationships(post_id, TaxonomyKind.TAG, data.tag_ids)

        logger.info("Post quick-edited", post_id=post_id, fields=sorted(data.model_fields_set))

    # ═══════════════════════════════════════════════════════════════════════════
    # TRASH / RESTORE / DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def move_to_trash(self, post_id: int) -> None:
        """
        Move a post to trash, remembering its status and the trash time.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        async with unit_of_work(self.session):
            post = await self._get_or_raise(post_id)
            if post.post_status == PostStatus.TRASH:
                logger.debug("Post already in trash", post_id=post_id)
                return

            previous = post.post_status
            await self.meta_repo.set_meta(post_id, MetaKey.TRASH_STATUS, previous.value)
            await self.meta_repo.set_meta(
                post_id, MetaKey.TRASH_TIME, str(int(self.clock.now().timestamp()))
            )
            await self.post_repo.update(
                post_id,
                post_status=PostStatus.TRASH,
                **self._modified(self.resolver.now()),
            )

        logger.info("Post trashed", post_id=post_id, previous_status=previous.value)

    async def restore_from_trash(self, post_id: int) -> None:
        """
        Restore a trashed post to the status it had before (draft if unknown).
        The slug is checked again, since another live post may have taken it
        while this one sat in trash.

        A missing or non-trashed post is left alone.
        """
        async with unit_of_work(self.session):
            post = await self.post_repo.get(post_id)
            if post is None or post.post_status != PostStatus.TRASH:
                logger.debug("Nothing to restore", post_id=post_id)
                return

            saved = await self.meta_repo.get_meta(post_id, MetaKey.TRASH_STATUS)
            try:
                status = PostStatus(saved) if saved else PostStatus.DRAFT
            except ValueError:
                status = PostStatus.DRAFT
            if status == PostStatus.TRASH:
                status = PostStatus.DRAFT

            await self.post_repo.update(
                post_id,
                post_status=status,
                post_name=await self._slug_leaving_trash(post),
                **self._modified(self.resolver.now()),
            )
            await self.meta_repo.set_meta(post_id, MetaKey.TRASH_STATUS, None)
            await self.meta_repo.set_meta(post_id, MetaKey.TRASH_TIME, None)

        logger.info("Post restored", post_id=post_id, status=status.value)

    async def hard_delete(self, post_id: int) -> None:
        """
        Erase a post and everything hanging off it: relationships (with
        count recomputation), metadata, comments and the extras row.

        A missing post is a no-op.
        """
        async with unit_of_work(self.session):
            if not await self.post_repo.exists(post_id):
                logger.debug("Nothing to delete", post_id=post_id)
                return

            detached = await self.taxonomy_repo.delete_for_post(post_id)
            meta_rows = await self.meta_repo.delete_for_post(post_id)
            comments = await self.post_repo.delete_comments(post_id)
            await self.extra_repo.delete(post_id)
            await self.post_repo.delete(post_id)

        logger.info(
            "Post deleted",
            post_id=post_id,
            relationships=len(detached),
            meta_rows=meta_rows,
            comments=comments,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # SCHEDULED PUBLISHING
    # ═══════════════════════════════════════════════════════════════════════════

    async def publish_due(self, limit: int = 100) -> list[int]:
        """
        Promote future posts whose time has come to publish.

        Each post goes through update() in its own transaction; a failure is
        logged and the remaining posts are still processed.

        Returns:
            Ids that were published
        """
        now = self.resolver.now()
        due = await self.post_repo.due_scheduled_ids(now.absolute, limit=limit)
        published = []
        for post_id in due:
            try:
                await self.update(post_id, PostUpdate(status=PostStatus.PUBLISH))
            except (InkpressException, SQLAlchemyError):
                logger.exception("Failed to publish scheduled post", post_id=post_id)
                continue
            published.append(post_id)

        if due:
            logger.info("Scheduled posts published", due=len(due), published=len(published))
        return published

    # ═══════════════════════════════════════════════════════════════════════════
    # READ SIDE
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_posts(self, params: PostListParams) -> PaginatedPosts:
        """Filtered, sorted, paged listing."""
        rows, total = await self.listing_repo.list_posts(
            q=params.q,
            status=params.status,
            author_id=params.author_id,
            category_id=params.category_id,
            category_slug=params.category_slug,
            year_month=params.year_month,
            slug=params.slug,
            order_by=params.order_by,
            order=params.order,
            offset=params.offset,
            limit=params.per_page,
        )
        return PaginatedPosts(rows=rows, total=total, page=params.page, per_page=params.per_page)

    async def month_buckets(self) -> list[MonthBucket]:
        return await self.listing_repo.month_buckets()

    async def get_post(self, post_id: int) -> PostDetail:
        """
        Load one post with taxonomy, featured image, schedule and extras.

        Raises:
            PostNotFoundError: If the post does not exist
        """
        post = await self._get_or_raise(post_id)
        meta = await self.meta_repo.get_all(post_id)
        extra = await self.extra_repo.get(post_id)

        thumbnail = meta.get(MetaKey.THUMBNAIL_ID.value)
        featured_image_id = int(thumbnail) if thumbnail and thumbnail.isdigit() else None
        featured_image_url = (
            await self.post_repo.get_attachment_url(featured_image_id) if featured_image_id else None
        )

        detail = PostDetail(
            id=post.id,
            author_id=post.post_author,
            author_name=await self.user_repo.get_display_name(post.post_author),
            title=post.post_title,
            content=post.post_content,
            excerpt=post.post_excerpt,
            status=post.post_status,
            slug=post.post_name,
            post_date=post.post_date,
            post_date_gmt=post.post_date_gmt,
            post_modified=post.post_modified,
            post_modified_gmt=post.post_modified_gmt,
            categories=await self.taxonomy_repo.bindings_for_post(post_id, TaxonomyKind.CATEGORY),
            tags=await self.taxonomy_repo.bindings_for_post(post_id, TaxonomyKind.TAG),
            featured_image_id=featured_image_id,
            featured_image_url=featured_image_url,
            scheduled_at=meta.get(MetaKey.SCHEDULED_AT.value),
        )
        if extra is not None:
            detail.subtitle = extra.subtitle
            detail.highlight = extra.highlight
            detail.format = extra.format
            detail.gallery = parse_gallery(extra.gallery_json)
            detail.video_embed = extra.video_embed
            detail.audio = AudioState(
                status=extra.audio_status,
                url=extra.audio_url,
                lang=extra.audio_lang,
                chars=extra.audio_chars,
                duration_sec=extra.audio_duration_sec,
                updated_at=extra.audio_updated_at,
            )
        return detail
