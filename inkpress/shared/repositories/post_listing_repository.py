"""
Post Listing Repository

Read-only projection of posts for dashboards and archive pages: filtered,
sorted, paged rows enriched with author, taxonomy names, thumbnail and
extras, plus a month histogram.

Query Shape:
============
    SELECT p.*, u.display_name, att.guid AS thumbnail_url, ex.*
    FROM posts p
    LEFT JOIN users u          ON u.id = p.post_author
    LEFT JOIN postmeta thumb   ON thumb.post_id = p.id AND thumb.meta_key = '_thumbnail_id'
    LEFT JOIN posts att        ON att.id = thumb.meta_value AND att.post_type = 'attachment'
    LEFT JOIN post_extra ex    ON ex.post_id = p.id
    WHERE p.post_type = 'post' AND <filters>
    ORDER BY p.post_date|p.post_title <dir>, p.id <dir>
    LIMIT :per_page OFFSET :offset

Category and tag names are fetched for the page in one extra query and
joined with ", " in Python, which keeps the SQL portable across databases.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import String, and_, cast, exists, extract, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from inkpress.shared.core.exceptions import ValidationError
from inkpress.shared.models.enums import (
    LISTABLE_STATUSES,
    ExtraFormat,
    MetaKey,
    PostType,
    TaxonomyKind,
)
from inkpress.shared.models.post import Post
from inkpress.shared.models.post_extra import PostExtra
from inkpress.shared.models.post_meta import PostMeta
from inkpress.shared.models.taxonomy import Term, TermRelationship, TermTaxonomy
from inkpress.shared.models.user import User
from inkpress.shared.repositories.post_extra_repository import parse_gallery
from inkpress.shared.repositories.taxonomy_repository import TaxonomyRepository
from inkpress.shared.utils.constants import NAME_LIST_SEPARATOR
from inkpress.shared.utils.slugify import slugify


@dataclass
class PostListRow:
    """One enriched row of a post listing."""

    id: int
    title: str
    slug: str
    status: str
    author_id: int
    author_name: Optional[str]
    post_date: datetime
    post_modified: datetime
    categories: str = ""
    tags: str = ""
    thumbnail_url: Optional[str] = None
    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: str = ExtraFormat.STANDARD.value
    gallery: list[dict[str, Any]] = field(default_factory=list)
    video_embed: Optional[str] = None


@dataclass
class MonthBucket:
    """Number of listable posts dated in one month."""

    ym: str
    label: str
    total: int


def month_range(year_month: str) -> tuple[datetime, datetime]:
    """
    Half-open [start, end) range of a "YYYY-MM" month.

    >>> month_range("2024-12")
    (datetime.datetime(2024, 12, 1, 0, 0), datetime.datetime(2025, 1, 1, 0, 0))
    """
    try:
        year_text, month_text = year_month.split("-", 1)
        year, month = int(year_text), int(month_text)
        start = datetime(year, month, 1)
    except ValueError as e:
        raise ValidationError(
            "year_month must look like YYYY-MM",
            details={"year_month": year_month},
        ) from e
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


class PostListingRepository:
    """Read-side queries over posts; never writes."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.taxonomy_repo = TaxonomyRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # FILTERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _conditions(
        self,
        *,
        q: Optional[str],
        status: str,
        author_id: Optional[int],
        category_id: Optional[int],
        category_slug: Optional[str],
        year_month: Optional[str],
        slug: Optional[str],
    ) -> list[Any]:
        conditions: list[Any] = [Post.post_type == PostType.POST.value]

        if status == "all":
            conditions.append(Post.post_status.in_(sorted(LISTABLE_STATUSES)))
        else:
            conditions.append(Post.post_status == status)

        if slug:
            conditions.append(Post.post_name == slug)

        if q:
            like = f"%{q}%"
            conditions.append(or_(Post.post_title.like(like), Post.post_content.like(like)))

        if author_id:
            conditions.append(Post.post_author == author_id)

        if year_month:
            start, end = month_range(year_month)
            conditions.append(and_(Post.post_date >= start, Post.post_date < end))

        if category_id or category_slug:
            in_category = (
                select(TermRelationship.object_id)
                .join(TermTaxonomy, TermTaxonomy.id == TermRelationship.term_taxonomy_id)
                .join(Term, Term.id == TermTaxonomy.term_id)
                .where(
                    TermRelationship.object_id == Post.id,
                    TermTaxonomy.taxonomy == TaxonomyKind.CATEGORY,
                )
            )
            if category_id:
                in_category = in_category.where(TermTaxonomy.id == category_id)
            if category_slug:
                in_category = in_category.where(Term.slug == category_slug)
            conditions.append(exists(in_category.correlate(Post)))

        return conditions

    # ═══════════════════════════════════════════════════════════════════════════
    # LISTING
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_posts(
        self,
        *,
        q: Optional[str] = None,
        status: str = "all",
        author_id: Optional[int] = None,
        category_id: Optional[int] = None,
        category_slug: Optional[str] = None,
        year_month: Optional[str] = None,
        slug: Optional[str] = None,
        order_by: str = "date",
        order: str = "desc",
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[PostListRow], int]:
        """
        Filtered, sorted page of posts plus the total matching count.

        Args:
            q: Substring matched against title or content
            status: A post status, or "all" for every listable status
            author_id: Only posts by this author
            category_id / category_slug: Only posts in this category
            year_month: "YYYY-MM" month of post_date
            slug: Exact slug
            order_by: "date" or "title"
            order: "asc" or "desc"
            offset / limit: Paging window

        Returns:
            (rows, total)
        """
        conditions = self._conditions(
            q=q,
            status=status,
            author_id=author_id,
            category_id=category_id,
            category_slug=category_slug,
            year_month=year_month,
            slug=slug,
        )

        thumb = aliased(PostMeta)
        attachment = aliased(Post)
        sort_column = Post.post_title if order_by == "title" else Post.post_date
        descending = order.lower() != "asc"

        query = (
            select(
                Post.id,
                Post.post_title,
                Post.post_name,
                Post.post_status,
                Post.post_author,
                Post.post_date,
                Post.post_modified,
                User.display_name,
                attachment.guid.label("thumbnail_url"),
                PostExtra.subtitle,
                PostExtra.highlight,
                PostExtra.format,
                PostExtra.gallery_json,
                PostExtra.video_embed,
            )
            .outerjoin(User, User.id == Post.post_author)
            .outerjoin(
                thumb,
                and_(thumb.post_id == Post.id, thumb.meta_key == MetaKey.THUMBNAIL_ID.value),
            )
            .outerjoin(
                attachment,
                and_(
                    cast(attachment.id, String) == thumb.meta_value,
                    attachment.post_type == PostType.ATTACHMENT.value,
                ),
            )
            .outerjoin(PostExtra, PostExtra.post_id == Post.id)
            .where(*conditions)
            .order_by(
                sort_column.desc() if descending else sort_column.asc(),
                Post.id.desc() if descending else Post.id.asc(),
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        records = result.all()

        total_result = await self.session.execute(
            select(func.count(func.distinct(Post.id))).where(*conditions)
        )
        total = total_result.scalar() or 0

        names = await self.taxonomy_repo.names_for_posts([r.id for r in records])
        rows = [self._to_row(record, names.get(record.id, {})) for record in records]
        return rows, total

    @staticmethod
    def _to_row(record: Any, names: dict[TaxonomyKind, list[str]]) -> PostListRow:
        return PostListRow(
            id=record.id,
            title=record.post_title,
            slug=record.post_name or slugify(record.post_title),
            status=record.post_status.value,
            author_id=record.post_author,
            author_name=record.display_name,
            post_date=record.post_date,
            post_modified=record.post_modified,
            categories=NAME_LIST_SEPARATOR.join(names.get(TaxonomyKind.CATEGORY, [])),
            tags=NAME_LIST_SEPARATOR.join(names.get(TaxonomyKind.TAG, [])),
            thumbnail_url=record.thumbnail_url,
            subtitle=record.subtitle,
            highlight=record.highlight,
            format=(record.format or ExtraFormat.STANDARD).value,
            gallery=parse_gallery(record.gallery_json),
            video_embed=record.video_embed,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # MONTH HISTOGRAM
    # ═══════════════════════════════════════════════════════════════════════════

    async def month_buckets(self) -> list[MonthBucket]:
        """
        Count listable posts per month of post_date, newest month first.

        Returns:
            [MonthBucket(ym="2025-03", label="March 2025", total=4), ...]
        """
        year = extract("year", Post.post_date).label("year")
        month = extract("month", Post.post_date).label("month")
        result = await self.session.execute(
            select(year, month, func.count(Post.id).label("total"))
            .where(
                Post.post_type == PostType.POST.value,
                Post.post_status.in_(sorted(LISTABLE_STATUSES)),
            )
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
        )
        buckets = []
        for row in result.all():
            y, m = int(row.year), int(row.month)
            buckets.append(
                MonthBucket(
                    ym=f"{y:04d}-{m:02d}",
                    label=date(y, m, 1).strftime("%B %Y"),
                    total=int(row.total),
                )
            )
        return buckets
