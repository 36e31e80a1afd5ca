"""
Post Schemas

Request bodies for the lifecycle operations and the shapes returned by the
listing and detail endpoints.

Partial updates:
================
PostUpdate fields all default to None. The service reads
`data.model_fields_set` to tell "omitted" from "explicitly null":

    {"featured_image_id": null}   → thumbnail cleared
    {}                            → thumbnail untouched
    {"scheduled_at": null}        → schedule cleared, dates reset to now
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from inkpress.shared.models.enums import QUICK_EDIT_STATUSES, AudioStatus, ExtraFormat, PostStatus
from inkpress.shared.schemas.common import BaseSchema, RequestSchema
from inkpress.shared.utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class GalleryItem(RequestSchema):
    """One gallery image: an attachment id and, optionally, its URL."""

    id: int
    url: Optional[str] = None


GalleryInput = list[Union[GalleryItem, int]]


class AudioIntent(RequestSchema):
    """Ask for narration audio once the post is saved."""

    generate: bool = False
    lang: str = Field(default="bn", min_length=2, max_length=10)
    overwrite: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# REQUESTS
# ═══════════════════════════════════════════════════════════════════════════════


class PostCreate(RequestSchema):
    """Request to create a post."""

    author_id: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=200)
    content: str = ""
    excerpt: str = ""
    status: PostStatus = PostStatus.DRAFT
    slug: Optional[str] = Field(default=None, max_length=200)

    category_ids: list[int] = Field(default_factory=list, description="Category term_taxonomy ids")
    tag_names: list[str] = Field(default_factory=list, description="Tag names, created on demand")
    featured_image_id: Optional[int] = None

    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: ExtraFormat = ExtraFormat.STANDARD
    gallery: Optional[GalleryInput] = None
    video_embed: Optional[str] = None

    scheduled_at: Optional[datetime] = Field(
        default=None,
        description="Naive = site-local wall clock, with offset/Z = absolute",
    )
    audio: Optional[AudioIntent] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @model_validator(mode="after")
    def video_needs_embed(self) -> "PostCreate":
        if self.format == ExtraFormat.VIDEO and not (self.video_embed or "").strip():
            raise ValueError("video_embed is required when format is video")
        return self


class PostUpdate(RequestSchema):
    """
    Request to update a post. Only supplied fields are written.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    status: Optional[PostStatus] = None
    slug: Optional[str] = Field(default=None, max_length=200)

    category_ids: Optional[list[int]] = None
    tag_names: Optional[list[str]] = None
    featured_image_id: Optional[int] = None

    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: Optional[ExtraFormat] = None
    gallery: Optional[GalleryInput] = None
    video_embed: Optional[str] = None

    scheduled_at: Optional[datetime] = None


class QuickEdit(RequestSchema):
    """Request for the narrow quick-edit path."""

    title: Optional[str] = Field(default=None, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    status: Optional[PostStatus] = None
    category_ids: Optional[list[int]] = None
    tag_ids: Optional[list[int]] = Field(default=None, description="Tag term_taxonomy ids")

    @field_validator("status")
    @classmethod
    def status_allowed(cls, value: Optional[PostStatus]) -> Optional[PostStatus]:
        if value is not None and value not in QUICK_EDIT_STATUSES:
            raise ValueError("quick edit can only set publish, draft or pending")
        return value


class NarrationRequest(RequestSchema):
    """Request narration audio for an existing post."""

    lang: str = Field(default="bn", min_length=2, max_length=10)
    overwrite: bool = False


class PostListParams(BaseModel):
    """Query parameters of the post listing."""

    q: Optional[str] = None
    status: Literal["all", "publish", "draft", "pending", "future", "trash"] = "all"
    author_id: Optional[int] = Field(default=None, ge=1)
    category_id: Optional[int] = Field(default=None, ge=1)
    category_slug: Optional[str] = None
    year_month: Optional[str] = Field(default=None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    slug: Optional[str] = None
    order_by: Literal["date", "title"] = "date"
    order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class CreatedPostResponse(BaseSchema):
    """Result of a create: the id, the allocated slug and the stored status."""

    id: int
    slug: str
    status: PostStatus


class GalleryItemResponse(BaseSchema):
    id: int
    url: Optional[str] = None


class PostListItem(BaseSchema):
    """One row of the post listing."""

    id: int
    title: str
    slug: str
    status: PostStatus
    author_id: int
    author_name: Optional[str] = None
    post_date: datetime
    post_modified: datetime
    categories: str = ""
    tags: str = ""
    thumbnail_url: Optional[str] = None
    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: ExtraFormat = ExtraFormat.STANDARD
    gallery: list[GalleryItemResponse] = Field(default_factory=list)
    video_embed: Optional[str] = None


class MonthBucketResponse(BaseSchema):
    """Posts per month, for archive navigation."""

    ym: str = Field(description="YYYY-MM")
    label: str = Field(description='Human label, e.g. "March 2025"')
    total: int


class TermRef(BaseSchema):
    id: int
    name: str
    slug: str


class NarrationResult(RequestSchema):
    """Outcome reported by the audio pipeline."""

    status: AudioStatus = Field(description="ready or error")
    url: Optional[str] = None
    chars: Optional[int] = Field(default=None, ge=0)
    duration_sec: Optional[int] = Field(default=None, ge=0)


class AudioStateResponse(BaseSchema):
    """Narration pipeline state of a post."""

    status: AudioStatus = AudioStatus.NONE
    url: Optional[str] = None
    lang: Optional[str] = None
    chars: Optional[int] = None
    duration_sec: Optional[int] = None
    updated_at: Optional[datetime] = None


class PostDetailResponse(BaseSchema):
    """A single post with its taxonomy, metadata and extras."""

    id: int
    author_id: int
    author_name: Optional[str] = None
    title: str
    content: str
    excerpt: str
    status: PostStatus
    slug: str
    post_date: datetime
    post_date_gmt: datetime
    post_modified: datetime
    post_modified_gmt: datetime
    categories: list[TermRef] = Field(default_factory=list)
    tags: list[TermRef] = Field(default_factory=list)
    featured_image_id: Optional[int] = None
    featured_image_url: Optional[str] = None
    scheduled_at: Optional[str] = None
    subtitle: Optional[str] = None
    highlight: Optional[str] = None
    format: ExtraFormat = ExtraFormat.STANDARD
    gallery: list[GalleryItemResponse] = Field(default_factory=list)
    video_embed: Optional[str] = None
    audio: AudioStateResponse = Field(default_factory=AudioStateResponse)
