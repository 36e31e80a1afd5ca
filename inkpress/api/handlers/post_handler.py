"""
Post Handler

Lifecycle, listing and narration endpoints for posts.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Not-found, validation and conflict errors raised by the services are turned
into JSON responses by the global exception handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from inkpress.api.dependencies import (
    get_narration_service,
    get_post_list_params,
    get_post_service,
)
from inkpress.shared.models.post_extra import PostExtra
from inkpress.shared.schemas.common import MessageResponse, PaginatedResponse, PaginationMeta
from inkpress.shared.schemas.post import (
    AudioStateResponse,
    CreatedPostResponse,
    MonthBucketResponse,
    NarrationRequest,
    NarrationResult,
    PostCreate,
    PostDetailResponse,
    PostListItem,
    PostListParams,
    PostUpdate,
    QuickEdit,
)
from inkpress.shared.services.narration_service import NarrationService
from inkpress.shared.services.post_service import PostService


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════════
# READ
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("", response_model=PaginatedResponse[PostListItem])
async def list_posts(
    params: PostListParams = Depends(get_post_list_params),
    post_service: PostService = Depends(get_post_service),
):
    """
    List posts with filtering, sorting and pagination.

    Query params: q, status (all|publish|draft|pending|future|trash),
    author_id, category_id, category_slug, year_month (YYYY-MM), slug,
    order_by (date|title), order (asc|desc), page, per_page.
    """
    result = await post_service.list_posts(params)
    return PaginatedResponse[PostListItem](
        data=[PostListItem.model_validate(row) for row in result.rows],
        pagination=PaginationMeta.create(
            page=result.page,
            per_page=result.per_page,
            total=result.total,
        ),
    )


@router.get("/months", response_model=list[MonthBucketResponse])
async def month_buckets(
    post_service: PostService = Depends(get_post_service),
):
    """Post counts per month, newest first."""
    buckets = await post_service.month_buckets()
    return [MonthBucketResponse.model_validate(bucket) for bucket in buckets]


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service),
):
    """Get a single post with taxonomy, metadata and extras."""
    detail = await post_service.get_post(post_id)
    return PostDetailResponse.model_validate(detail)


# ═══════════════════════════════════════════════════════════════════════════════
# LIFECYCLE
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    response_model=CreatedPostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    data: PostCreate,
    post_service: PostService = Depends(get_post_service),
):
    """
    Create a post.

    The slug is derived from `slug` or `title` and suffixed (-2, -3, ...)
    when another live post already uses it. A `scheduled_at` in the future
    makes the post `future` regardless of the requested status.
    """
    created = await post_service.create(data)
    return CreatedPostResponse.model_validate(created)


@router.patch("/{post_id}", response_model=MessageResponse)
async def update_post(
    post_id: int,
    data: PostUpdate,
    post_service: PostService = Depends(get_post_service),
):
    """
    Update a post. Omitted fields are untouched; explicit nulls clear
    (`featured_image_id`, `scheduled_at`, `gallery`).
    """
    await post_service.update(post_id, data)
    return MessageResponse(message="Post updated")


@router.patch("/{post_id}/quick-edit", response_model=MessageResponse)
async def quick_edit_post(
    post_id: int,
    data: QuickEdit,
    post_service: PostService = Depends(get_post_service),
):
    """Quick edit: title, slug, status (publish|draft|pending), taxonomy ids."""
    await post_service.quick_edit(post_id, data)
    return MessageResponse(message="Post updated")


@router.post("/{post_id}/trash", response_model=MessageResponse)
async def trash_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service),
):
    """Move a post to trash."""
    await post_service.move_to_trash(post_id)
    return MessageResponse(message="Post moved to trash")


@router.post("/{post_id}/restore", response_model=MessageResponse)
async def restore_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service),
):
    """Restore a trashed post to its previous status."""
    await post_service.restore_from_trash(post_id)
    return MessageResponse(message="Post restored")


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service),
):
    """Permanently delete a post and everything attached to it."""
    await post_service.hard_delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ═══════════════════════════════════════════════════════════════════════════════
# NARRATION
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "/{post_id}/narration",
    response_model=AudioStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def request_narration(
    post_id: int,
    data: NarrationRequest,
    narration_service: NarrationService = Depends(get_narration_service),
):
    """Queue narration audio for a post (ready audio is kept unless overwrite)."""
    extra = await narration_service.request(post_id, data.lang, overwrite=data.overwrite)
    return _audio_state(extra)


@router.post("/{post_id}/narration/result", response_model=AudioStateResponse)
async def record_narration_result(
    post_id: int,
    data: NarrationResult,
    narration_service: NarrationService = Depends(get_narration_service),
):
    """Store the outcome of the audio pipeline (status ready or error)."""
    extra = await narration_service.record_result(
        post_id,
        data.status,
        url=data.url,
        chars=data.chars,
        duration_sec=data.duration_sec,
    )
    return _audio_state(extra)


def _audio_state(extra: Optional[PostExtra]) -> AudioStateResponse:
    if extra is None:
        return AudioStateResponse()
    return AudioStateResponse(
        status=extra.audio_status,
        url=extra.audio_url,
        lang=extra.audio_lang,
        chars=extra.audio_chars,
        duration_sec=extra.audio_duration_sec,
        updated_at=extra.audio_updated_at,
    )
