"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, pagination, error responses
- post: Lifecycle requests, listing and detail responses
- taxonomy: Category and tag administration

Usage:
======
    from inkpress.shared.schemas.post import PostCreate, PostListItem
    from inkpress.shared.schemas.common import PaginatedResponse, ErrorResponse
"""

from inkpress.shared.schemas.common import (
    BaseSchema,
    RequestSchema,
    PaginationMeta,
    PaginatedResponse,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from inkpress.shared.schemas.post import (
    AudioIntent,
    AudioStateResponse,
    CreatedPostResponse,
    GalleryItem,
    GalleryItemResponse,
    MonthBucketResponse,
    NarrationRequest,
    NarrationResult,
    PostCreate,
    PostDetailResponse,
    PostListItem,
    PostListParams,
    PostUpdate,
    QuickEdit,
    TermRef,
)
from inkpress.shared.schemas.taxonomy import (
    CategoryCreate,
    CategoryUpdate,
    TagCreate,
    TagUpdate,
    TermResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "RequestSchema",
    "PaginationMeta",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Post
    "AudioIntent",
    "AudioStateResponse",
    "CreatedPostResponse",
    "GalleryItem",
    "GalleryItemResponse",
    "MonthBucketResponse",
    "NarrationRequest",
    "NarrationResult",
    "PostCreate",
    "PostDetailResponse",
    "PostListItem",
    "PostListParams",
    "PostUpdate",
    "QuickEdit",
    "TermRef",
    # Taxonomy
    "CategoryCreate",
    "CategoryUpdate",
    "TagCreate",
    "TagUpdate",
    "TermResponse",
]
