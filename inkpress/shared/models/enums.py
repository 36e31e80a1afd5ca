"""
Enums used across the application.
"""

from enum import Enum


class PostStatus(str, Enum):
    """Lifecycle state of a post."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    TRASH = "trash"
    FUTURE = "future"


# Statuses a quick edit may set
QUICK_EDIT_STATUSES = frozenset({PostStatus.PUBLISH, PostStatus.DRAFT, PostStatus.PENDING})

# Statuses shown by listings when the caller asks for "all"
LISTABLE_STATUSES = frozenset(
    {PostStatus.PUBLISH, PostStatus.DRAFT, PostStatus.PENDING, PostStatus.FUTURE}
)


class PostType(str, Enum):
    """Kind of row stored in the posts table."""

    POST = "post"
    PAGE = "page"
    ATTACHMENT = "attachment"


class TaxonomyKind(str, Enum):
    """Taxonomy a term is bound to."""

    CATEGORY = "category"
    TAG = "post_tag"


class ExtraFormat(str, Enum):
    """Presentation format of a post."""

    STANDARD = "standard"
    GALLERY = "gallery"
    VIDEO = "video"


class AudioStatus(str, Enum):
    """State of the narration-audio pipeline for a post."""

    NONE = "none"
    QUEUED = "queued"
    READY = "ready"
    ERROR = "error"


class MetaKey(str, Enum):
    """
    Every postmeta key the engine reads or writes.

    The metadata table itself is a free key/value store shared with other
    consumers; inside this codebase keys are always spelled through here.
    """

    SCHEDULED_AT = "_scheduled_at"
    THUMBNAIL_ID = "_thumbnail_id"
    TRASH_STATUS = "_wp_trash_meta_status"
    TRASH_TIME = "_wp_trash_meta_time"

    # Read-compatibility mirrors of the post_extra row
    SUBTITLE = "_subtitle"
    HIGHLIGHT = "_highlight"
    FORMAT = "_format"
    GALLERY = "_gallery"
    VIDEO = "_video"
