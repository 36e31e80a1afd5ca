"""
Inkpress SQLAlchemy Models

This package contains all database models for the Inkpress application.

Model Hierarchy:
================
    Post
       ├── PostMeta[]           (postmeta)
       ├── PostExtra            (post_extra, one row)
       ├── TermRelationship[]   (term_relationships)
       │      └── TermTaxonomy  (term_taxonomy)
       │             └── Term   (terms)
       └── Comment[]            (comments)

    User  ← referenced by Post.post_author

Models Overview:
================
- Base: Base class, timestamp mixin, enum column type
- User: Post author
- Post: Posts, pages and attachments
- PostMeta: Key/value attributes per post
- PostExtra: Presentation + narration attributes per post
- Term / TermTaxonomy / TermRelationship: Categories and tags
- Comment: Reader comments (only deleted by this core)

Usage:
======
    from inkpress.shared.models import Post, TermTaxonomy, PostStatus
"""

from inkpress.shared.models.base import Base, TimestampMixin, str_enum
from inkpress.shared.models.enums import (
    PostStatus,
    PostType,
    TaxonomyKind,
    ExtraFormat,
    AudioStatus,
    MetaKey,
    QUICK_EDIT_STATUSES,
    LISTABLE_STATUSES,
)
from inkpress.shared.models.user import User
from inkpress.shared.models.post import Post
from inkpress.shared.models.post_meta import PostMeta
from inkpress.shared.models.post_extra import PostExtra
from inkpress.shared.models.taxonomy import Term, TermTaxonomy, TermRelationship
from inkpress.shared.models.comment import Comment

__all__ = [
    # Base classes and helpers
    "Base",
    "TimestampMixin",
    "str_enum",
    # Enums
    "PostStatus",
    "PostType",
    "TaxonomyKind",
    "ExtraFormat",
    "AudioStatus",
    "MetaKey",
    "QUICK_EDIT_STATUSES",
    "LISTABLE_STATUSES",
    # Models
    "User",
    "Post",
    "PostMeta",
    "PostExtra",
    "Term",
    "TermTaxonomy",
    "TermRelationship",
    "Comment",
]
