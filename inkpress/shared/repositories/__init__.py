"""
Repositories - Data access layer.

One repository per concern; all of them run on the caller's session so a
service can compose several inside one transaction.
"""

from inkpress.shared.repositories.base import BaseRepository
from inkpress.shared.repositories.post_extra_repository import (
    UNSET,
    ExtrasPatch,
    PostExtraRepository,
    normalize_gallery,
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

__all__ = [
    "BaseRepository",
    "UNSET",
    "ExtrasPatch",
    "PostExtraRepository",
    "normalize_gallery",
    "parse_gallery",
    "MonthBucket",
    "PostListingRepository",
    "PostListRow",
    "PostMetaRepository",
    "PostRepository",
    "TaxonomyRepository",
    "normalize_ids",
    "UserRepository",
]
