"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- slugify: Title/name to URL slug conversion
- constants: Application constants

Usage:
======
    from inkpress.shared.utils.slugify import slugify
    from inkpress.shared.utils.constants import DEFAULT_PAGE_SIZE
"""

from inkpress.shared.utils.slugify import slugify, suffixed
from inkpress.shared.utils.constants import (
    SLUG_MAX_LENGTH,
    DEFAULT_POST_SLUG,
    FIRST_SLUG_SUFFIX,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    NAME_LIST_SEPARATOR,
    LOCAL_DATETIME_FORMAT,
)

__all__ = [
    "slugify",
    "suffixed",
    "SLUG_MAX_LENGTH",
    "DEFAULT_POST_SLUG",
    "FIRST_SLUG_SUFFIX",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "NAME_LIST_SEPARATOR",
    "LOCAL_DATETIME_FORMAT",
]
