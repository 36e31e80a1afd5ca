"""
slugify.py
----------
Turn human-readable titles and term names into URL slugs.

Two modes:
    - ASCII (default): accents are folded away (Café → cafe), everything
      outside [a-z0-9] becomes a separator or disappears.
    - keep_unicode: Bengali letters and digits (U+0980..U+09FF) survive
      alongside ASCII, so Bengali tag names keep a readable slug.

The result is never longer than max_length and never starts or ends with a
hyphen. An input with nothing sluggable returns "" and the caller chooses
the fallback ("post" for posts, the raw name for tags).

Usage:
    from inkpress.shared.utils.slugify import slugify

    slugify("Hello World")                       # "hello-world"
    slugify("Crème brûlée!")                     # "creme-brulee"
    slugify("বাংলা খবর", keep_unicode=True)     # "বাংলা-খবর"
"""

import re
import unicodedata

from inkpress.shared.utils.constants import SLUG_MAX_LENGTH

# Unicode dashes and minus signs folded into a plain hyphen
_DASHES = re.compile(r"[\u2010-\u2015\u2212\u2043\ufe58\ufe63\uff0d]")
_ASCII_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_UNICODE_DISALLOWED = re.compile(r"[^\u0980-\u09ffa-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH, keep_unicode: bool = False) -> str:
    """
    Convert text to a URL-safe slug.

    Args:
        text: Input text
        max_length: Maximum slug length
        keep_unicode: Keep Bengali characters instead of dropping them

    Returns:
        Slug, or "" if nothing sluggable remains

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("  --Breaking:  News--  ")
        'breaking-news'
        >>> slugify("!!!")
        ''
    """
    if not text:
        return ""

    text = _DASHES.sub("-", text.strip().lower())

    # Decompose accents; combining marks are then dropped as disallowed
    text = unicodedata.normalize("NFKD", text)
    if keep_unicode:
        text = _UNICODE_DISALLOWED.sub("", text)
    else:
        text = "".join(ch for ch in text if not unicodedata.combining(ch))
        text = _ASCII_DISALLOWED.sub("", text)

    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    text = text.strip("-")

    return text[:max_length].rstrip("-")


def suffixed(slug: str, index: int, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Build the index-th collision candidate for a slug.

    The base is shortened, never the suffix, so a slug already at
    max_length still yields distinct candidates.

    >>> suffixed("hello-world", 2)
    'hello-world-2'
    >>> suffixed("abcdef", 12, max_length=6)
    'abc-12'
    """
    suffix = f"-{index}"
    return slug[: max(max_length - len(suffix), 0)].rstrip("-") + suffix
