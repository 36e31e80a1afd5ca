"""
Tests for slug generation.
"""

from inkpress.shared.utils.constants import SLUG_MAX_LENGTH
from inkpress.shared.utils.slugify import slugify, suffixed


class TestSlugify:
    def test_basic_title(self):
        assert slugify("Hello World") == "hello-world"

    def test_accents_are_folded(self):
        assert slugify("Crème brûlée!") == "creme-brulee"

    def test_punctuation_and_outer_hyphens_removed(self):
        assert slugify("  --Breaking:  News--  ") == "breaking-news"

    def test_unicode_dashes_become_hyphens(self):
        assert slugify("2024–2025 season") == "2024-2025-season"

    def test_nothing_sluggable(self):
        assert slugify("!!!") == ""
        assert slugify("") == ""

    def test_bengali_dropped_in_ascii_mode(self):
        assert slugify("বাংলা খবর") == ""

    def test_bengali_kept_in_unicode_mode(self):
        assert slugify("বাংলা খবর", keep_unicode=True) == "বাংলা-খবর"

    def test_truncated_to_max_length(self):
        slug = slugify("a" * 300)
        assert len(slug) == SLUG_MAX_LENGTH

    def test_truncation_never_leaves_trailing_hyphen(self):
        assert slugify("abcd efgh", max_length=5) == "abcd"


class TestSuffixed:
    def test_appends_index(self):
        assert suffixed("hello-world", 2) == "hello-world-2"

    def test_shortens_base_not_suffix(self):
        assert suffixed("abcdef", 12, max_length=6) == "abc-12"

    def test_full_length_slug_gets_distinct_candidates(self):
        base = "a" * SLUG_MAX_LENGTH
        second, third = suffixed(base, 2), suffixed(base, 3)
        assert len(second) == SLUG_MAX_LENGTH
        assert second.endswith("-2")
        assert second != third
