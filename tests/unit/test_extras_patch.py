"""
Tests for gallery normalization and the extras patch column mapping.
"""

import json

from inkpress.shared.models.enums import AudioStatus, ExtraFormat
from inkpress.shared.repositories.post_extra_repository import (
    UNSET,
    ExtrasPatch,
    normalize_gallery,
    parse_gallery,
)
from inkpress.shared.repositories.taxonomy_repository import normalize_ids
from inkpress.shared.schemas.post import GalleryItem


class TestNormalizeGallery:
    def test_mixed_entries(self):
        raw = [17, {"id": 18, "url": "https://cdn/x.jpg"}, GalleryItem(id=19, url="u")]
        assert json.loads(normalize_gallery(raw)) == [
            {"id": 17, "url": None},
            {"id": 18, "url": "https://cdn/x.jpg"},
            {"id": 19, "url": "u"},
        ]

    def test_invalid_ids_dropped(self):
        assert json.loads(normalize_gallery([0, -3, "x", {"url": "no-id"}, "21"])) == [
            {"id": 21, "url": None}
        ]

    def test_empty_becomes_null(self):
        assert normalize_gallery([]) is None
        assert normalize_gallery(None) is None
        assert normalize_gallery([0, "nope"]) is None

    def test_parse_round_trip_tolerates_garbage(self):
        assert parse_gallery(None) == []
        assert parse_gallery("not json") == []
        assert parse_gallery('{"id": 1}') == []
        assert parse_gallery('[{"id": 1, "url": null}, 5]') == [{"id": 1, "url": None}]


class TestExtrasPatch:
    def test_nothing_supplied(self):
        patch = ExtrasPatch()
        assert patch.supplied() == {}
        assert patch.is_empty()

    def test_explicit_none_is_supplied(self):
        assert ExtrasPatch(subtitle=None).supplied() == {"subtitle": None}

    def test_gallery_maps_to_json_column(self):
        columns = ExtrasPatch(gallery=[5]).supplied()
        assert "gallery" not in columns
        assert json.loads(columns["gallery_json"]) == [{"id": 5, "url": None}]

    def test_enum_coercion(self):
        columns = ExtrasPatch(format="video", audio_status=None).supplied()
        assert columns["format"] is ExtraFormat.VIDEO
        assert columns["audio_status"] is AudioStatus.NONE

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert ExtrasPatch().subtitle is UNSET


def test_normalize_ids():
    assert normalize_ids([5, "7", 5, 0, -1, "x", None, True]) == [5, 7]
    assert normalize_ids(None) == []
