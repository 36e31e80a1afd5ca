"""
Tests for request schema validation.
"""

import pydantic
import pytest

from inkpress.shared.models.enums import AudioStatus, PostStatus
from inkpress.shared.schemas.post import NarrationResult, QuickEdit


class TestQuickEdit:
    @pytest.mark.parametrize("value", ["publish", "draft", "pending"])
    def test_editable_statuses(self, value):
        assert QuickEdit(status=value).status == PostStatus(value)

    @pytest.mark.parametrize("value", ["trash", "future"])
    def test_other_statuses_rejected(self, value):
        with pytest.raises(pydantic.ValidationError):
            QuickEdit(status=value)

    def test_status_optional(self):
        assert QuickEdit(title="Only title").status is None

    def test_unknown_field_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            QuickEdit(author_id=3)


class TestNarrationResult:
    def test_parses_status(self):
        result = NarrationResult(status="ready", url="https://cdn/a.mp3", chars=10)
        assert result.status == AudioStatus.READY
        assert result.duration_sec is None

    def test_negative_duration_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            NarrationResult(status="ready", duration_sec=-1)
