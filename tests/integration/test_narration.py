"""
Integration tests for narration request and result bookkeeping.
"""

import pytest
import pytest_asyncio

from inkpress.shared.core.exceptions import PostNotFoundError, ValidationError
from inkpress.shared.models import AudioStatus, ExtraFormat
from inkpress.shared.repositories.post_extra_repository import PostExtraRepository
from inkpress.shared.schemas.post import PostCreate
from inkpress.shared.services.narration_service import NarrationService
from inkpress.shared.services.post_service import PostService


@pytest.fixture
def narration(session, clock):
    return NarrationService(session, clock)


@pytest_asyncio.fixture
async def post_id(session, clock, author):
    created = await PostService(session, clock).create(
        PostCreate(author_id=author.id, title="Narrated", subtitle="Stay", format="gallery", gallery=[4])
    )
    return created.id


class TestRequest:
    async def test_queues_with_language(self, narration, post_id):
        extra = await narration.request(post_id, "bn")

        assert extra.audio_status == AudioStatus.QUEUED
        assert extra.audio_lang == "bn"
        assert extra.audio_updated_at is not None

    async def test_ready_audio_kept_without_overwrite(self, narration, post_id):
        await narration.request(post_id, "bn")
        await narration.record_result(post_id, AudioStatus.READY, url="https://cdn/a.mp3")

        extra = await narration.request(post_id, "en")

        assert extra.audio_status == AudioStatus.READY
        assert extra.audio_lang == "bn"
        assert extra.audio_url == "https://cdn/a.mp3"

    async def test_overwrite_requeues(self, narration, post_id):
        await narration.request(post_id, "bn")
        await narration.record_result(post_id, AudioStatus.READY, url="https://cdn/a.mp3")

        extra = await narration.request(post_id, "en", overwrite=True)

        assert extra.audio_status == AudioStatus.QUEUED
        assert extra.audio_lang == "en"

    async def test_error_can_be_retried(self, narration, post_id):
        await narration.request(post_id, "bn")
        await narration.record_result(post_id, AudioStatus.ERROR)

        extra = await narration.request(post_id, "bn")

        assert extra.audio_status == AudioStatus.QUEUED

    async def test_missing_post(self, narration):
        with pytest.raises(PostNotFoundError):
            await narration.request(999, "bn")


class TestRecordResult:
    async def test_ready_stores_audio_details(self, session, narration, post_id):
        await narration.request(post_id, "bn")
        await narration.record_result(
            post_id, AudioStatus.READY, url="https://cdn/a.mp3", chars=1200, duration_sec=95
        )

        extra = await PostExtraRepository(session).get(post_id)
        assert extra.audio_status == AudioStatus.READY
        assert extra.audio_url == "https://cdn/a.mp3"
        assert extra.audio_chars == 1200
        assert extra.audio_duration_sec == 95
        assert extra.audio_lang == "bn"

    async def test_presentation_fields_untouched(self, session, narration, post_id):
        await narration.request(post_id, "bn")
        await narration.record_result(post_id, AudioStatus.READY, url="https://cdn/a.mp3")

        extra = await PostExtraRepository(session).get(post_id)
        assert extra.subtitle == "Stay"
        assert extra.format == ExtraFormat.GALLERY
        assert extra.gallery_json is not None

    @pytest.mark.parametrize("status", [AudioStatus.QUEUED, AudioStatus.NONE])
    async def test_only_terminal_states_accepted(self, narration, post_id, status):
        with pytest.raises(ValidationError):
            await narration.record_result(post_id, status)

    async def test_missing_post(self, narration):
        with pytest.raises(PostNotFoundError):
            await narration.record_result(999, AudioStatus.ERROR)
