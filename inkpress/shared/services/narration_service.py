"""
Narration Service

Tracks the narration-audio pipeline state kept on a post's extras row.
Audio generation itself happens in an external text-to-speech pipeline;
this service only records what was asked for and what came back.

State Flow:
===========
    none ──request()──► queued ──record_result()──► ready
                          ▲                      └─► error
                          └──── request(overwrite=True) / retry after error

Only audio columns are written (partial upsert), so narration updates never
touch subtitle, format or gallery, and content edits never touch narration.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.core.clock import Clock, SystemClock
from inkpress.shared.core.exceptions import PostNotFoundError, ValidationError
from inkpress.shared.core.logging import get_logger
from inkpress.shared.db.session import unit_of_work
from inkpress.shared.models.enums import AudioStatus
from inkpress.shared.models.post_extra import PostExtra
from inkpress.shared.repositories.post_extra_repository import ExtrasPatch, PostExtraRepository
from inkpress.shared.repositories.post_repository import PostRepository


logger = get_logger("inkpress.narration")


class NarrationService:
    """Narration request and result bookkeeping."""

    def __init__(self, session: AsyncSession, clock: Optional[Clock] = None) -> None:
        self.session = session
        self.clock = clock or SystemClock()
        self.post_repo = PostRepository(session)
        self.extra_repo = PostExtraRepository(session)

    async def request(self, post_id: int, lang: str, overwrite: bool = False) -> Optional[PostExtra]:
        """
        Queue narration for a post.

        A post whose audio is already ready keeps it unless overwrite is set.

        Args:
            post_id: Post to narrate
            lang: Narration language code (e.g. "bn", "en")
            overwrite: Replace ready audio

        Returns:
            The extras row after the request

        Raises:
            PostNotFoundError: If the post does not exist
        """
        async with unit_of_work(self.session):
            if not await self.post_repo.exists(post_id):
                raise PostNotFoundError(post_id)

            current = await self.extra_repo.get(post_id)
            if current is not None and current.audio_status == AudioStatus.READY and not overwrite:
                logger.info("Narration already ready", post_id=post_id)
                return current

            await self.extra_repo.upsert(
                post_id,
                ExtrasPatch(audio_status=AudioStatus.QUEUED, audio_lang=lang),
                self.clock.now(),
            )

        logger.info("Narration queued", post_id=post_id, lang=lang, overwrite=overwrite)
        return await self.extra_repo.get(post_id)

    async def record_result(
        self,
        post_id: int,
        status: AudioStatus,
        url: Optional[str] = None,
        chars: Optional[int] = None,
        duration_sec: Optional[int] = None,
    ) -> Optional[PostExtra]:
        """
        Store the outcome reported by the audio pipeline.

        Returns:
            The extras row after the update

        Raises:
            ValidationError: If status is not ready or error
            PostNotFoundError: If the post does not exist
        """
        if status not in (AudioStatus.READY, AudioStatus.ERROR):
            raise ValidationError(
                "Narration result must be ready or error",
                details={"status": str(status)},
            )

        async with unit_of_work(self.session):
            if not await self.post_repo.exists(post_id):
                raise PostNotFoundError(post_id)

            await self.extra_repo.upsert(
                post_id,
                ExtrasPatch(
                    audio_status=status,
                    audio_url=url,
                    audio_chars=chars,
                    audio_duration_sec=duration_sec,
                ),
                self.clock.now(),
            )

        logger.info("Narration result recorded", post_id=post_id, status=status.value)
        return await self.extra_repo.get(post_id)
