"""
Scheduled publisher.

Promotes posts whose scheduled instant has passed from "future" to "publish".

Each run:
1. Opens a fresh session
2. Selects up to batch_size future posts with post_date_gmt <= now (UTC)
3. Publishes each one through the regular update path, one transaction per
   post; a post that fails is logged and skipped, the rest still publish

Run once (cron) or loop (long-lived process):
    inkpress-publisher --once
    inkpress-publisher --interval 30
"""

import argparse
import asyncio
from dataclasses import dataclass, field
from typing import Callable, Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.config.settings import settings
from inkpress.shared.core.clock import Clock, SystemClock
from inkpress.shared.core.logging import get_logger, scoped_log_context
from inkpress.shared.db.session import AsyncSessionLocal, close_db
from inkpress.shared.services.post_service import PostService


logger = get_logger("inkpress.publisher")


@dataclass
class PublishRunResult:
    """Result of one publisher run."""

    run_id: str
    published: list[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.published)


class ScheduledPublisher:
    """
    Publishes due scheduled posts.

    Args:
        session_factory: Callable returning an AsyncSession context manager
        clock: Source of "now" (SystemClock when omitted)
        batch_size: Maximum posts promoted per run
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        clock: Optional[Clock] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        self.session_factory = session_factory
        self.clock = clock or SystemClock()
        self.batch_size = batch_size or settings.SCHEDULER_BATCH_SIZE

    async def run_once(self) -> PublishRunResult:
        result = PublishRunResult(run_id=uuid4().hex[:12])
        with scoped_log_context(run_id=result.run_id):
            async with self.session_factory() as session:
                service = PostService(session, self.clock)
                result.published = await service.publish_due(limit=self.batch_size)
            logger.debug("Publisher run finished", published=result.count)
        return result

    async def run_forever(self, interval_seconds: int) -> None:
        """Run, sleep, repeat until cancelled."""
        logger.info("Scheduled publisher started", interval_seconds=interval_seconds)
        while True:
            await self.run_once()
            await asyncio.sleep(interval_seconds)


async def main(once: bool = False, interval_seconds: Optional[int] = None) -> None:
    publisher = ScheduledPublisher()
    try:
        if once:
            result = await publisher.run_once()
            logger.info("Scheduled publisher run complete", published=result.published)
        else:
            await publisher.run_forever(interval_seconds or settings.SCHEDULER_INTERVAL_SECONDS)
    finally:
        await close_db()


def run() -> None:
    """Console entry point."""
    parser = argparse.ArgumentParser(description="Publish scheduled posts whose time has come.")
    parser.add_argument("--once", action="store_true", help="run a single batch and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="seconds between runs when looping (default: SCHEDULER_INTERVAL_SECONDS)",
    )
    args = parser.parse_args()
    try:
        asyncio.run(main(once=args.once, interval_seconds=args.interval))
    except KeyboardInterrupt:
        logger.info("Scheduled publisher stopped")


if __name__ == "__main__":
    run()
