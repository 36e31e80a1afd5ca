"""
Logging Configuration

structlog setup shared by the API process and the scheduled publisher.

Log Output:
===========
Development:
    2025-03-01 10:30:00 [info     ] Post created        [inkpress.posts] post_id=42 status=publish

Anything else (JSON, one object per line):
    {"timestamp": "2025-03-01T04:30:00Z", "level": "info", "logger": "inkpress.posts",
     "event": "Post created", "post_id": 42, "status": "publish"}

Logger Names:
=============
    inkpress             ← default logger (API lifecycle, error handler)
    inkpress.db          ← engine / connection lifecycle
    inkpress.posts       ← post lifecycle operations
    inkpress.taxonomy    ← term administration
    inkpress.narration   ← narration-audio requests
    inkpress.publisher   ← scheduled publisher runs

Usage:
======
    from inkpress.shared.core.logging import get_logger, scoped_log_context

    logger = get_logger("inkpress.posts")
    logger.info("Post trashed", post_id=post_id, previous_status=status)

    # Everything logged inside the block carries run_id
    with scoped_log_context(run_id=run_id):
        logger.info("Publishing due posts")
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog.typing import Processor

from inkpress.config.settings import settings


_configured = False


def _renderer(json_output: bool) -> list[Processor]:
    if json_output:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Safe to call more than once; only the first call (or a call with
    explicit arguments) reconfigures.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        json_output: Force JSON rendering; defaults to "not development"
    """
    global _configured
    if _configured and level is None and json_output is None:
        return

    level_name = (level or settings.LOG_LEVEL).upper()
    if json_output is None:
        json_output = not settings.is_development

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )
    # SQL echo is governed by DEBUG on the engine, not by the app log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(json_output),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, named after the component that logs."""
    return structlog.get_logger(name)


@contextmanager
def scoped_log_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind key/values for the duration of a block only.

    Previously bound values with the same keys are restored on exit.

    Example:
        with scoped_log_context(post_id=42):
            logger.info("Narration queued")   # includes post_id=42
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


setup_logging()

logger = get_logger("inkpress")
