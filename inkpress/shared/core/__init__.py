"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions
- Clock (injectable "now")

Usage:
======
    from inkpress.shared.core.logging import logger, get_logger
    from inkpress.shared.core.exceptions import InkpressException, NotFoundError

    logger.info("Post created", post_id=post_id)
"""

from inkpress.shared.core.logging import (
    logger,
    get_logger,
    scoped_log_context,
)
from inkpress.shared.core.exceptions import (
    InkpressException,
    NotFoundError,
    PostNotFoundError,
    TermNotFoundError,
    ValidationError,
    InvalidCategoryError,
    ConflictError,
)
from inkpress.shared.core.clock import Clock, SystemClock

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "scoped_log_context",
    # Exceptions
    "InkpressException",
    "NotFoundError",
    "PostNotFoundError",
    "TermNotFoundError",
    "ValidationError",
    "InvalidCategoryError",
    "ConflictError",
    # Time
    "Clock",
    "SystemClock",
]
