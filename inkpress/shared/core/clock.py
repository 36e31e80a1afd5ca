"""
Clock

Injectable source of "now" for every write that stamps a time
(post dates, modification stamps, trash bookkeeping, audio updates).

Services take a Clock instead of calling datetime.now() directly, so tests
can freeze time and assert exact timestamps and future/past decisions.

Usage:
======
    from inkpress.shared.core.clock import SystemClock

    clock = SystemClock()
    clock.now()  # timezone-aware UTC datetime
"""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current absolute instant."""

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    """Wall-clock time from the operating system."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
