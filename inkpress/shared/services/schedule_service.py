"""
Schedule Service

Resolves caller-supplied publish times against the site's civil time zone.

The site runs on a fixed UTC offset (SITE_UTC_OFFSET_HOURS, no daylight
saving). Every resolved time is a pair of naive datetimes:

┌──────────────────────────────────────────────────────────────────────────┐
│  input                         local (post_date)    absolute (_gmt)      │
├──────────────────────────────────────────────────────────────────────────┤
│  "2025-03-01 10:00"            2025-03-01 10:00     2025-03-01 04:00     │
│  "2025-03-01T10:00:00Z"        2025-03-01 16:00     2025-03-01 10:00     │
│  datetime(2025, 3, 1, 10)      2025-03-01 10:00     2025-03-01 04:00     │
│  aware datetime                converted            converted            │
└──────────────────────────────────────────────────────────────────────────┘
                                               (offset +6 in this table)

Values without a zone are wall-clock time at the site; values with a zone
(or a trailing Z) are absolute instants. Sub-second precision is dropped
because the posts table stores whole seconds.

Usage:
======
    resolver = ScheduleResolver(clock)
    when = resolver.resolve("2025-03-01 10:00")
    if when.is_future:
        status = PostStatus.FUTURE
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from inkpress.config.settings import settings
from inkpress.shared.core.clock import Clock, SystemClock
from inkpress.shared.core.exceptions import ValidationError
from inkpress.shared.utils.constants import LOCAL_DATETIME_FORMAT


@dataclass(frozen=True)
class ZonedTime:
    """A resolved time: site-local and UTC wall clocks, both naive."""

    local: datetime
    absolute: datetime
    is_future: bool = False


class ScheduleResolver:
    """
    Converts schedule input into ZonedTime pairs.

    Args:
        clock: Source of "now" (SystemClock when omitted)
        utc_offset_hours: Site offset from UTC (settings value when omitted)
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        utc_offset_hours: Optional[float] = None,
    ) -> None:
        self.clock = clock or SystemClock()
        hours = settings.SITE_UTC_OFFSET_HOURS if utc_offset_hours is None else utc_offset_hours
        self.offset = timedelta(hours=hours)

    def now(self) -> ZonedTime:
        """Current time as a local/absolute pair."""
        absolute = self._utc_now()
        return ZonedTime(local=absolute + self.offset, absolute=absolute, is_future=False)

    def resolve(self, value: Union[datetime, str]) -> ZonedTime:
        """
        Resolve a schedule value and classify it against now.

        Args:
            value: datetime (naive = site-local, aware = absolute) or an
                ISO-like string ("YYYY-MM-DD HH:MM[:SS]" or with T, Z, ±HH:MM)

        Returns:
            ZonedTime with is_future set when the instant is strictly after now

        Raises:
            ValidationError: If a string cannot be parsed
        """
        parsed = self._parse(value) if isinstance(value, str) else value

        if parsed.tzinfo is None:
            local = parsed.replace(microsecond=0)
            absolute = local - self.offset
        else:
            absolute = parsed.astimezone(timezone.utc).replace(tzinfo=None, microsecond=0)
            local = absolute + self.offset

        return ZonedTime(local=local, absolute=absolute, is_future=absolute > self._utc_now())

    @staticmethod
    def format_local(value: datetime) -> str:
        """Render a local datetime the way postmeta stores it."""
        return value.strftime(LOCAL_DATETIME_FORMAT)

    def _utc_now(self) -> datetime:
        return self.clock.now().astimezone(timezone.utc).replace(tzinfo=None, microsecond=0)

    @staticmethod
    def _parse(text: str) -> datetime:
        raw = text.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError as e:
            raise ValidationError(
                "Unrecognized schedule time",
                details={"scheduled_at": text},
            ) from e
