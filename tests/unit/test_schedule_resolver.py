"""
Tests for schedule resolution against the site's fixed UTC offset (+6).
"""

from datetime import datetime, timedelta, timezone

import pytest

from inkpress.shared.core.exceptions import ValidationError
from inkpress.shared.services.schedule_service import ScheduleResolver

from conftest import NOW, FrozenClock


@pytest.fixture
def resolver():
    return ScheduleResolver(FrozenClock(), utc_offset_hours=6)


class TestNow:
    def test_now_pairs_local_and_utc(self, resolver):
        now = resolver.now()
        assert now.absolute == datetime(2025, 3, 1, 12, 0, 0)
        assert now.local == datetime(2025, 3, 1, 18, 0, 0)
        assert now.is_future is False


class TestResolve:
    def test_naive_datetime_is_site_local(self, resolver):
        when = resolver.resolve(datetime(2025, 3, 2, 9, 0))
        assert when.local == datetime(2025, 3, 2, 9, 0)
        assert when.absolute == datetime(2025, 3, 2, 3, 0)
        assert when.is_future is True

    def test_aware_datetime_is_absolute(self, resolver):
        when = resolver.resolve(datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc))
        assert when.absolute == datetime(2025, 3, 1, 10, 0)
        assert when.local == datetime(2025, 3, 1, 16, 0)
        assert when.is_future is False

    def test_other_offsets_are_converted(self, resolver):
        eastern = timezone(timedelta(hours=-5))
        when = resolver.resolve(datetime(2025, 3, 1, 8, 0, tzinfo=eastern))
        assert when.absolute == datetime(2025, 3, 1, 13, 0)
        assert when.is_future is True

    @pytest.mark.parametrize(
        "text, local",
        [
            ("2025-03-02 09:00", datetime(2025, 3, 2, 9, 0)),
            ("2025-03-02T09:00:30", datetime(2025, 3, 2, 9, 0, 30)),
            ("2025-03-02T03:00:00Z", datetime(2025, 3, 2, 9, 0)),
            ("2025-03-02T05:00:00+02:00", datetime(2025, 3, 2, 9, 0)),
        ],
    )
    def test_strings(self, resolver, text, local):
        assert resolver.resolve(text).local == local

    def test_sub_second_precision_dropped(self, resolver):
        when = resolver.resolve(datetime(2025, 3, 2, 9, 0, 0, 999999))
        assert when.local.microsecond == 0

    def test_exactly_now_is_not_future(self, resolver):
        assert resolver.resolve(NOW).is_future is False

    def test_one_second_ahead_is_future(self, resolver):
        assert resolver.resolve(NOW + timedelta(seconds=1)).is_future is True

    def test_garbage_rejected(self, resolver):
        with pytest.raises(ValidationError) as exc:
            resolver.resolve("next tuesday")
        assert exc.value.details == {"scheduled_at": "next tuesday"}


def test_format_local():
    assert ScheduleResolver.format_local(datetime(2025, 3, 2, 9, 0)) == "2025-03-02 09:00:00"
