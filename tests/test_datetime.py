"""Tests for datetime utilities."""

from datetime import UTC, datetime, timedelta, timezone

from taskboard.utils import now_utc, parse_timestamp, unix_millis


class TestNowUtc:
    def test_is_timezone_aware(self):
        assert now_utc().tzinfo is UTC


class TestUnixMillis:
    """Tests for unix_millis."""

    def test_epoch(self):
        assert unix_millis(datetime(1970, 1, 1, tzinfo=UTC)) == 0

    def test_truncates_microseconds(self):
        moment = datetime(2025, 1, 1, 0, 0, 0, 999_999, tzinfo=UTC)
        assert unix_millis(moment) == 1735689600999

    def test_respects_offset(self):
        plus_two = timezone(timedelta(hours=2))
        assert unix_millis(datetime(2025, 1, 1, 2, tzinfo=plus_two)) == 1735689600000


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_none(self):
        assert parse_timestamp(None) is None

    def test_datetime_passthrough(self):
        now = datetime.now(UTC)
        assert parse_timestamp(now) is now

    def test_z_suffix(self):
        parsed = parse_timestamp("2025-01-02T03:04:05Z")
        assert parsed == datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_explicit_offset(self):
        parsed = parse_timestamp("2025-01-02T05:04:05+02:00")
        assert parsed == datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
