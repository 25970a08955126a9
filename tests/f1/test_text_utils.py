"""Tests for dashboard text formatting (F1)."""

from datetime import datetime, timedelta, timezone

import pytest

from studydebt.utils.text_utils import format_deadline, format_minutes, truncate
from studydebt.utils.time_utils import ensure_utc, parse_iso, to_iso


class TestFormatMinutes:
    @pytest.mark.parametrize(
        "minutes, expected",
        [(0, "0m"), (5, "5m"), (60, "1h"), (125, "2h 5m"), (120, "2h")],
    )
    def test_format(self, minutes, expected):
        assert format_minutes(minutes) == expected


class TestFormatDeadline:
    def test_days_overdue(self, now):
        assert format_deadline(now - timedelta(days=3), now) == "3 days overdue"

    def test_hours_left(self, now):
        assert format_deadline(now + timedelta(hours=5), now) == "5 hours left"

    def test_days_left(self, now):
        assert format_deadline(now + timedelta(days=2, hours=3), now) == "2 days left"


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated(self):
        result = truncate("x" * 100, max_len=20)
        assert len(result) == 20
        assert result.endswith("...")


class TestTimeUtils:
    def test_parse_z_suffix(self):
        parsed = parse_iso("2025-03-10T12:00:00Z")
        assert parsed == datetime(2025, 3, 10, 12, tzinfo=timezone.utc)

    def test_parse_offset_converted_to_utc(self):
        parsed = parse_iso("2025-03-10T21:00:00+09:00")
        assert parsed == datetime(2025, 3, 10, 12, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_parse_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_iso("not-a-date")

    def test_ensure_utc_naive(self):
        naive = datetime(2025, 1, 1, 8, 0)
        assert ensure_utc(naive).tzinfo is timezone.utc

    def test_to_iso_round_trip(self, now):
        assert parse_iso(to_iso(now)) == now
