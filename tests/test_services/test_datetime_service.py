"""Tests for datetime helpers."""

from datetime import datetime, timedelta, timezone

from mediasync.services.datetime_service import epoch_seconds, format_iso, from_timestamp


class TestDatetimeHelpers:
    def test_from_timestamp_is_utc(self) -> None:
        result = from_timestamp(1_700_000_000.5)
        assert result.utcoffset() == timedelta(0)
        assert result.year == 2023

    def test_format_iso_round_trips(self) -> None:
        dt = datetime(2026, 2, 2, 22, 21, 29, 975359, tzinfo=timezone.utc)
        text = format_iso(dt)
        assert text == "2026-02-02T22:21:29.975359+00:00"
        assert datetime.fromisoformat(text) == dt

    def test_format_iso_converts_to_utc(self) -> None:
        dt = datetime(2026, 2, 2, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_iso(dt) == "2026-02-02T10:00:00+00:00"

    def test_format_iso_naive_assumes_utc(self) -> None:
        assert format_iso(datetime(2026, 1, 1, 12, 0)) == "2026-01-01T12:00:00+00:00"

    def test_format_iso_accepts_pendulum_values(self) -> None:
        text = format_iso(from_timestamp(0))
        assert datetime.fromisoformat(text) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_epoch_seconds_truncates(self) -> None:
        assert epoch_seconds(from_timestamp(1_700_000_000.9)) == 1_700_000_000
