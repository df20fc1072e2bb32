"""Tests for common.datetime module."""

from datetime import datetime, timedelta, timezone

import pytest

from common.datetime import parse_datetime, utc_now


class TestParseDatetime:
    def test_none_returns_none(self) -> None:
        assert parse_datetime(None) is None
        assert parse_datetime("") is None

    def test_z_suffix(self) -> None:
        assert parse_datetime("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    def test_naive_is_assumed_utc(self) -> None:
        assert parse_datetime("2024-01-01").tzinfo == timezone.utc

    def test_offset_preserved(self) -> None:
        parsed = parse_datetime("2024-01-01T09:00:00+09:00")
        assert parsed.utcoffset() == timedelta(hours=9)

    def test_datetime_passthrough(self) -> None:
        value = datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert parse_datetime(value) is value

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_datetime("not a date")


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo is not None
