from datetime import datetime, timedelta, timezone

import pytest

from bp_tracker.utils.timestamps import format_timestamp, parse_timestamp


def test_fractional_seconds():
    dt = parse_timestamp("2024-01-15T10:30:00.123Z")
    assert dt == datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=timezone.utc)


def test_whole_seconds_fallback():
    dt = parse_timestamp("2024-01-15T10:30:00Z")
    assert dt == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def test_fraction_adds_milliseconds():
    assert parse_timestamp("2024-01-15T10:30:00.123Z") - parse_timestamp("2024-01-15T10:30:00Z") \
        == timedelta(milliseconds=123)


def test_nanosecond_fraction_truncated():
    dt = parse_timestamp("2024-01-15T10:30:00.123456789Z")
    assert dt.microsecond == 123456


def test_numeric_offset():
    dt = parse_timestamp("2024-01-15T12:30:00+02:00")
    assert dt == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["2024-01-15", "2024-01-15T10:30:00", "not a date", "", 1705314600])
def test_invalid_values_name_the_input(value):
    with pytest.raises(ValueError, match="Invalid date format"):
        parse_timestamp(value)


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        parse_timestamp(datetime(2024, 1, 15, 10, 30))


def test_format_timestamp():
    dt = datetime(2024, 1, 15, 12, 30, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(dt) == "2024-01-15T10:30:00.123Z"
