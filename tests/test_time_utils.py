from datetime import date, datetime

import pytest

from core.time_utils import parse_datetime, parse_date, to_iso, try_parse_datetime, try_parse_date


def test_parse_datetime_keeps_naive_wall_clock():
    assert parse_datetime("2025-07-08T10:00:00") == datetime(2025, 7, 8, 10, 0)
    assert parse_datetime("2025-07-08") == datetime(2025, 7, 8)


def test_parse_datetime_converts_utc_suffix_to_naive_local():
    dt = parse_datetime("2025-07-08T10:00:00.000Z")
    assert dt.tzinfo is None
    expected = datetime.fromisoformat("2025-07-08T10:00:00+00:00").astimezone().replace(tzinfo=None)
    assert dt == expected


def test_parse_datetime_rejects_non_iso():
    with pytest.raises(ValueError):
        parse_datetime("07/09/2025 10:00")


@pytest.mark.parametrize("value", ["", None, "07/09/2025 10:00", "soon", 42])
def test_try_parse_datetime_returns_none_for_unreadable(value):
    assert try_parse_datetime(value) is None


@pytest.mark.parametrize("value", ["", None, "10/05/2001", "n/a"])
def test_try_parse_date_returns_none_for_unreadable(value):
    assert try_parse_date(value) is None


def test_try_parse_date_reads_datetime_strings():
    assert try_parse_date("2001-05-10T00:00:00.000Z") == date(2001, 5, 10)
    assert parse_date("1990-01-01") == date(1990, 1, 1)


def test_to_iso_drops_microseconds():
    assert to_iso(datetime(2025, 7, 8, 10, 0, 5, 123456)) == "2025-07-08T10:00:05"
