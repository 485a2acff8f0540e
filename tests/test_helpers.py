from core.helpers import format_datetime, format_time, format_money, status_label


def test_format_datetime():
    assert format_datetime("2025-07-08T10:00:00") == "Jul 08, 2025 10:00 AM"
    assert format_datetime("") == "—"
    assert format_datetime(None) == "—"


def test_format_datetime_shows_unreadable_value_as_is():
    assert format_datetime("07/09/2025 10:00") == "07/09/2025 10:00"


def test_format_time():
    assert format_time("2025-07-08T15:30:00") == "03:30 PM"
    assert format_time("") == "—"
    assert format_time("tomorrow") == "—"


def test_format_money_and_status_label():
    assert format_money(None) == "—"
    assert format_money(1500) == "$1,500"
    assert format_money(80.5) == "$80.50"
    assert status_label("Completed") == "✅ Completed"
    assert status_label("Unknown") == "• Unknown"
