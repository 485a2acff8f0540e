from datetime import date, datetime


def now_local() -> datetime:
    """Return the current local wall-clock time (naive)."""
    return datetime.now()


def parse_datetime(value: str | datetime | date) -> datetime:
    """Parse an ISO date/datetime string into a naive local datetime.

    Values without an offset are taken as local wall-clock time, the way the
    forms store them. Offset-aware values are converted to local time.
    Date-only strings resolve to midnight.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def to_iso(value: datetime) -> str:
    """Serialize a datetime the way the forms do (no offset, seconds precision)."""
    return value.replace(microsecond=0).isoformat()


def try_parse_datetime(value) -> datetime | None:
    """Like ``parse_datetime`` but returns None for empty or non-ISO values."""
    if not value:
        return None
    try:
        return parse_datetime(value)
    except (ValueError, TypeError, AttributeError):
        return None


def try_parse_date(value) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except (ValueError, TypeError, AttributeError):
        return None
