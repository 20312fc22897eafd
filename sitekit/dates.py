from __future__ import annotations

import datetime as dt

INVALID_DATE = "Invalid Date"
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def to_datetime(value: object) -> dt.datetime | dt.date | None:
    """Coerce a front-matter or template value into a date primitive.

    Numbers are epoch milliseconds. Date-only ISO strings stay calendar dates.
    Returns None for anything that cannot be read as a date.
    """
    if isinstance(value, (dt.datetime, dt.date)):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return dt.datetime.fromtimestamp(value / 1000, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if len(text) == 10:
            try:
                return dt.date.fromisoformat(text)
            except ValueError:
                return None
        try:
            return dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _local(value: dt.datetime | dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            return value.astimezone().date()
        return value.date()
    return value


def _utc(value: dt.datetime | dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.astimezone(dt.timezone.utc).date()
    return value


def format_date(value: object, pattern: str | None = None) -> str:
    parsed = to_datetime(value)
    if parsed is None:
        return INVALID_DATE
    try:
        if pattern == "YYYY-MM-DD":
            return _utc(parsed).isoformat()
        day = _local(parsed)
    except (OverflowError, ValueError):
        # the shifted instant falls outside year 1..9999
        return INVALID_DATE
    if pattern is None:
        return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"
    if pattern == "YYYY":
        return f"{day.year:04d}"
    return f"{day.month}/{day.day}/{day.year}"


def date_display(value: object) -> str:
    return format_date(value)
