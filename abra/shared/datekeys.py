"""
Date key codec.

Schedule days are keyed by DD-MM-YYYY strings. Keys are validated strictly:
an impossible calendar date (31-04-2026, 29-02-2025) is rejected rather than
rolled over into the next month.
"""

import re
from datetime import date, timedelta

DATE_KEY_FORMAT = "DD-MM-YYYY"

_DATE_KEY_PATTERN = re.compile(r"^([0-9]{2})-([0-9]{2})-([0-9]{4})$")


def parse_date_key(key: str) -> date:
    """
    Parse a DD-MM-YYYY key into a date.

    Raises:
        ValueError: If the key is malformed or names an impossible date
    """
    if not isinstance(key, str):
        raise ValueError(f"Date key must be a string in {DATE_KEY_FORMAT} format")

    match = _DATE_KEY_PATTERN.match(key)
    if not match:
        raise ValueError(f"Date key {key!r} is not in {DATE_KEY_FORMAT} format")

    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Date key {key!r} is not a calendar date: {e}") from e


def is_valid_date_key(key) -> bool:
    try:
        parse_date_key(key)
        return True
    except ValueError:
        return False


def format_date_key(value: date) -> str:
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def day_of_week(key: str) -> int:
    """Weekday of a key, Monday=0 .. Sunday=6"""
    return parse_date_key(key).weekday()


def add_days(key: str, days: int) -> str:
    return format_date_key(parse_date_key(key) + timedelta(days=days))


def days_between(start: str, end: str) -> int:
    """Signed number of days from start to end (negative if start is after end)"""
    return (parse_date_key(end) - parse_date_key(start)).days


def date_keys_from(start: date, count: int) -> list[str]:
    """Contiguous run of keys beginning at start"""
    return [format_date_key(start + timedelta(days=offset)) for offset in range(max(0, count))]
