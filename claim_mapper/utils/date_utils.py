"""
Date utility functions for claim mapping.

Provides the fixed-priority date parsing chain used for dates of service
and helpers for anchoring calendar dates at UTC midnight.
"""

import re
from datetime import UTC, date, datetime


# Date plus delimiter plus time, e.g. 2024-01-15T10:30:00Z or 2024-01-15 10:30
ISO_DATETIME_PATTERN = re.compile(r"^\d{4}-?\d{2}-?\d{2}[Tt ]\d{2}")

# Bare date patterns with their strptime formats, in order of attempt
DATE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^\d{4}-\d{2}-\d{2}$"), "%Y-%m-%d"),  # YYYY-MM-DD
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"), "%m/%d/%Y"),  # M/D/YYYY
]


def parse_iso_datetime_date(date_string: str) -> date | None:
    """
    Parse an ISO-8601 date-time string and keep only its calendar date.

    The time of day and any zone offset are discarded; the date is the one
    written in the string.

    Example:
        parse_iso_datetime_date("2024-01-15T10:30:00Z") -> date(2024, 1, 15)
        parse_iso_datetime_date("2024-01-15") -> None
    """
    if not ISO_DATETIME_PATTERN.match(date_string):
        return None
    try:
        return datetime.fromisoformat(date_string).date()
    except ValueError:
        return None


def parse_date(date_string: str, default: date | None = None) -> date | None:
    """
    Parse a date string into a date object.

    Tries an ISO-8601 date-time first, then YYYY-MM-DD, then M/D/YYYY. The
    first format that matches wins; a string that matches a format but names
    an impossible date (02/31/2024) is not retried against later formats.

    Args:
        date_string: String representation of date.
        default: Value returned when nothing matches.

    Returns:
        Parsed date object or default value.

    Example:
        parse_date("01/15/2024") -> date(2024, 1, 15)
        parse_date("2024-01-15") -> date(2024, 1, 15)
    """
    if not date_string:
        return default

    date_string = date_string.strip()

    if ISO_DATETIME_PATTERN.match(date_string):
        parsed = parse_iso_datetime_date(date_string)
        return parsed if parsed is not None else default

    for pattern, date_format in DATE_PATTERNS:
        if pattern.match(date_string):
            try:
                return datetime.strptime(date_string, date_format).date()
            except ValueError:
                return default

    return default


def to_utc_midnight(d: date) -> datetime:
    """
    Anchor a calendar date at midnight UTC.

    Example:
        to_utc_midnight(date(2024, 1, 15)) -> datetime(2024, 1, 15, tzinfo=UTC)
    """
    return datetime(d.year, d.month, d.day, tzinfo=UTC)
