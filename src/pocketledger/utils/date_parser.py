"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional
from dateutil import parser as date_parser

# Day offsets for relative words, English and Portuguese
RELATIVE_DAYS = {
    "today": 0,
    "hoje": 0,
    "yesterday": -1,
    "ontem": -1,
    "tomorrow": 1,
    "amanhã": 1,
    "amanha": 1,
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a user-entered date.

    Accepts ISO dates ("2026-09-15"), day-first slash dates ("15/09/2026"),
    anything else dateutil understands, and the relative words in
    ``RELATIVE_DAYS``.

    Args:
        date_str: Date string
        today: Reference date for relative words (defaults to date.today())

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if text in RELATIVE_DAYS:
        return (today or date.today()) + timedelta(days=RELATIVE_DAYS[text])

    try:
        return date_parser.parse(text, dayfirst="/" in text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
