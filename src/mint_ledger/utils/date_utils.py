"""Date parsing and calendar-year utilities."""

import re
from datetime import date, datetime

# Mint exports write dates as MM/DD/YYYY. Single-digit months and days
# ("1/11/2013") appear in older dumps and are accepted.
MINT_DATE_FORMAT = "%m/%d/%Y"

MINT_DATE_PATTERN = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")


def parse_date(raw_date: str) -> date:
    """Parse a Mint date string into a date object.

    Only the slash-separated US format is accepted:
    - 01/11/2013
    - 1/11/2013

    Args:
        raw_date: The raw date string to parse.

    Returns:
        Parsed date object (no time component).

    Raises:
        ValueError: If the date is empty or not in MM/DD/YYYY format.
    """
    if not raw_date:
        raise ValueError("Empty date string")

    date_str = raw_date.strip()
    if not date_str:
        raise ValueError("Empty date string after stripping whitespace")

    if not MINT_DATE_PATTERN.fullmatch(date_str):
        raise ValueError(f"Cannot parse date: '{raw_date}' (expected MM/DD/YYYY)")

    try:
        return datetime.strptime(date_str, MINT_DATE_FORMAT).date()
    except ValueError as e:
        # Pattern matched but the calendar rejected it (e.g. 02/30/2012)
        raise ValueError(f"Cannot parse date: '{raw_date}': {e}") from e


def year_bounds(year: int) -> tuple[date, date]:
    """Return the first and last day of a calendar year."""
    return date(year, 1, 1), date(year, 12, 31)


def is_date_in_range(
    d: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> bool:
    """Check if a date is within a range.

    Args:
        d: Date to check.
        start_date: Start of range (inclusive). None means no lower bound.
        end_date: End of range (inclusive). None means no upper bound.

    Returns:
        True if date is within range.
    """
    if start_date is not None and d < start_date:
        return False
    if end_date is not None and d > end_date:
        return False
    return True


def is_in_year(d: date, year: int) -> bool:
    """Check whether a date falls within a calendar year (inclusive bounds).

    Equivalent to ``d.year == year`` for any valid date.

    Args:
        d: Date to check.
        year: Four-digit calendar year.

    Returns:
        True if January 1 <= d <= December 31 of ``year``.
    """
    start, end = year_bounds(year)
    return is_date_in_range(d, start, end)
