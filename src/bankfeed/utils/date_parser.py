"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from bankfeed.utils.clock import Clock, system_clock

# date-fns style tokens accepted in statement date patterns, longest first.
_PATTERN_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "dd": "%d",
    "d": "%d",
    "EEEE": "%A",
    "EEE": "%a",
}
_TOKEN_RE = re.compile("|".join(_PATTERN_TOKENS) + "|[A-Za-z]")


def pattern_to_strptime(pattern: str) -> str:
    """Translate a date pattern like ``MM/dd/yy`` to a strptime format.

    Patterns that already contain ``%`` directives are returned unchanged.

    Raises:
        ValueError: If the pattern contains an unsupported letter
    """
    if "%" in pattern:
        return pattern

    def _translate(match: re.Match) -> str:
        token = match.group(0)
        if token not in _PATTERN_TOKENS:
            raise ValueError(f"Unsupported date pattern token '{token}' in '{pattern}'")
        return _PATTERN_TOKENS[token]

    return _TOKEN_RE.sub(_translate, pattern)


def _resolve_two_digit_year(year: int, reference_year: int) -> int:
    """Pick the century that puts ``year`` closest to ``reference_year``."""
    candidate = reference_year - reference_year % 100 + year % 100
    if candidate > reference_year + 50:
        candidate -= 100
    elif candidate <= reference_year - 50:
        candidate += 100
    return candidate


def parse_date_with_pattern(
    date_str: str, pattern: str, clock: Clock = system_clock
) -> date:
    """Parse a date string strictly against a pattern.

    Two-digit years resolve relative to the year reported by ``clock``.

    Raises:
        ValueError: If the string does not match the pattern
    """
    fmt = pattern_to_strptime(pattern)
    value = date_str.strip()
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError as e:
        raise ValueError(f"Could not parse date '{value}' with format '{pattern}'") from e

    if "%y" in fmt and "%Y" not in fmt:
        year = _resolve_two_digit_year(parsed.year, clock().year)
        try:
            parsed = parsed.replace(year=year)
        except ValueError as e:
            # Feb 29 in a century that is not a leap year
            raise ValueError(f"Could not parse date '{value}' with format '{pattern}'") from e
    return parsed.date()


def parse_iso_date(date_str: str) -> date:
    """Parse an unambiguous ISO calendar date, optionally followed by a time.

    Raises:
        ValueError: If the string is not an ISO 8601 date
    """
    value = date_str.strip()
    try:
        return date_parser.isoparse(value).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': expected YYYY-MM-DD") from e


def parse_date(date_str: str, clock: Optional[Clock] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        clock: Optional time source used to resolve relative dates

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = (clock or system_clock)().date()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Handle "last/this" + time period
    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
