"""Tests for date parsing."""

import pytest
from datetime import date, datetime, UTC

from bankfeed.utils.clock import fixed_clock
from bankfeed.utils.date_parser import (
    parse_date,
    parse_date_with_pattern,
    parse_iso_date,
    pattern_to_strptime,
)

CLOCK = fixed_clock(datetime(2024, 6, 15, 9, 0, tzinfo=UTC))


class TestPatternParsing:
    """Tests for caller-supplied date patterns."""

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("MM/dd/yyyy", "%m/%d/%Y"),
            ("dd.MM.yy", "%d.%m.%y"),
            ("M/d/yy", "%m/%d/%y"),
            ("yyyy-MM-dd", "%Y-%m-%d"),
            ("%d/%m/%Y", "%d/%m/%Y"),
            ("MMMM d, yyyy", "%B %d, %Y"),
            ("EEE dd MMM yyyy", "%a %d %b %Y"),
            ("yyyyMMdd", "%Y%m%d"),
        ],
    )
    def test_pattern_to_strptime(self, pattern, expected):
        assert pattern_to_strptime(pattern) == expected

    def test_us_and_european_patterns(self):
        assert parse_date_with_pattern("01/02/2024", "MM/dd/yyyy") == date(2024, 1, 2)
        assert parse_date_with_pattern("01/02/2024", "dd/MM/yyyy") == date(2024, 2, 1)

    def test_two_digit_year_resolves_near_clock(self):
        assert parse_date_with_pattern("3/4/24", "M/d/yy", CLOCK) == date(2024, 3, 4)
        assert parse_date_with_pattern("3/4/99", "M/d/yy", CLOCK) == date(1999, 3, 4)
        assert parse_date_with_pattern("3/4/70", "M/d/yy", CLOCK) == date(2070, 3, 4)

    def test_full_month_name(self):
        assert parse_date_with_pattern("March 4, 2024", "MMMM d, yyyy") == date(2024, 3, 4)

    @pytest.mark.parametrize("pattern", ["yyyy-QQ-dd", "dd/MM/yyyy HH", "yyy"])
    def test_unsupported_pattern_letters_rejected(self, pattern):
        with pytest.raises(ValueError, match="Unsupported date pattern token"):
            pattern_to_strptime(pattern)

    def test_mismatch_raises(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date_with_pattern("2024-01-15", "MM/dd/yyyy")

    def test_impossible_date_raises(self):
        with pytest.raises(ValueError):
            parse_date_with_pattern("02/30/2024", "MM/dd/yyyy")


class TestIsoParsing:
    def test_plain_and_with_time(self):
        assert parse_iso_date("2024-04-02") == date(2024, 4, 2)
        assert parse_iso_date("2024-04-02T10:15:00") == date(2024, 4, 2)

    def test_rejects_locale_dates(self):
        with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
            parse_iso_date("04/02/2024")


class TestRelativeDates:
    """Tests for the relative dates accepted on the command line."""

    def test_parse_absolute_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_today_yesterday_tomorrow(self):
        assert parse_date("today", CLOCK) == date(2024, 6, 15)
        assert parse_date("Yesterday", CLOCK) == date(2024, 6, 14)
        assert parse_date("tomorrow", CLOCK) == date(2024, 6, 16)

    def test_last_and_this_month(self):
        assert parse_date("last month", CLOCK) == date(2024, 5, 1)
        assert parse_date("this month", CLOCK) == date(2024, 6, 1)

    def test_last_and_this_year(self):
        assert parse_date("last year", CLOCK) == date(2023, 1, 1)
        assert parse_date("this year", CLOCK) == date(2024, 1, 1)

    def test_this_week_starts_monday(self):
        # 2024-06-15 is a Saturday
        assert parse_date("this week", CLOCK) == date(2024, 6, 10)
        assert parse_date("last week", CLOCK) == date(2024, 6, 3)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")
