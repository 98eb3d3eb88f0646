"""Utility functions for bankfeed."""

from bankfeed.utils.date_parser import parse_date, parse_date_with_pattern, parse_iso_date
from bankfeed.utils.amount_parser import parse_amount, amount_to_integer, integer_to_amount
from bankfeed.utils.account_resolver import resolve_account
from bankfeed.utils.clock import Clock, system_clock, fixed_clock
from bankfeed.utils.text import clean_text, decode_bytes

__all__ = [
    "parse_date",
    "parse_date_with_pattern",
    "parse_iso_date",
    "parse_amount",
    "amount_to_integer",
    "integer_to_amount",
    "resolve_account",
    "Clock",
    "system_clock",
    "fixed_clock",
    "clean_text",
    "decode_bytes",
]
