"""Tests for record normalization."""

import pytest
from datetime import date, datetime, UTC

from bankfeed.domain.entities import ImportOptions, RawRecord
from bankfeed.domain.errors import ParseError, ValidationError
from bankfeed.domain.normalizer import normalize_record
from bankfeed.utils.clock import fixed_clock

ISO = ImportOptions()


def test_normalizes_amount_date_and_payee():
    raw = RawRecord(
        date="2024-01-05",
        amount="-25.00",
        payee="  Shell&amp;Oil  ",
        notes="Fuel",
        source_id=" F1 ",
        ref="Transaction F1",
    )
    txn = normalize_record(raw, 7, ISO)

    assert txn.account_id == 7
    assert txn.date == date(2024, 1, 5)
    assert txn.amount == -2500
    assert txn.imported_payee == "Shell&Oil"
    assert txn.payee == "Shell&Oil"
    assert txn.notes == "Fuel"
    assert txn.source_id == "F1"
    assert txn.import_id is None
    assert txn.ref == "Transaction F1"


def test_display_payee_differs_from_imported_payee():
    txn = normalize_record(RawRecord(date="2024-01-05", amount="1", payee="*POS* Bakery -"), 1, ISO)
    assert txn.imported_payee == "*POS* Bakery -"
    assert txn.payee == "POS* Bakery"


def test_missing_payee_becomes_empty_string():
    txn = normalize_record(RawRecord(date="2024-01-05", amount="1"), 1, ISO)
    assert txn.imported_payee == ""
    assert txn.payee == ""
    assert txn.notes is None


def test_notes_dropped_when_disabled():
    raw = RawRecord(date="2024-01-05", amount="1", payee="X", notes="memo")
    txn = normalize_record(raw, 1, ImportOptions(import_notes=False))
    assert txn.notes is None


def test_date_pattern_and_two_digit_year():
    clock = fixed_clock(datetime(2024, 6, 1, tzinfo=UTC))
    raw = RawRecord(date="15.01.24", amount="1")
    txn = normalize_record(raw, 1, ImportOptions(date_format="dd.MM.yy"), clock)
    assert txn.date == date(2024, 1, 15)


def test_missing_amount_is_parse_error():
    with pytest.raises(ParseError, match="Record 3: missing amount") as exc_info:
        normalize_record(RawRecord(date="2024-01-05", amount="", ref="Record 3"), 1, ISO)
    assert exc_info.value.source_ref == "Record 3"


def test_missing_date_is_parse_error():
    with pytest.raises(ParseError, match="missing date"):
        normalize_record(RawRecord(date=" ", amount="1"), 1, ISO)


def test_bad_amount_is_validation_error():
    with pytest.raises(ValidationError, match="Record 1: Could not parse amount"):
        normalize_record(RawRecord(date="2024-01-05", amount="ten", ref="Record 1"), 1, ISO)


def test_date_not_matching_pattern_is_validation_error():
    raw = RawRecord(date="2024-01-05", amount="1", ref="Record 2")
    with pytest.raises(ValidationError, match="Record 2: Could not parse date"):
        normalize_record(raw, 1, ImportOptions(date_format="MM/dd/yyyy"))


def test_non_iso_date_without_pattern_is_validation_error():
    with pytest.raises(ValidationError, match="expected YYYY-MM-DD"):
        normalize_record(RawRecord(date="01/05/2024", amount="1"), 1, ISO)


def test_bytes_payee_is_decoded():
    txn = normalize_record(RawRecord(date="2024-01-05", amount="1", payee=b"Caf\xe9"), 1, ISO)
    assert txn.payee == "Café"
