"""Convert parser records into canonical transactions."""

from bankfeed.domain.entities import ImportOptions, NormalizedTransaction, RawRecord
from bankfeed.domain.errors import ParseError, ValidationError
from bankfeed.utils.amount_parser import amount_to_integer, parse_amount
from bankfeed.utils.clock import Clock, system_clock
from bankfeed.utils.date_parser import parse_date_with_pattern, parse_iso_date
from bankfeed.utils.text import clean_text, display_payee


def normalize_record(
    raw: RawRecord,
    account_id: int,
    options: ImportOptions,
    clock: Clock = system_clock,
) -> NormalizedTransaction:
    """Normalize one raw record.

    Args:
        raw: Record emitted by a parser
        account_id: Account the record is imported into
        options: Import options (date pattern, notes toggle)
        clock: Time source used to resolve two-digit years

    Returns:
        NormalizedTransaction without an import ID

    Raises:
        ValidationError: If the amount or date is malformed
        ParseError: If the record has no usable amount or date at all
    """
    ref = raw.ref
    if not raw.amount or not str(raw.amount).strip():
        raise ParseError(f"{ref or 'Record'}: missing amount", ref)
    if not raw.date or not raw.date.strip():
        raise ParseError(f"{ref or 'Record'}: missing date", ref)

    try:
        amount = amount_to_integer(parse_amount(raw.amount))
    except ValueError as e:
        raise ValidationError(f"{ref or 'Record'}: {e}") from e

    try:
        if options.date_format:
            txn_date = parse_date_with_pattern(raw.date, options.date_format, clock)
        else:
            txn_date = parse_iso_date(raw.date)
    except ValueError as e:
        raise ValidationError(f"{ref or 'Record'}: {e}") from e

    imported_payee = clean_text(raw.payee) or ""
    notes = clean_text(raw.notes) if options.import_notes else None

    return NormalizedTransaction(
        account_id=account_id,
        date=txn_date,
        amount=amount,
        imported_payee=imported_payee,
        payee=display_payee(imported_payee),
        notes=notes,
        source_id=raw.source_id.strip() if raw.source_id and raw.source_id.strip() else None,
        ref=ref,
    )
