"""QIF (Quicken Interchange Format) parser.

QIF dates are locale dependent, so records carry the date string as found
and the normalizer applies the caller's date pattern.
"""

from bankfeed.domain.entities import ImportErrorEntry, RawRecord
from bankfeed.parsers.base import ParseResult
from bankfeed.utils.text import decode_bytes

# !Type: sections that hold transactions; others (categories, classes,
# memorized payees) are skipped.
_TRANSACTION_TYPES = {"bank", "cash", "ccard", "invst", "oth a", "oth l"}


def _qif_date(value: str) -> str:
    """Normalize QIF date quirks: ``1/ 2'04`` becomes ``1/2/04``."""
    return value.replace(" ", "").replace("'", "/")


def _finish_record(fields: dict[str, str], ref: str, result: ParseResult) -> None:
    if "D" not in fields:
        result.errors.append(ImportErrorEntry(f"{ref}: missing date", ref))
        return
    amount = fields.get("T") or fields.get("U")
    if not amount:
        result.errors.append(ImportErrorEntry(f"{ref}: missing amount", ref))
        return
    result.records.append(
        RawRecord(
            date=_qif_date(fields["D"]),
            amount=amount,
            payee=fields.get("P"),
            notes=fields.get("M"),
            ref=ref,
        )
    )


def parse_qif(content: bytes) -> ParseResult:
    """Parse QIF content into raw records.

    An ``!Account`` header introduces account blocks, which are skipped. It
    covers a single block unless ``!Option:AutoSwitch`` is set, in which case
    every block is an account until ``!Clear:AutoSwitch`` or the next
    ``!Type:`` header.
    """
    result = ParseResult()
    fields: dict[str, str] = {}
    in_transactions = True
    in_account_block = False
    auto_switch = False
    record_num = 0

    for line in decode_bytes(content).splitlines():
        if not line.strip():
            continue
        code, value = line[0], line[1:].strip()

        if code == "!":
            header = value.lower()
            if header.startswith("type:"):
                in_transactions = header[5:].strip() in _TRANSACTION_TYPES
                in_account_block = False
            elif header == "account":
                in_account_block = True
            elif header == "option:autoswitch":
                auto_switch = True
            elif header == "clear:autoswitch":
                auto_switch = False
                in_account_block = False
            fields = {}
            continue

        if code == "^":
            if in_account_block:
                in_account_block = auto_switch
            elif in_transactions and fields:
                record_num += 1
                _finish_record(fields, f"Record {record_num}", result)
            fields = {}
            continue

        if in_account_block or not in_transactions:
            continue

        # Split lines (S/E/$) repeat; only the first occurrence of a code counts.
        fields.setdefault(code, value)

    # Trailing record without a terminating caret
    if in_transactions and not in_account_block and fields:
        record_num += 1
        _finish_record(fields, f"Record {record_num}", result)

    return result
