"""ISO 20022 CAMT.053 (bank-to-customer statement) parser."""

import xml.etree.ElementTree as ET
from typing import Optional

from bankfeed.domain.entities import ImportErrorEntry, RawRecord
from bankfeed.domain.errors import ParseError
from bankfeed.parsers.base import ParseResult

# Entry references that do not identify anything.
_PLACEHOLDER_REFS = {"NOTPROVIDED", "NONREF"}


def _text(element: Optional[ET.Element], path: str) -> Optional[str]:
    if element is None:
        return None
    found = element.find(path)
    if found is None or found.text is None:
        return None
    value = found.text.strip()
    return value or None


def _entry_date(entry: ET.Element) -> Optional[str]:
    for path in ("{*}BookgDt/{*}Dt", "{*}BookgDt/{*}DtTm", "{*}ValDt/{*}Dt", "{*}ValDt/{*}DtTm"):
        value = _text(entry, path)
        if value:
            return value[:10]
    return None


def _entry_id(entry: ET.Element, details: Optional[ET.Element]) -> Optional[str]:
    for value in (
        _text(entry, "{*}AcctSvcrRef"),
        _text(entry, "{*}NtryRef"),
        _text(details, "{*}Refs/{*}AcctSvcrRef"),
        _text(details, "{*}Refs/{*}EndToEndId"),
    ):
        if value and value.upper() not in _PLACEHOLDER_REFS:
            return value
    return None


def _counterparty(details: Optional[ET.Element], debit: bool) -> Optional[str]:
    """Name of the other party: the creditor for debits, the debtor for credits."""
    party = "Cdtr" if debit else "Dbtr"
    # camt.053.001.08 nests the name under Pty
    for path in (
        f"{{*}}RltdPties/{{*}}{party}/{{*}}Nm",
        f"{{*}}RltdPties/{{*}}{party}/{{*}}Pty/{{*}}Nm",
    ):
        value = _text(details, path)
        if value:
            return value
    return None


def _remittance(details: Optional[ET.Element]) -> Optional[str]:
    if details is None:
        return None
    lines = [
        el.text.strip()
        for el in details.findall("{*}RmtInf/{*}Ustrd")
        if el.text and el.text.strip()
    ]
    return " ".join(lines) or None


def parse_camt(content: bytes) -> ParseResult:
    """Parse CAMT.053 XML content into raw records.

    Raises:
        ParseError: If the content is not well-formed CAMT.053 XML
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ParseError(f"File is not valid XML: {e}") from e

    statements = root.findall("{*}BkToCstmrStmt/{*}Stmt")
    if root.find("{*}BkToCstmrStmt") is None:
        raise ParseError("File is not a CAMT.053 statement")

    result = ParseResult()
    index = 0
    for statement in statements:
        for entry in statement.findall("{*}Ntry"):
            index += 1
            details = entry.find("{*}NtryDtls/{*}TxDtls")
            source_id = _entry_id(entry, details)
            ref = f"Entry {source_id or index}"

            amount = _text(entry, "{*}Amt")
            if amount is None:
                result.errors.append(ImportErrorEntry(f"{ref}: missing amount", ref))
                continue
            booked = _entry_date(entry)
            if booked is None:
                result.errors.append(ImportErrorEntry(f"{ref}: missing date", ref))
                continue

            debit = _text(entry, "{*}CdtDbtInd") == "DBIT"
            if debit and not amount.startswith("-"):
                amount = f"-{amount}"

            info = _text(entry, "{*}AddtlNtryInf")
            payee = _counterparty(details, debit)
            notes = _remittance(details)
            result.records.append(
                RawRecord(
                    date=booked,
                    amount=amount,
                    payee=payee or info,
                    notes=notes or (info if payee else None),
                    source_id=source_id,
                    ref=ref,
                )
            )
    return result
