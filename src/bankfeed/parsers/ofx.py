"""OFX and QFX parser.

Handles both OFX 1.x (SGML, unclosed leaf tags) and OFX 2.x (XML). The
character set is taken from the OFX header or XML declaration; free-text
values are left escaped for the normalizer to clean.
"""

import re
from typing import Optional

from bankfeed.domain.entities import ImportErrorEntry, RawRecord
from bankfeed.domain.errors import ParseError
from bankfeed.parsers.base import ParseResult
from bankfeed.utils.text import decode_bytes

_HEADER_RE = re.compile(rb"^\s*(ENCODING|CHARSET)\s*:\s*([^\r\n]+)", re.IGNORECASE | re.MULTILINE)
_XML_ENCODING_RE = re.compile(rb"<\?xml[^>]*encoding=[\"']([^\"']+)[\"']", re.IGNORECASE)
_OFX_ROOT_RE = re.compile(r"<OFX>", re.IGNORECASE)
_STMTTRN_RE = re.compile(
    r"<STMTTRN>(.*?)(?=</STMTTRN>|<STMTTRN>|</BANKTRANLIST>)", re.IGNORECASE | re.DOTALL
)


def _declared_charset(content: bytes) -> Optional[str]:
    """Return the charset declared in the OFX header, if any."""
    match = _XML_ENCODING_RE.search(content[:1024])
    if match:
        return match.group(1).decode("ascii", errors="ignore")

    headers = {
        key.decode("ascii").upper(): value.decode("ascii", errors="ignore").strip()
        for key, value in _HEADER_RE.findall(content[:1024])
    }
    encoding = headers.get("ENCODING", "")
    charset = headers.get("CHARSET", "")
    if encoding.upper() in ("UTF-8", "UNICODE"):
        return "utf-8"
    return charset or encoding or None


def _field(block: str, tag: str) -> Optional[str]:
    """Return the value of a leaf element inside a transaction block."""
    match = re.search(rf"<{tag}>([^<\r\n]*)", block, re.IGNORECASE)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def _ofx_date(value: str) -> str:
    """Convert ``YYYYMMDD[HHMMSS[.XXX][TZ]]`` to ``YYYY-MM-DD``."""
    digits = value[:8]
    if len(digits) == 8 and digits.isdigit():
        return f"{digits[:4]}-{digits[4:6]}-{digits[6:8]}"
    return value


def parse_ofx(content: bytes) -> ParseResult:
    """Parse OFX/QFX content into raw records.

    Raises:
        ParseError: If the content has no OFX body
    """
    text = decode_bytes(content, _declared_charset(content))
    if not _OFX_ROOT_RE.search(text):
        raise ParseError("File does not contain an OFX document")

    result = ParseResult()
    for index, match in enumerate(_STMTTRN_RE.finditer(text), start=1):
        block = match.group(1)
        fitid = _field(block, "FITID")
        ref = f"Transaction {fitid or index}"

        posted = _field(block, "DTPOSTED") or _field(block, "DTUSER")
        if posted is None:
            result.errors.append(ImportErrorEntry(f"{ref}: missing date", ref))
            continue
        amount = _field(block, "TRNAMT")
        if amount is None:
            result.errors.append(ImportErrorEntry(f"{ref}: missing amount", ref))
            continue

        name = _field(block, "NAME")
        memo = _field(block, "MEMO")
        result.records.append(
            RawRecord(
                date=_ofx_date(posted),
                amount=amount,
                payee=name or memo,
                notes=memo,
                source_id=fitid,
                ref=ref,
            )
        )
    return result
