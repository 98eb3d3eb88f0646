"""Common parser contract.

Every format parser is a plain function ``parse(content: bytes) ->
ParseResult``. A parser reports per-record problems in ``errors`` and keeps
going; it raises ``ParseError`` only when the file as a whole is unreadable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from bankfeed.domain.entities import ImportErrorEntry, RawRecord


class FileFormat(str, Enum):
    """Supported statement file formats."""

    QIF = "qif"
    OFX = "ofx"
    QFX = "qfx"
    CAMT053 = "camt.053"


@dataclass
class ParseResult:
    """Records and per-record errors produced by a parser."""

    records: list[RawRecord] = field(default_factory=list)
    errors: list[ImportErrorEntry] = field(default_factory=list)


class Parser(Protocol):
    """Callable that converts file content into raw records."""

    def __call__(self, content: bytes) -> ParseResult: ...
