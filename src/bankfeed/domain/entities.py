"""Domain model entities for bankfeed.

These are pure data classes representing business concepts, independent of
database schema. Parsers, the normalizer and the reconciliation engine only
exchange these types, so storage can change without touching import logic.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional, Union

from bankfeed.domain.errors import ValidationError


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    name: str
    bank_name: str
    created_at: datetime


@dataclass(frozen=True)
class LedgerTransaction:
    """Persisted transaction row.

    ``amount`` is an integer count of minor currency units (cents).
    ``user_edited`` is set by storage whenever a user changes payee, notes
    or category; imports never overwrite such rows.
    """

    id: int
    account_id: int
    date: date
    amount: int
    imported_payee: Optional[str]
    payee: Optional[str]
    notes: Optional[str]
    category: Optional[str]
    import_id: Optional[str]
    user_edited: bool
    imported_at: Optional[datetime]
    created_at: datetime


@dataclass(frozen=True)
class RawRecord:
    """Format-specific record as emitted by a parser."""

    date: str
    amount: str
    payee: Union[str, bytes, None] = None
    notes: Union[str, bytes, None] = None
    source_id: Optional[str] = None
    ref: Optional[str] = None


@dataclass(frozen=True)
class NormalizedTransaction:
    """Canonical transaction value produced from a RawRecord."""

    account_id: int
    date: date
    amount: int
    imported_payee: str
    payee: str
    notes: Optional[str] = None
    import_id: Optional[str] = None
    source_id: Optional[str] = None
    ref: Optional[str] = None


@dataclass(frozen=True)
class ImportOptions:
    """Per-file import options.

    ``date_format`` is required for formats that lack ISO dates (QIF).
    """

    date_format: Optional[str] = None
    import_notes: bool = True


@dataclass(frozen=True)
class ReconcileConfig:
    """Fuzzy matching thresholds for reconciliation."""

    date_tolerance_days: int = 0
    payee_threshold: float = 80.0

    def __post_init__(self):
        if self.date_tolerance_days < 0:
            raise ValidationError("Date tolerance must be zero or more days")
        if not 0 <= self.payee_threshold <= 100:
            raise ValidationError("Payee threshold must be between 0 and 100")


@dataclass(frozen=True)
class ImportErrorEntry:
    """One reported import problem."""

    message: str
    source_ref: Optional[str] = None


class ImportStatus(str, Enum):
    """Overall outcome of an import call."""

    CLEAN = "clean"
    PARTIAL = "partial"
    FATAL = "fatal"


@dataclass(frozen=True)
class ImportBatchResult:
    """Result of one import call. Immutable after return."""

    errors: tuple[ImportErrorEntry, ...] = ()
    added: frozenset[int] = field(default_factory=frozenset)
    updated: frozenset[int] = field(default_factory=frozenset)
    fatal: bool = False

    @property
    def status(self) -> ImportStatus:
        if self.fatal:
            return ImportStatus.FATAL
        if self.errors:
            return ImportStatus.PARTIAL
        return ImportStatus.CLEAN
