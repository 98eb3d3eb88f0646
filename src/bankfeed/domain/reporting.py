"""Error collection for an import batch."""

import logging
from typing import Iterable, Optional

from bankfeed.domain.entities import ImportBatchResult, ImportErrorEntry

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Collects non-fatal import errors and builds the batch result.

    A fatal error replaces everything collected so far: the result then holds
    exactly that one error and no added or updated transactions.
    """

    def __init__(self):
        self._errors: list[ImportErrorEntry] = []
        self._fatal: Optional[ImportErrorEntry] = None

    @property
    def errors(self) -> list[ImportErrorEntry]:
        return list(self._errors)

    def add(self, message: str, source_ref: Optional[str] = None) -> None:
        """Record a per-record error and continue."""
        logger.warning("Import error: %s", message)
        self._errors.append(ImportErrorEntry(message=message, source_ref=source_ref))

    def extend(self, entries: Iterable[ImportErrorEntry]) -> None:
        for entry in entries:
            self.add(entry.message, entry.source_ref)

    def fatal(self, message: str) -> ImportBatchResult:
        """Record a fatal error and return the corresponding result."""
        logger.error("Import aborted: %s", message)
        self._fatal = ImportErrorEntry(message=message)
        return self.build()

    def build(
        self, added: Iterable[int] = (), updated: Iterable[int] = ()
    ) -> ImportBatchResult:
        """Return the immutable result for this batch."""
        if self._fatal is not None:
            return ImportBatchResult(errors=(self._fatal,), fatal=True)
        return ImportBatchResult(
            errors=tuple(self._errors),
            added=frozenset(added),
            updated=frozenset(updated),
        )
