"""Statement file import domain service."""

import logging
import threading
from pathlib import Path
from typing import Optional

from bankfeed.database.base import Database
from bankfeed.domain.entities import (
    ImportBatchResult,
    ImportOptions,
    NormalizedTransaction,
    ReconcileConfig,
)
from bankfeed.domain.errors import (
    IMPORT_CANCELLED,
    DomainError,
    NotFoundError,
    StorageError,
    account_not_found,
    unreadable_file,
)
from bankfeed.domain.import_ids import ImportIdAssigner
from bankfeed.domain.normalizer import normalize_record
from bankfeed.domain.reconcile import ReconciliationEngine
from bankfeed.domain.reporting import ErrorReporter
from bankfeed.parsers import PEEK_SIZE, ParseResult, detect_format, get_parser
from bankfeed.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)


class ImportCancelled(Exception):
    """Raised internally when the caller cancels before reconciliation."""


class FileImportService:
    """Service for importing bank statement files."""

    def __init__(
        self,
        db: Database,
        config: Optional[ReconcileConfig] = None,
        clock: Clock = system_clock,
    ):
        """Initialize file import service.

        Args:
            db: Database instance
            config: Reconciliation thresholds
            clock: Time source for date resolution and import stamps
        """
        self.db = db
        self.clock = clock
        self.engine = ReconciliationEngine(db, config, clock)

    def parse_file(self, file_path: str, reporter: ErrorReporter) -> ParseResult:
        """Detect the format of a file and parse it.

        Safe to run off the caller's thread; touches no storage.

        Raises:
            UnsupportedFormatError: If the file type is not supported
            ParseError: If the file content cannot be parsed at all
            OSError: If the file cannot be read
        """
        path = Path(file_path)
        # Unsupported names are rejected before the file is opened
        detect_format(path.name)
        content = path.read_bytes()
        fmt = detect_format(path.name, content[:PEEK_SIZE])
        logger.info("Parsing %s as %s (%d bytes)", path.name, fmt.value, len(content))

        result = get_parser(fmt)(content)
        reporter.extend(result.errors)
        return result

    def normalize(
        self,
        parsed: ParseResult,
        account_id: int,
        options: ImportOptions,
        reporter: ErrorReporter,
        cancel: Optional[threading.Event] = None,
    ) -> list[NormalizedTransaction]:
        """Normalize and key parsed records; bad records are reported and skipped."""
        transactions = []
        for raw in parsed.records:
            if cancel is not None and cancel.is_set():
                raise ImportCancelled()
            try:
                transactions.append(normalize_record(raw, account_id, options, self.clock))
            except DomainError as e:
                reporter.add(str(e), raw.ref)
        return ImportIdAssigner(account_id).assign(transactions)

    def import_file(
        self,
        file_path: str,
        account_id: int,
        options: Optional[ImportOptions] = None,
        cancel: Optional[threading.Event] = None,
    ) -> ImportBatchResult:
        """Import a statement file into an account.

        Args:
            file_path: Path to a QIF, OFX, QFX or CAMT.053 file
            account_id: Account to import into
            options: Date pattern and notes toggle
            cancel: Optional event; when set before reconciliation starts the
                import is abandoned with nothing applied

        Returns:
            ImportBatchResult. A fatal problem (unsupported type, unreadable
            file, cancellation, storage failure) yields exactly one error and
            no changes.

        Raises:
            NotFoundError: If the account does not exist
        """
        options = options or ImportOptions()
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        reporter = ErrorReporter()
        try:
            parsed = self.parse_file(file_path, reporter)
            transactions = self.normalize(parsed, account_id, options, reporter, cancel)
            if cancel is not None and cancel.is_set():
                raise ImportCancelled()
        except ImportCancelled:
            return reporter.fatal(IMPORT_CANCELLED)
        except OSError as e:
            return reporter.fatal(unreadable_file(file_path, e.strerror or str(e)))
        except DomainError as e:
            # UnsupportedFormatError, or a ParseError for the whole file
            return reporter.fatal(str(e))

        # From here on the import runs to completion
        try:
            added, updated = self.engine.reconcile(account_id, transactions, reporter)
        except StorageError as e:
            return reporter.fatal(str(e))

        result = reporter.build(added, updated)
        logger.info(
            "Imported %s into account %s: %d added, %d updated, %d errors",
            Path(file_path).name,
            account_id,
            len(result.added),
            len(result.updated),
            len(result.errors),
        )
        return result
