"""Merge imported transactions into an account's ledger.

For each incoming transaction, in file order:

1. A row with the same import ID already exists: nothing is inserted. The
   row's payee and notes are refreshed unless the user has edited it.
2. Otherwise an unreconciled row (no import ID) with the same amount, a date
   within the tolerance window and a similar payee is claimed: the import ID
   is attached to it instead of inserting a duplicate. Payee and notes typed
   by hand are kept, and the row is then treated as user-edited.
3. Otherwise a new row is inserted.

A row claimed by one incoming transaction is never matched again in the same
batch. All writes for a batch happen in one storage transaction.
"""

import logging
import threading
import weakref
from typing import Iterable, Optional

from rapidfuzz import fuzz, utils

from bankfeed.database.base import Database
from bankfeed.domain.entities import LedgerTransaction, NormalizedTransaction, ReconcileConfig
from bankfeed.domain.errors import duplicate_import_id
from bankfeed.domain.reporting import ErrorReporter
from bankfeed.utils.clock import Clock, system_clock

logger = logging.getLogger(__name__)

# Writes to one account are serialized within the process.
_account_locks: weakref.WeakValueDictionary[int, threading.Lock] = weakref.WeakValueDictionary()
_account_locks_guard = threading.Lock()


def _lock_for(account_id: int) -> threading.Lock:
    """Return the lock for an account; unused locks are dropped."""
    with _account_locks_guard:
        lock = _account_locks.get(account_id)
        if lock is None:
            lock = threading.Lock()
            _account_locks[account_id] = lock
        return lock


def payee_similarity(existing: Optional[str], incoming: Optional[str]) -> float:
    """Score payee similarity from 0 to 100.

    A blank payee on the existing row matches anything.
    """
    if not existing:
        return 100.0
    if not incoming:
        return 0.0
    return fuzz.token_set_ratio(existing, incoming, processor=utils.default_process)


class ReconciliationEngine:
    """Applies normalized, keyed transactions to the ledger."""

    def __init__(
        self,
        db: Database,
        config: Optional[ReconcileConfig] = None,
        clock: Clock = system_clock,
    ):
        """Initialize reconciliation engine.

        Args:
            db: Database instance
            config: Fuzzy matching thresholds (defaults to same-day matching)
            clock: Time source for ``imported_at`` stamps
        """
        self.db = db
        self.config = config or ReconcileConfig()
        self.clock = clock

    def reconcile(
        self,
        account_id: int,
        transactions: Iterable[NormalizedTransaction],
        reporter: ErrorReporter,
    ) -> tuple[set[int], set[int]]:
        """Reconcile transactions into an account.

        Args:
            account_id: Account to import into
            transactions: Transactions with import IDs assigned, in file order
            reporter: Receives per-record problems

        Returns:
            Tuple of (added transaction IDs, updated transaction IDs)

        Raises:
            StorageError: If storage fails; no changes from this batch persist
        """
        added: set[int] = set()
        updated: set[int] = set()
        imported_at = self.clock()

        with _lock_for(account_id), self.db.atomic():
            candidates = {
                row.id: row
                for row in self.db.list_transactions(account_id=account_id, unreconciled=True)
            }
            seen_import_ids: set[str] = set()

            for txn in transactions:
                if txn.import_id is not None:
                    if txn.import_id in seen_import_ids:
                        reporter.add(duplicate_import_id(txn.import_id), txn.ref)
                        continue
                    seen_import_ids.add(txn.import_id)

                    existing = self.db.get_transaction_by_import_id(account_id, txn.import_id)
                    if existing is not None:
                        if self._refresh(existing, txn):
                            updated.add(existing.id)
                        continue

                match = self._find_fuzzy_match(txn, candidates.values())
                if match is not None:
                    del candidates[match.id]
                    self._claim(match, txn, imported_at)
                    updated.add(match.id)
                    continue

                added.add(
                    self.db.create_transaction(
                        account_id=account_id,
                        date=txn.date,
                        amount=txn.amount,
                        payee=txn.payee or None,
                        imported_payee=txn.imported_payee or None,
                        notes=txn.notes,
                        import_id=txn.import_id,
                        imported_at=imported_at,
                    )
                )

        logger.info(
            "Reconciled account %s: %d added, %d updated", account_id, len(added), len(updated)
        )
        return added, updated

    def _refresh(self, existing: LedgerTransaction, txn: NormalizedTransaction) -> bool:
        """Refresh an already-imported row from the new data. Returns True if changed."""
        if existing.user_edited:
            logger.debug("Keeping user-edited transaction %s", existing.id)
            return False

        changes = {}
        if txn.imported_payee and existing.imported_payee != txn.imported_payee:
            changes["imported_payee"] = txn.imported_payee
        if txn.payee and existing.payee != txn.payee:
            changes["payee"] = txn.payee
        if txn.notes and existing.notes != txn.notes:
            changes["notes"] = txn.notes

        if not changes:
            return False
        logger.debug("Refreshing transaction %s: %s", existing.id, sorted(changes))
        self.db.update_transaction(existing.id, **changes)
        return True

    def _find_fuzzy_match(
        self, txn: NormalizedTransaction, candidates: Iterable[LedgerTransaction]
    ) -> Optional[LedgerTransaction]:
        """Return the best unreconciled row for ``txn``, if any.

        Ties are broken by higher payee similarity, then closer date, then
        lower row ID.
        """
        best: Optional[LedgerTransaction] = None
        best_key = None
        for row in candidates:
            if row.amount != txn.amount:
                continue
            distance = abs((row.date - txn.date).days)
            if distance > self.config.date_tolerance_days:
                continue
            score = payee_similarity(row.payee or row.imported_payee, txn.payee)
            if score < self.config.payee_threshold:
                continue
            key = (-score, distance, row.id)
            if best_key is None or key < best_key:
                best, best_key = row, key
        return best

    def _claim(self, row: LedgerTransaction, txn: NormalizedTransaction, imported_at) -> None:
        """Attach an import to a manually entered row."""
        changes = {"imported_at": imported_at}
        if txn.import_id is not None:
            changes["import_id"] = txn.import_id
        if txn.imported_payee:
            changes["imported_payee"] = txn.imported_payee

        if not row.user_edited:
            if row.date != txn.date:
                changes["date"] = txn.date
            if not row.payee and txn.payee:
                changes["payee"] = txn.payee
            if not row.notes and txn.notes:
                changes["notes"] = txn.notes
            # Hand-entered payee or notes are user content from here on
            if row.payee or row.notes:
                changes["user_edited"] = True

        logger.debug("Matched import %s to existing transaction %s", txn.import_id, row.id)
        self.db.update_transaction(row.id, **changes)
