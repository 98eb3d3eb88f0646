"""Stable deduplication keys for imported transactions."""

import hashlib
import re
from collections import Counter
from dataclasses import replace
from datetime import date
from typing import Iterable

from bankfeed.domain.entities import NormalizedTransaction

FINGERPRINT_PREFIX = "fp:"


def normalize_payee(payee: str) -> str:
    """Normalize a payee for fingerprinting.

    Lowercases, drops non-alphanumeric characters and collapses spaces.
    """
    value = payee.strip().lower()
    value = re.sub(r"[^\w\s]", "", value)
    value = re.sub(r"\s+", " ", value)
    return value.strip()


def fingerprint(account_id: int, txn_date: date, amount: int, payee: str, occurrence: int) -> str:
    """Return a deterministic import ID for a transaction without a source ID.

    ``occurrence`` counts earlier transactions in the same file with the same
    date, amount and payee, so identical transactions get distinct keys.
    """
    parts = f"{account_id}|{txn_date.isoformat()}|{amount}|{normalize_payee(payee)}|{occurrence}"
    return FINGERPRINT_PREFIX + hashlib.sha256(parts.encode("utf-8")).hexdigest()


class ImportIdAssigner:
    """Assigns import IDs to the transactions of one file, in file order."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        self._occurrences: Counter = Counter()

    def assign_one(self, txn: NormalizedTransaction) -> NormalizedTransaction:
        """Return ``txn`` with its import ID set."""
        if txn.source_id:
            return replace(txn, import_id=txn.source_id)

        key = (txn.date, txn.amount, normalize_payee(txn.payee))
        occurrence = self._occurrences[key]
        self._occurrences[key] += 1
        return replace(
            txn,
            import_id=fingerprint(self.account_id, txn.date, txn.amount, txn.payee, occurrence),
        )

    def assign(self, transactions: Iterable[NormalizedTransaction]) -> list[NormalizedTransaction]:
        """Return all transactions with import IDs set."""
        return [self.assign_one(txn) for txn in transactions]
