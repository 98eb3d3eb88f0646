"""Transaction domain service."""

from typing import Optional
from datetime import date
from bankfeed.database.base import Database
from bankfeed.domain.entities import LedgerTransaction as TransactionEntity
from bankfeed.domain.errors import (
    NotFoundError,
    account_not_found,
    transaction_not_found,
)


class TransactionService:
    """Service for manual ledger entries and user edits."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: int,
        payee: Optional[str] = None,
        notes: Optional[str] = None,
        category: Optional[str] = None,
    ) -> int:
        """Create a manually entered transaction.

        Manual entries have no import ID, so a later import can claim them
        by fuzzy match instead of adding a duplicate.

        Args:
            account_id: Account ID
            date: Transaction date
            amount: Amount in minor units (cents), negative for outflows
            payee: Optional payee
            notes: Optional notes
            category: Optional category label

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        return self.db.create_transaction(
            account_id=account_id,
            date=date,
            amount=amount,
            payee=payee or None,
            notes=notes or None,
            category=category or None,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def edit_transaction(
        self,
        transaction_id: int,
        payee: Optional[str] = None,
        notes: Optional[str] = None,
        category: Optional[str] = None,
    ) -> bool:
        """Apply a user edit.

        Any change to payee, notes or category marks the transaction as
        user-edited, which protects it from being overwritten by imports.
        Pass an empty string to clear a field.

        Returns:
            True if anything changed

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        return self.db.edit_transaction(
            transaction_id, payee=payee, notes=notes, category=category
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            account_id: Optional account ID filter
            start_date: Optional start date filter
            end_date: Optional end date filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            account_id=account_id, start_date=start_date, end_date=end_date
        )
