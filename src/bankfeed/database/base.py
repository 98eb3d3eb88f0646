"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from bankfeed.domain.entities import Account, LedgerTransaction


class Database(ABC):
    """Abstract database interface for bankfeed."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into one transaction.

        Everything written inside the block is committed on normal exit and
        rolled back on any exception. Nested blocks join the outermost one.

        Raises:
            StorageError: If the storage engine fails; the block is rolled back
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, bank_name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: int,
        payee: Optional[str] = None,
        imported_payee: Optional[str] = None,
        notes: Optional[str] = None,
        category: Optional[str] = None,
        import_id: Optional[str] = None,
        imported_at: Optional[datetime] = None,
    ) -> int:
        """Create a transaction. ``amount`` is in minor units. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[LedgerTransaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_import_id(
        self, account_id: int, import_id: str
    ) -> Optional[LedgerTransaction]:
        """Get the transaction carrying ``import_id`` in an account."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        unreconciled: bool = False,
    ) -> list[LedgerTransaction]:
        """List transactions with optional filters.

        Args:
            account_id: Optional account ID filter
            start_date: Optional start date filter
            end_date: Optional end date filter
            unreconciled: If True, only return transactions without an import ID
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        imported_payee: Optional[str] = None,
        payee: Optional[str] = None,
        notes: Optional[str] = None,
        import_id: Optional[str] = None,
        imported_at: Optional[datetime] = None,
        user_edited: Optional[bool] = None,
    ) -> None:
        """Apply import-driven changes.

        ``user_edited`` is only changed when passed explicitly.
        """
        pass

    @abstractmethod
    def edit_transaction(
        self,
        transaction_id: int,
        payee: Optional[str] = None,
        notes: Optional[str] = None,
        category: Optional[str] = None,
    ) -> bool:
        """Apply a user edit and mark the row user-edited if anything changed.

        Returns True if any value changed.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass
