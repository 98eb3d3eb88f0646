"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the reconciliation engine only
ever sees domain entities.
"""

from bankfeed.domain import entities as domain
from bankfeed.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.LedgerTransaction:
    """Convert SQLAlchemy Transaction model to domain LedgerTransaction entity."""
    return domain.LedgerTransaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        imported_payee=orm_transaction.imported_payee,
        payee=orm_transaction.payee,
        notes=orm_transaction.notes,
        category=orm_transaction.category,
        import_id=orm_transaction.import_id,
        user_edited=bool(orm_transaction.user_edited),
        imported_at=orm_transaction.imported_at,
        created_at=orm_transaction.created_at,
    )
