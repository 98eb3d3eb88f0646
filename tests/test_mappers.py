"""Tests for database mappers."""

from datetime import datetime, date, UTC

from bankfeed.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)
from bankfeed.database.mappers import account_to_domain, transaction_to_domain
from bankfeed.domain.entities import Account, LedgerTransaction


def test_account_to_domain():
    """Test converting ORM Account to domain Account."""
    orm_account = ORMAccount(
        id=1,
        name="Test Account",
        bank_name="Test Bank",
        created_at=datetime.now(UTC),
    )
    domain_account = account_to_domain(orm_account)

    assert isinstance(domain_account, Account)
    assert domain_account.id == 1
    assert domain_account.name == "Test Account"
    assert domain_account.bank_name == "Test Bank"
    assert domain_account.created_at == orm_account.created_at


def test_transaction_to_domain():
    """Test converting ORM Transaction to domain LedgerTransaction."""
    now = datetime.now(UTC)
    orm_transaction = ORMTransaction(
        id=7,
        account_id=1,
        date=date(2024, 1, 15),
        amount=-5000,
        imported_payee="KROGER #123",
        payee="Kroger",
        notes="weekly",
        category="Food",
        import_id="FIT-9",
        user_edited=1,
        imported_at=now,
        created_at=now,
    )
    txn = transaction_to_domain(orm_transaction)

    assert isinstance(txn, LedgerTransaction)
    assert txn.id == 7
    assert txn.amount == -5000
    assert txn.payee == "Kroger"
    assert txn.imported_payee == "KROGER #123"
    assert txn.import_id == "FIT-9"
    assert txn.user_edited is True
    assert txn.imported_at == now


def test_transaction_to_domain_with_none_fields():
    orm_transaction = ORMTransaction(
        id=8,
        account_id=1,
        date=date(2024, 1, 15),
        amount=100,
        user_edited=None,
        created_at=datetime.now(UTC),
    )
    txn = transaction_to_domain(orm_transaction)

    assert txn.payee is None
    assert txn.import_id is None
    assert txn.user_edited is False
