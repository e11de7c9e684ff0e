"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from famfin.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)
from famfin.database.mappers import (
    account_to_domain,
    category_to_domain,
    draft_to_orm,
    transaction_to_domain,
)
from famfin.domain.entities import (
    Account,
    Category,
    Transaction,
    TransactionDraft,
    TransactionKind,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            workspace_id=2,
            name="Conta Corrente",
            balance=Decimal("1000.00"),
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.workspace_id == 2
        assert domain_account.balance == Decimal("1000.00")
        assert domain_account.created_at == orm_account.created_at


class TestCategoryMapper:
    def test_kind_becomes_enum(self):
        orm_category = ORMCategory(
            id=1, workspace_id=1, name="Salário", kind="income", created_at=datetime.now(UTC)
        )
        category = category_to_domain(orm_category)

        assert isinstance(category, Category)
        assert category.kind is TransactionKind.INCOME


class TestTransactionMapper:
    def test_transaction_to_domain(self):
        orm_txn = ORMTransaction(
            id=5,
            workspace_id=1,
            user_id="local",
            account_id=1,
            category_id=3,
            name="Mercado",
            amount=Decimal("-52.30"),
            date=date(2024, 1, 15),
            status="completed",
            description=None,
            credit_card_bill_id=None,
            installment_number=None,
            total_installments=None,
            created_at=datetime.now(UTC),
        )
        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.amount == Decimal("-52.30")
        assert txn.description is None

    def test_draft_to_orm(self):
        draft = TransactionDraft(
            workspace_id=1,
            user_id="ana",
            account_id=1,
            category_id=3,
            name="Mercado",
            amount=Decimal("-52.30"),
            date=date(2024, 1, 15),
            description="Feira",
        )
        row = draft_to_orm(draft)

        assert row.id is None
        assert row.user_id == "ana"
        assert row.status == "completed"
        assert row.description == "Feira"
