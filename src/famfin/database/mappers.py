"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from decimal import Decimal

from famfin.domain import entities as domain
from famfin.database.models import (
    Workspace as ORMWorkspace,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def workspace_to_domain(orm_workspace: ORMWorkspace) -> domain.Workspace:
    """Convert SQLAlchemy Workspace model to domain Workspace entity."""
    return domain.Workspace(
        id=orm_workspace.id,
        name=orm_workspace.name,
        created_at=orm_workspace.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        workspace_id=orm_account.workspace_id,
        name=orm_account.name,
        balance=Decimal(orm_account.balance),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        workspace_id=orm_category.workspace_id,
        name=orm_category.name,
        kind=domain.TransactionKind(orm_category.kind),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        workspace_id=orm_transaction.workspace_id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        name=orm_transaction.name,
        amount=Decimal(orm_transaction.amount),
        date=orm_transaction.date,
        status=orm_transaction.status,
        description=orm_transaction.description,
        credit_card_bill_id=orm_transaction.credit_card_bill_id,
        installment_number=orm_transaction.installment_number,
        total_installments=orm_transaction.total_installments,
        created_at=orm_transaction.created_at,
    )


def draft_to_orm(draft: domain.TransactionDraft) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a finalized draft."""
    return ORMTransaction(
        workspace_id=draft.workspace_id,
        user_id=draft.user_id,
        account_id=draft.account_id,
        category_id=draft.category_id,
        name=draft.name,
        amount=draft.amount,
        date=draft.date,
        status=draft.status,
        description=draft.description,
        credit_card_bill_id=draft.credit_card_bill_id,
        installment_number=draft.installment_number,
        total_installments=draft.total_installments,
    )
