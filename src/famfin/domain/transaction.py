"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal
from famfin.database.base import Database
from famfin.domain.category import CategoryService
from famfin.domain.entities import (
    Transaction as TransactionEntity,
    TransactionDraft,
    TransactionKind,
)
from famfin.domain.errors import NotFoundError, ValidationError, account_not_found
from famfin.utils.amount_parser import parse_amount, signed_amount


class TransactionService:
    """Service for entering and listing transactions one at a time."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def add_transaction(
        self,
        workspace_id: int,
        user_id: str,
        account_id: int,
        name: str,
        amount: str | Decimal,
        kind: TransactionKind,
        category: str | int,
        date: date,
        description: Optional[str] = None,
    ) -> int:
        """Record a single transaction and apply it to the account balance.

        Args:
            workspace_id: Workspace ID
            user_id: User entering the transaction
            account_id: Account ID
            name: Transaction name
            amount: Positive amount; the sign is derived from kind
            kind: income or expense
            category: Category name or ID, must have the same kind
            date: Transaction date
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If account or category doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Transaction name must not be empty")

        try:
            kind = TransactionKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid transaction type '{kind}'. Use 'income' or 'expense'.")

        try:
            value = parse_amount(str(amount))
        except ValueError as e:
            raise ValidationError(str(e))

        account = self.db.get_account(account_id)
        if account is None or account.workspace_id != workspace_id:
            raise NotFoundError(account_not_found(account_id))

        found = self.category_service.resolve_category(workspace_id, category, kind)

        return self.db.create_transaction(
            TransactionDraft(
                workspace_id=workspace_id,
                user_id=user_id,
                account_id=account_id,
                category_id=found.id,
                name=name,
                amount=signed_amount(value, kind.value),
                date=date,
                description=description or None,
            )
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self, workspace_id: int, account_id: Optional[int] = None
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            workspace_id: Workspace ID
            account_id: Optional account ID filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(workspace_id, account_id=account_id)
