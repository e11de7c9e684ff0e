"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from famfin.domain.entities import (
    Workspace,
    Account,
    Category,
    Transaction,
    TransactionDraft,
    TransactionKind,
)


class Database(ABC):
    """Abstract database interface for famfin."""

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

    # Workspace operations
    @abstractmethod
    def create_workspace(self, name: str) -> int:
        """Create a workspace. Returns workspace ID."""
        pass

    @abstractmethod
    def get_workspace_by_name(self, name: str) -> Optional[Workspace]:
        """Get workspace by name."""
        pass

    @abstractmethod
    def list_workspaces(self) -> list[Workspace]:
        """List all workspaces."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, workspace_id: int, name: str, balance: Decimal = Decimal("0")) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, workspace_id: int) -> list[Account]:
        """List all accounts of a workspace."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, workspace_id: int, name: str, kind: TransactionKind) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(
        self, workspace_id: int, kind: Optional[TransactionKind] = None
    ) -> list[Category]:
        """List categories of a workspace, optionally filtered by kind."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, draft: TransactionDraft) -> int:
        """Create a single transaction and apply its amount to the account balance.

        Returns transaction ID.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, workspace_id: int, account_id: Optional[int] = None
    ) -> list[Transaction]:
        """List transactions of a workspace, newest first.

        Args:
            workspace_id: Workspace to list
            account_id: Optional account ID filter
        """
        pass

    @abstractmethod
    def apply_import(
        self, drafts: list[TransactionDraft], balance_deltas: dict[int, Decimal]
    ) -> list[int]:
        """Insert a batch of transactions and increment account balances.

        Both happen in one database transaction: either every row is inserted
        and every balance incremented, or nothing is written.

        Returns:
            IDs of the inserted transactions, in draft order

        Raises:
            StoreError: If the write fails
        """
        pass
