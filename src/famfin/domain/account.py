"""Account domain service."""

from decimal import Decimal
from typing import Optional
from famfin.database.base import Database
from famfin.domain.entities import Account as AccountEntity
from famfin.domain.errors import ConflictError, ValidationError, duplicate_account_name


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, workspace_id: int, name: str, balance: Decimal = Decimal("0")) -> int:
        """Create a new account.

        Args:
            workspace_id: Workspace the account belongs to
            name: Account name
            balance: Opening balance

        Returns:
            Account ID

        Raises:
            ValidationError: If name is empty
            ConflictError: If an account with the same name exists in the workspace
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")

        if self.find_account_by_name(workspace_id, name) is not None:
            raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(workspace_id=workspace_id, name=name, balance=balance)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, workspace_id: int) -> list[AccountEntity]:
        """List all accounts of a workspace.

        Returns:
            List of account entities
        """
        return self.db.list_accounts(workspace_id)

    def find_account_by_name(self, workspace_id: int, name: str) -> Optional[AccountEntity]:
        """Find an account by name, ignoring case."""
        wanted = name.strip().casefold()
        for acc in self.db.list_accounts(workspace_id):
            if acc.name.casefold() == wanted:
                return acc
        return None
