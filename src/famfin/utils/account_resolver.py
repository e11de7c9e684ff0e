"""Utility for resolving account names to IDs."""

from famfin.domain.account import AccountService
from famfin.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, workspace_id: int, account: str | int) -> int:
    """Resolve account name or ID to account ID within a workspace.

    Names are matched case-insensitively.

    Args:
        account_service: AccountService instance
        workspace_id: Workspace the account must belong to
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        account_obj = account_service.get_account(account)
        if account_obj is None or account_obj.workspace_id != workspace_id:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        account_obj = account_service.get_account(account_id)
        if account_obj is None or account_obj.workspace_id != workspace_id:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    found = account_service.find_account_by_name(workspace_id, account)
    if found is None:
        raise NotFoundError(f"Account '{account}' not found")
    return found.id
