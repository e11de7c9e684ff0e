"""Resolution of category and account names found in an upload."""

from datetime import date
from decimal import Decimal
from typing import Optional

from famfin.domain.entities import (
    Account,
    CandidateTransaction,
    Category,
    MissingCategory,
    TransactionKind,
    category_key,
)
from famfin.domain.errors import NotFoundError, account_not_found


class ReferenceResolver:
    """Matches parsed rows against the workspace's accounts and categories.

    The account is chosen once for the whole upload, so it is validated here
    and applied to every row; the ``account`` column of the file is kept only
    for display. Category names are matched case-insensitively among the
    categories of the row's kind. Names without a match are collected as
    MissingCategory entries, one per distinct (name, kind).
    """

    def __init__(self, account: Account, accounts: list[Account], categories: list[Category]):
        """Initialize resolver.

        Args:
            account: Account selected for the upload
            accounts: Known accounts of the workspace
            categories: Known categories of the workspace

        Raises:
            NotFoundError: If the selected account is not a known account
        """
        if not any(acc.id == account.id for acc in accounts):
            raise NotFoundError(account_not_found(account.id))

        self.account = account
        self._categories: dict[tuple[str, TransactionKind], int] = {}
        for category in categories:
            # First match wins
            self._categories.setdefault(category_key(category.name, category.kind), category.id)
        self._missing: dict[tuple[str, TransactionKind], MissingCategory] = {}

    def find_category(self, name: str, kind: TransactionKind) -> Optional[int]:
        """Return the ID of the category called name with the given kind."""
        return self._categories.get(category_key(name, kind))

    def resolve(
        self,
        *,
        row_number: int,
        name: str,
        amount: Decimal,
        date: date,
        kind: TransactionKind,
        category_name: str,
        account_name: str,
        description: Optional[str],
    ) -> CandidateTransaction:
        """Build the candidate transaction for one parsed row."""
        category_id = self.find_category(category_name, kind)
        if category_id is None:
            key = category_key(category_name, kind)
            if key not in self._missing:
                self._missing[key] = MissingCategory(name=category_name.strip(), kind=kind)

        return CandidateTransaction(
            name=name,
            amount=amount,
            date=date,
            kind=kind,
            original_category_name=category_name,
            original_account_name=account_name,
            description=description,
            resolved_category_id=category_id,
            resolved_account_id=self.account.id,
            row_number=row_number,
        )

    @property
    def missing_categories(self) -> list[MissingCategory]:
        """Distinct unmatched categories, in order of first appearance."""
        return list(self._missing.values())
