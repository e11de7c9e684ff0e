"""Domain model entities for famfin.

These are pure data classes representing business concepts, independent of
database schema. The import pipeline types (candidate transactions, parse
errors, missing categories and the staged batch) live here as well so the
staging store can serialize them without touching the database layer.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionKind(str, Enum):
    """Direction of money for a category or transaction."""

    INCOME = "income"
    EXPENSE = "expense"


TRANSACTION_STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class Workspace:
    """Data-isolation boundary for accounts, categories and transactions."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    workspace_id: int
    name: str
    balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Income or expense category."""

    id: int
    workspace_id: int
    name: str
    kind: TransactionKind
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    workspace_id: int
    user_id: str
    account_id: int
    category_id: Optional[int]
    name: str
    amount: Decimal
    date: date
    status: str
    description: Optional[str]
    credit_card_bill_id: Optional[int]
    installment_number: Optional[int]
    total_installments: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class TransactionDraft:
    """A finalized transaction row ready to be written to the store."""

    workspace_id: int
    user_id: str
    account_id: int
    category_id: int
    name: str
    amount: Decimal
    date: date
    description: Optional[str] = None
    status: str = TRANSACTION_STATUS_COMPLETED
    credit_card_bill_id: Optional[int] = None
    installment_number: Optional[int] = None
    total_installments: Optional[int] = None


def category_key(name: str, kind: TransactionKind) -> tuple[str, TransactionKind]:
    """Return the lookup key used to match category names."""
    return (name.strip().casefold(), kind)


@dataclass(frozen=True)
class CandidateTransaction:
    """One successfully parsed upload row, awaiting commit."""

    name: str
    amount: Decimal
    date: date
    kind: TransactionKind
    original_category_name: str
    original_account_name: str
    description: Optional[str]
    resolved_category_id: Optional[int]
    resolved_account_id: int
    row_number: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "kind": self.kind.value,
            "original_category_name": self.original_category_name,
            "original_account_name": self.original_account_name,
            "description": self.description,
            "resolved_category_id": self.resolved_category_id,
            "resolved_account_id": self.resolved_account_id,
            "row_number": self.row_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CandidateTransaction":
        return cls(
            name=data["name"],
            amount=Decimal(data["amount"]),
            date=date.fromisoformat(data["date"]),
            kind=TransactionKind(data["kind"]),
            original_category_name=data["original_category_name"],
            original_account_name=data.get("original_account_name", ""),
            description=data.get("description"),
            resolved_category_id=data.get("resolved_category_id"),
            resolved_account_id=data["resolved_account_id"],
            row_number=data["row_number"],
        )


@dataclass(frozen=True)
class ParseError:
    """A row of the upload that could not be turned into a transaction."""

    row_number: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"row_number": self.row_number, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParseError":
        return cls(row_number=data["row_number"], message=data["message"])


@dataclass(frozen=True)
class MissingCategory:
    """A distinct (category name, kind) pair with no known category."""

    name: str
    kind: TransactionKind
    mapped_to_id: Optional[int] = None

    @property
    def key(self) -> tuple[str, TransactionKind]:
        return category_key(self.name, self.kind)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "kind": self.kind.value, "mapped_to_id": self.mapped_to_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MissingCategory":
        return cls(
            name=data["name"],
            kind=TransactionKind(data["kind"]),
            mapped_to_id=data.get("mapped_to_id"),
        )


@dataclass
class ImportBatch:
    """Parsed-but-uncommitted upload, held in the staging store.

    ``account_balance_deltas`` maps each affected account to the balance it is
    projected to reach once the batch is applied, computed from the balance
    read at parse time.
    """

    transactions: list[CandidateTransaction]
    errors: list[ParseError]
    missing_categories: list[MissingCategory]
    account_balance_deltas: dict[int, Decimal]
    selected_account_id: int
    selected_account_display_name: str
    workspace_id: Optional[int] = None
    source_name: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def is_commit_ready(self) -> bool:
        return all(m.mapped_to_id is not None for m in self.missing_categories)

    def with_missing_categories(self, missing: list[MissingCategory]) -> "ImportBatch":
        return replace(self, missing_categories=list(missing))

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactions": [t.to_dict() for t in self.transactions],
            "errors": [e.to_dict() for e in self.errors],
            "missing_categories": [m.to_dict() for m in self.missing_categories],
            "account_balance_deltas": {
                str(account_id): str(balance)
                for account_id, balance in self.account_balance_deltas.items()
            },
            "selected_account_id": self.selected_account_id,
            "selected_account_display_name": self.selected_account_display_name,
            "workspace_id": self.workspace_id,
            "source_name": self.source_name,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImportBatch":
        return cls(
            transactions=[CandidateTransaction.from_dict(t) for t in data["transactions"]],
            errors=[ParseError.from_dict(e) for e in data["errors"]],
            missing_categories=[MissingCategory.from_dict(m) for m in data["missing_categories"]],
            account_balance_deltas={
                int(account_id): Decimal(balance)
                for account_id, balance in data["account_balance_deltas"].items()
            },
            selected_account_id=data["selected_account_id"],
            selected_account_display_name=data["selected_account_display_name"],
            workspace_id=data.get("workspace_id"),
            source_name=data.get("source_name"),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
