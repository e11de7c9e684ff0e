"""Parsing of uploaded transaction files into an import batch."""

import csv
import io
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from famfin.domain.entities import (
    Account,
    CandidateTransaction,
    Category,
    ImportBatch,
    MissingCategory,
    ParseError,
    TransactionKind,
)
from famfin.domain.reference_resolver import ReferenceResolver
from famfin.utils.amount_parser import parse_amount, signed_amount
from famfin.utils.date_parser import parse_date

REQUIRED_COLUMNS = ("date", "name", "amount", "type", "category")
OPTIONAL_COLUMNS = ("account", "description")
CANDIDATE_DELIMITERS = ",;\t|"


@dataclass(frozen=True)
class ParsedRow:
    """A row whose fields all passed validation."""

    row_number: int
    name: str
    amount: Decimal
    date: date
    kind: TransactionKind
    category_name: str
    account_name: str
    description: Optional[str]


RowResult = Union[ParsedRow, ParseError]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a whole file."""

    transactions: list[CandidateTransaction]
    errors: list[ParseError]
    missing_categories: list[MissingCategory]


def missing_fields_message(row_number: int, fields: list[str]) -> str:
    return f"Linha {row_number}: Campos obrigatórios ausentes ({', '.join(fields)})."


def invalid_amount_message(row_number: int) -> str:
    return f"Linha {row_number}: Valor inválido para 'amount'."


def invalid_type_message(row_number: int) -> str:
    return f"Linha {row_number}: Tipo de transação inválido. Use 'income' ou 'expense'."


def invalid_date_message(row_number: int) -> str:
    return f"Linha {row_number}: Formato de data inválido. Use YYYY-MM-DD."


def detect_delimiter(content: str) -> str:
    """Guess the delimiter from the header line, defaulting to a comma.

    Data lines are left out of the sample because decimal commas in
    semicolon-separated files would make the comma look like a delimiter.
    """
    sample = content.split("\n", 1)[0]
    try:
        return csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        return ","


def read_rows(content: str) -> list[dict[str, str]]:
    """Split content into raw rows keyed by lower-cased header names.

    Blank lines are skipped. Missing cells come back as empty strings.
    """
    content = content.lstrip("\ufeff")
    if not content.strip():
        return []

    reader = csv.DictReader(io.StringIO(content), delimiter=detect_delimiter(content))
    if reader.fieldnames is None:
        return []
    reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]

    rows = []
    for row in reader:
        # Surplus cells are collected under the None key and ignored
        rows.append(
            {column: (value or "").strip() for column, value in row.items() if column is not None}
        )
    return rows


def parse_row(raw: dict[str, str], row_number: int) -> RowResult:
    """Validate one raw row field by field.

    Checks run in a fixed order (required fields, amount, type, date) and the
    first failure is reported.
    """
    missing = [column for column in REQUIRED_COLUMNS if not raw.get(column)]
    if missing:
        return ParseError(row_number, missing_fields_message(row_number, missing))

    try:
        amount = parse_amount(raw["amount"])
    except ValueError:
        return ParseError(row_number, invalid_amount_message(row_number))

    try:
        kind = TransactionKind(raw["type"])
    except ValueError:
        return ParseError(row_number, invalid_type_message(row_number))

    try:
        txn_date = parse_date(raw["date"])
    except ValueError:
        return ParseError(row_number, invalid_date_message(row_number))

    return ParsedRow(
        row_number=row_number,
        name=raw["name"],
        amount=signed_amount(amount, kind.value),
        date=txn_date,
        kind=kind,
        category_name=raw["category"],
        account_name=raw.get("account", ""),
        description=raw.get("description") or None,
    )


def parse_transactions(content: str, resolver: ReferenceResolver) -> ParseResult:
    """Parse file content and resolve every valid row.

    Rows are numbered as spreadsheet lines: the first data row is line 2.
    An empty or header-only file gives an empty result, not an error.
    """
    transactions = []
    errors = []

    for index, raw in enumerate(read_rows(content)):
        result = parse_row(raw, index + 2)
        if isinstance(result, ParseError):
            errors.append(result)
            continue

        transactions.append(
            resolver.resolve(
                row_number=result.row_number,
                name=result.name,
                amount=result.amount,
                date=result.date,
                kind=result.kind,
                category_name=result.category_name,
                account_name=result.account_name,
                description=result.description,
            )
        )

    return ParseResult(
        transactions=transactions,
        errors=errors,
        missing_categories=resolver.missing_categories,
    )


def build_import_batch(
    content: str,
    account: Account,
    accounts: list[Account],
    categories: list[Category],
    workspace_id: Optional[int] = None,
    source_name: Optional[str] = None,
) -> ImportBatch:
    """Parse an upload for the selected account into a stageable batch.

    The projected balance of each affected account is its balance right now
    plus the signed amounts of the batch's rows for that account.
    """
    resolver = ReferenceResolver(account, accounts, categories)
    result = parse_transactions(content, resolver)

    projected: dict[int, Decimal] = {}
    for txn in result.transactions:
        if txn.resolved_account_id not in projected:
            projected[txn.resolved_account_id] = account.balance
        projected[txn.resolved_account_id] += txn.amount

    return ImportBatch(
        transactions=result.transactions,
        errors=result.errors,
        missing_categories=result.missing_categories,
        account_balance_deltas=projected,
        selected_account_id=account.id,
        selected_account_display_name=account.name,
        workspace_id=workspace_id,
        source_name=source_name,
    )
