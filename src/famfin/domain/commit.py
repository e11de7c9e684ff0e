"""Commit of a fully mapped import batch into the store."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from famfin.database.base import Database
from famfin.domain.entities import ImportBatch, TransactionDraft
from famfin.domain.errors import (
    CommitFailedError,
    MappingIncompleteError,
    NoImportInProgressError,
    NothingToImportError,
    StoreError,
    ValidationError,
    NOTHING_IMPORTABLE,
    NOTHING_TO_IMPORT,
    unmapped_categories,
)
from famfin.domain.mapping import MappingResolver
from famfin.domain.staging import StagingStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a successful commit."""

    imported: int
    transaction_ids: list[int]
    balance_deltas: dict[int, Decimal]
    warnings: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)


def check_preconditions(batch: ImportBatch | None) -> ImportBatch:
    """Reject a batch that must not be committed.

    Raises:
        NoImportInProgressError: If nothing is staged
        NothingToImportError: If the batch has no transaction
        MappingIncompleteError: If a missing category is still unmapped
    """
    if batch is None:
        raise NoImportInProgressError()

    if not batch.transactions:
        raise NothingToImportError(NOTHING_IMPORTABLE if batch.errors else NOTHING_TO_IMPORT)

    pending = [m.name for m in batch.missing_categories if m.mapped_to_id is None]
    if pending:
        raise MappingIncompleteError(unmapped_categories(pending))

    return batch


def balance_deltas(drafts: list[TransactionDraft]) -> dict[int, Decimal]:
    """Sum signed amounts per account."""
    deltas: dict[int, Decimal] = {}
    for draft in drafts:
        deltas[draft.account_id] = deltas.get(draft.account_id, Decimal("0")) + draft.amount
    return deltas


class CommitEngine:
    """Writes a staged batch to the store and clears the staging entry.

    Balances are applied as increments of the batch's summed amounts rather
    than overwritten with the balance projected at parse time, so changes made
    to the account between parse and commit are preserved.
    """

    def __init__(self, db: Database, staging: StagingStore):
        self.db = db
        self.staging = staging

    def finalize(
        self, batch: ImportBatch, user_id: str, workspace_id: int
    ) -> tuple[list[TransactionDraft], list[str]]:
        """Turn candidate rows into drafts with their final category.

        Returns:
            Tuple of (drafts, dropped) where dropped describes rows left out
            because no category could be determined
        """
        resolver = MappingResolver(batch)
        drafts = []
        dropped = []

        for txn in batch.transactions:
            category_id = resolver.category_for(txn)
            if category_id is None:
                message = f"Linha {txn.row_number}: categoria '{txn.original_category_name}' sem mapeamento."
                logger.error("Dropping row %d at commit: no category for %r", txn.row_number, txn.original_category_name)
                dropped.append(message)
                continue

            drafts.append(
                TransactionDraft(
                    workspace_id=workspace_id,
                    user_id=user_id,
                    account_id=txn.resolved_account_id,
                    category_id=category_id,
                    name=txn.name,
                    amount=txn.amount,
                    date=txn.date,
                    description=txn.description,
                )
            )

        return drafts, dropped

    def commit(self, user_id: str, workspace_id: int) -> CommitResult:
        """Commit the staged batch.

        Args:
            user_id: Importing user, recorded on every transaction
            workspace_id: Workspace the transactions belong to

        Returns:
            CommitResult with the imported count and non-fatal warnings

        Raises:
            ImportPipelineError: If a precondition fails; the store is untouched
            CommitFailedError: If the store rejects the write; the batch stays staged
        """
        batch = check_preconditions(self.staging.load())
        if batch.workspace_id is not None and batch.workspace_id != workspace_id:
            raise ValidationError(
                f"Staged import belongs to workspace {batch.workspace_id}, not {workspace_id}"
            )

        drafts, dropped = self.finalize(batch, user_id, workspace_id)
        if not drafts:
            raise NothingToImportError(NOTHING_IMPORTABLE)

        deltas = balance_deltas(drafts)
        try:
            transaction_ids = self.db.apply_import(drafts, deltas)
        except StoreError as e:
            logger.exception("Import commit failed, keeping staged batch")
            raise CommitFailedError(f"Erro ao importar transações: {e}") from e

        self.staging.clear()
        logger.info("Imported %d transactions into account(s) %s", len(drafts), sorted(deltas))

        return CommitResult(
            imported=len(drafts),
            transaction_ids=transaction_ids,
            balance_deltas=deltas,
            warnings=[error.message for error in batch.errors],
            dropped=dropped,
        )
