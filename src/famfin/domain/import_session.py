"""State machine driving one bulk import from upload to commit."""

import logging
from enum import Enum
from typing import Optional

from famfin.domain.commit import CommitEngine, CommitResult, check_preconditions
from famfin.domain.csv_parser import build_import_batch
from famfin.domain.entities import Account, Category, ImportBatch, TransactionKind
from famfin.domain.errors import (
    CommitFailedError,
    InvalidTransitionError,
    NoImportInProgressError,
)
from famfin.domain.mapping import MappingResolver
from famfin.domain.staging import StagingStore

logger = logging.getLogger(__name__)


class ImportState(str, Enum):
    UPLOADED = "uploaded"
    PARSED = "parsed"
    MAPPING = "mapping"
    READY = "ready"
    COMMITTING = "committing"
    COMMITTED = "committed"
    FAILED = "failed"


# Cancel is handled separately: allowed from any state before COMMITTING.
TRANSITIONS: dict[ImportState, frozenset[ImportState]] = {
    ImportState.UPLOADED: frozenset({ImportState.PARSED}),
    ImportState.PARSED: frozenset({ImportState.MAPPING, ImportState.READY}),
    ImportState.MAPPING: frozenset({ImportState.MAPPING, ImportState.READY, ImportState.PARSED}),
    ImportState.READY: frozenset({ImportState.READY, ImportState.COMMITTING, ImportState.PARSED}),
    ImportState.COMMITTING: frozenset({ImportState.COMMITTED, ImportState.FAILED}),
    ImportState.COMMITTED: frozenset(),
    ImportState.FAILED: frozenset({ImportState.READY, ImportState.PARSED}),
}


class ImportSession:
    """One user's import, from upload through mapping to commit.

    The session holds no state that is not also in the staging store, so a
    new session created with the same store can resume where another left off.
    """

    def __init__(self, staging: StagingStore, engine: CommitEngine):
        self.staging = staging
        self.engine = engine
        self.state = ImportState.UPLOADED
        self.batch: Optional[ImportBatch] = None

    def _transition(self, target: ImportState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Cannot move import from '{self.state.value}' to '{target.value}'"
            )
        logger.debug("Import session %s -> %s", self.state.value, target.value)
        self.state = target

    def _settle(self) -> None:
        """Move to MAPPING or READY depending on the batch's mapping state."""
        if self.batch is not None and self.batch.is_commit_ready():
            self._transition(ImportState.READY)
        else:
            self._transition(ImportState.MAPPING)

    def stage(
        self,
        content: str,
        account: Account,
        accounts: list[Account],
        categories: list[Category],
        workspace_id: Optional[int] = None,
        source_name: Optional[str] = None,
    ) -> ImportBatch:
        """Parse an upload and stage it, replacing any staged batch."""
        if self.state in (ImportState.COMMITTING, ImportState.COMMITTED):
            raise InvalidTransitionError(f"Cannot stage a new file while import is '{self.state.value}'")

        batch = build_import_batch(
            content,
            account,
            accounts,
            categories,
            workspace_id=workspace_id,
            source_name=source_name,
        )
        self.staging.save(batch)
        self.batch = batch
        logger.info(
            "Staged %d transactions, %d errors, %d missing categories",
            len(batch.transactions),
            len(batch.errors),
            len(batch.missing_categories),
        )

        self._transition(ImportState.PARSED)
        self._settle()
        return batch

    def resume(self) -> ImportBatch:
        """Load the staged batch for the confirmation step.

        Raises:
            NoImportInProgressError: If nothing is staged
        """
        batch = self.staging.load()
        if batch is None:
            raise NoImportInProgressError()

        self.batch = batch
        self.state = ImportState.UPLOADED
        self._transition(ImportState.PARSED)
        self._settle()
        return batch

    def set_mapping(self, category_name: str, kind: TransactionKind, category_id: int) -> bool:
        """Map a missing category and persist the updated batch."""
        if self.state not in (ImportState.MAPPING, ImportState.READY):
            raise InvalidTransitionError(f"Cannot map categories while import is '{self.state.value}'")

        resolver = MappingResolver(self.batch)
        changed = resolver.set_mapping(category_name, kind, category_id)
        if changed:
            self.batch = resolver.batch
            self.staging.save(self.batch)
        self._settle()
        return changed

    def is_complete(self) -> bool:
        return self.batch is not None and self.batch.is_commit_ready()

    def commit(self, user_id: str, workspace_id: int) -> CommitResult:
        """Commit the staged batch.

        Precondition failures leave the session where it was. A store failure
        moves it to FAILED; calling commit again retries from READY.
        """
        if self.state == ImportState.FAILED:
            self._transition(ImportState.READY)

        check_preconditions(self.batch)
        if self.state != ImportState.READY:
            raise InvalidTransitionError(f"Cannot commit while import is '{self.state.value}'")

        self._transition(ImportState.COMMITTING)
        try:
            result = self.engine.commit(user_id=user_id, workspace_id=workspace_id)
        except CommitFailedError:
            self._transition(ImportState.FAILED)
            raise
        except Exception:
            # Preconditions re-checked against the stored batch; nothing was written
            self.state = ImportState.READY
            raise

        self._transition(ImportState.COMMITTED)
        self.batch = None
        return result

    def cancel(self) -> None:
        """Abandon the import and clear the staging entry."""
        if self.state in (ImportState.COMMITTING, ImportState.COMMITTED):
            raise InvalidTransitionError(f"Cannot cancel import while '{self.state.value}'")

        self.staging.clear()
        self.batch = None
        logger.info("Import cancelled")
        self.state = ImportState.UPLOADED
